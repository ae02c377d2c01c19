from pydantic import BaseModel, Field

UNKNOWN_OS = "Unknown OS"
UNKNOWN_HOSTNAME = "Unknown Hostname"


class HostIdentity(BaseModel):
    """OS name and hostname embedded in every alert message."""

    os_name: str = Field(UNKNOWN_OS, description="Operating system name, e.g. Ubuntu")
    hostname: str = Field(UNKNOWN_HOSTNAME, description="System hostname")

    def compose(self, content: str) -> str:
        return f"{self.os_name} - {self.hostname} - {content}"
