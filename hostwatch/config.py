import os
from functools import lru_cache
from typing import Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, ValidationError

DEFAULT_PUSHPLUS_ENDPOINT = "https://www.pushplus.plus/send"


class ConfigError(RuntimeError):
    """Raised when the agent cannot start because of missing or invalid settings."""


class Settings(BaseModel):
    # PushPlus
    pushplus_token: str = Field(
        ...,
        min_length=1,
        description="Token for the PushPlus webhook (env PUSHPLUS_TOKEN)",
    )
    pushplus_endpoint: str = Field(
        default=DEFAULT_PUSHPLUS_ENDPOINT,
        description="Send endpoint of the PushPlus service",
    )

    # Schwellwerte
    memory_threshold_percent: float = Field(
        default=70.0,
        ge=0,
        le=100,
        description="Alert when used memory is strictly above this percentage",
    )
    disk_threshold_percent: float = Field(
        default=80.0,
        ge=0,
        le=100,
        description="Alert when a volume's used space is strictly above this percentage",
    )
    cpu_load_factor: float = Field(
        default=2.0,
        gt=0,
        description="Alert when the 15-minute load average exceeds factor * logical CPUs",
    )
    check_interval_seconds: float = Field(
        default=600.0,
        ge=0,
        description="Pause between two check iterations",
    )

    @classmethod
    def from_env(cls) -> "Settings":
        token = os.getenv("PUSHPLUS_TOKEN", "").strip()
        if not token:
            raise ConfigError("PUSHPLUS_TOKEN is not set, please set it in .env")

        # Nur gesetzte Variablen übergeben, sonst greifen die Defaults
        optional = {
            "pushplus_endpoint": os.getenv("PUSHPLUS_ENDPOINT"),
            "memory_threshold_percent": os.getenv("MEMORY_THRESHOLD_PERCENT"),
            "disk_threshold_percent": os.getenv("DISK_THRESHOLD_PERCENT"),
            "cpu_load_factor": os.getenv("CPU_LOAD_FACTOR"),
            "check_interval_seconds": os.getenv("CHECK_INTERVAL_SECONDS"),
        }
        values = {key: value for key, value in optional.items() if value}

        try:
            return cls(pushplus_token=token, **values)
        except ValidationError as exc:
            raise ConfigError(f"Invalid settings: {exc}") from exc


def load_env_file() -> Optional[str]:
    """
    Load a .env file from the working directory (or a parent) into os.environ.

    Variables that are already set are never overridden. A missing file is
    not an error. Returns the path of the loaded file, or None.
    """
    path = find_dotenv(usecwd=True)
    if not path:
        return None

    load_dotenv(path, override=False)
    return path


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
