from pydantic import BaseModel, Field


def _percent(used: float, total: float) -> float:
    if total <= 0:
        return 0.0
    return used * 100.0 / total


class MemorySample(BaseModel):
    """Physical memory snapshot for one loop iteration."""

    total_bytes: int = Field(..., ge=0, description="Total physical memory")
    used_bytes: int = Field(..., ge=0, description="Used physical memory")

    @property
    def used_percent(self) -> float:
        return _percent(self.used_bytes, self.total_bytes)


class DiskSample(BaseModel):
    """Space usage of a single mounted volume."""

    name: str = Field(..., description="Volume identifier, e.g. /dev/sda1")
    mountpoint: str = Field(..., description="Mount point, e.g. /")
    total_bytes: int = Field(..., ge=0, description="Total space of the volume")
    available_bytes: int = Field(
        ...,
        ge=0,
        description="Space available to unprivileged users",
    )

    @property
    def used_percent(self) -> float:
        return _percent(self.total_bytes - self.available_bytes, self.total_bytes)


class CpuLoadSample(BaseModel):
    """System load averages together with the number of logical CPUs."""

    one: float = Field(..., ge=0, description="1-minute load average")
    five: float = Field(..., ge=0, description="5-minute load average")
    fifteen: float = Field(..., ge=0, description="15-minute load average")
    logical_cpus: int = Field(..., ge=1, description="Number of logical CPUs")
