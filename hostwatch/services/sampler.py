import logging
from typing import List

import psutil

from hostwatch.models.metrics import CpuLoadSample, DiskSample, MemorySample

logger = logging.getLogger(__name__)

# Minimum pause between two CPU readings so that the delta is meaningful
MINIMUM_CPU_UPDATE_INTERVAL = 0.2

# Read-only images and kernel pseudo filesystems, always "full"
EXCLUDED_FSTYPES = frozenset(
    {
        "squashfs",
        "iso9660",
        "udf",
        "rootfs",
        "sysfs",
        "proc",
        "devtmpfs",
        "cgroup",
        "cgroup2",
        "pstore",
        "rpc_pipefs",
    }
)


class Sampler:
    """
    Read memory, disk and CPU load metrics from the local host via psutil.

    One instance is owned by the monitor loop. Every call takes a fresh
    reading; nothing is cached between iterations.
    """

    def __init__(self, cpu_interval: float = MINIMUM_CPU_UPDATE_INTERVAL):
        self.cpu_interval = cpu_interval

    def sample_memory(self) -> MemorySample:
        memory = psutil.virtual_memory()
        return MemorySample(total_bytes=memory.total, used_bytes=memory.used)

    def sample_disks(self) -> List[DiskSample]:
        """
        Enumerate the mounted volumes and return one DiskSample per volume.

        A volume that cannot be read (e.g. a stale network mount or a removed
        device) is logged and skipped; the remaining volumes are still returned.
        Read-only images such as snap squashfs loops and optical media are
        not volumes in this sense and are left out.
        """
        samples: List[DiskSample] = []
        for partition in psutil.disk_partitions(all=False):
            if partition.fstype in EXCLUDED_FSTYPES:
                logger.debug("Skipping %s (%s)", partition.mountpoint, partition.fstype)
                continue

            try:
                usage = psutil.disk_usage(partition.mountpoint)
            except OSError as exc:
                logger.error(
                    "Failed to read disk usage for %s (%s): %s",
                    partition.device,
                    partition.mountpoint,
                    exc,
                )
                continue

            samples.append(
                DiskSample(
                    name=partition.device or partition.mountpoint,
                    mountpoint=partition.mountpoint,
                    total_bytes=usage.total,
                    available_bytes=usage.free,
                )
            )

        return samples

    def sample_cpu_load(self) -> CpuLoadSample:
        # blockiert für cpu_interval Sekunden
        psutil.cpu_percent(interval=self.cpu_interval)
        one, five, fifteen = psutil.getloadavg()

        return CpuLoadSample(
            one=one,
            five=five,
            fifteen=fifteen,
            logical_cpus=psutil.cpu_count(logical=True) or 1,
        )
