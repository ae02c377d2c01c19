import logging
import time
from typing import Callable

import psutil

from hostwatch.config import Settings
from hostwatch.services.notifier import AlertDispatchError, PushPlusNotifier
from hostwatch.services.sampler import Sampler

logger = logging.getLogger(__name__)

# Fehler beim Auslesen einer Metrik, die den Loop nicht beenden dürfen
_COLLECTION_ERRORS = (psutil.Error, OSError)


class Monitor:
    """
    Periodically check memory, disk and CPU load against fixed thresholds.

    Each check runs independently: a collection failure or an alert in one
    check never affects the others. Every violation produces one alert
    attempt; there is no deduplication across iterations.
    """

    def __init__(
        self,
        settings: Settings,
        sampler: Sampler,
        notifier: PushPlusNotifier,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.settings = settings
        self.sampler = sampler
        self.notifier = notifier
        self._sleep = sleep

    def _alert(self, content: str) -> None:
        logger.warning("%s", content)
        try:
            self.notifier.send(content)
        except AlertDispatchError as exc:
            logger.error("Failed to send alert: %s", exc)

    def check_memory(self) -> int:
        try:
            sample = self.sampler.sample_memory()
        except _COLLECTION_ERRORS as exc:
            logger.error("Failed to read memory usage: %s", exc)
            return 0

        percent = sample.used_percent
        threshold = self.settings.memory_threshold_percent
        logger.debug("Memory used %.2f%% (threshold %.2f%%)", percent, threshold)
        if percent > threshold:
            self._alert(f"Memory used over {percent:.2f}% - alert by Dawn.")
            return 1
        return 0

    def check_disks(self) -> int:
        try:
            samples = self.sampler.sample_disks()
        except _COLLECTION_ERRORS as exc:
            logger.error("Failed to enumerate disks: %s", exc)
            return 0

        threshold = self.settings.disk_threshold_percent
        alerts = 0
        for disk in samples:
            percent = disk.used_percent
            logger.debug(
                "Disk %s (%s) used %.2f%% (threshold %.2f%%)",
                disk.name,
                disk.mountpoint,
                percent,
                threshold,
            )
            if percent > threshold:
                self._alert(f"disk {disk.name} usage over - {percent:.2f}% - alert by Dawn.")
                alerts += 1
        return alerts

    def check_cpu_load(self) -> int:
        try:
            load = self.sampler.sample_cpu_load()
        except _COLLECTION_ERRORS as exc:
            logger.error("Failed to read CPU load: %s", exc)
            return 0

        # Auslöser ist nur der 15-Minuten-Wert, 1 und 5 werden nur gemeldet
        limit = load.logical_cpus * self.settings.cpu_load_factor
        logger.debug(
            "Load average %.2f %.2f %.2f on %d CPUs (limit %.2f)",
            load.one,
            load.five,
            load.fifteen,
            load.logical_cpus,
            limit,
        )
        if load.fifteen > limit:
            self._alert(
                f"CPU load average too high: {load.one:.2f} {load.five:.2f} "
                f"{load.fifteen:.2f} - alert by Dawn."
            )
            return 1
        return 0

    def run_once(self) -> int:
        """Run all three checks once and return the number of alert attempts."""
        logger.info(
            "Check system schedule every %s ...",
            _format_interval(self.settings.check_interval_seconds),
        )
        alerts = self.check_memory()
        alerts += self.check_disks()
        alerts += self.check_cpu_load()
        return alerts

    def run_forever(self) -> None:
        while True:
            self.run_once()
            self._sleep(self.settings.check_interval_seconds)


def _format_interval(seconds: float) -> str:
    if seconds >= 60 and seconds % 60 == 0:
        return f"{int(seconds // 60)}m"
    return f"{seconds:g}s"
