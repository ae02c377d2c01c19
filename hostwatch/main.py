import logging
import os
import sys

from hostwatch.config import ConfigError, get_settings, load_env_file
from hostwatch.logging_config import configure_logging
from hostwatch.services.monitor import Monitor
from hostwatch.services.notifier import PushPlusNotifier
from hostwatch.services.sampler import Sampler

logger = logging.getLogger("hostwatch")


def main() -> None:
    """
    Entry point of the hostwatch agent.

    Loads the optional .env file, configures logging and runs the monitor
    loop until the process is terminated. A missing PUSHPLUS_TOKEN stops the
    process with exit status 1 before the loop is entered.
    """
    env_file = load_env_file()
    configure_logging(
        os.getenv("MY_LOG_LEVEL", "info"),
        os.getenv("MY_LOG_STYLE", "always"),
    )
    if env_file:
        logger.debug("Loaded environment from %s", env_file)
    else:
        logger.debug("No .env file found, using the process environment only")

    try:
        settings = get_settings()
    except ConfigError as exc:
        logger.critical("%s", exc)
        sys.exit(1)

    notifier = PushPlusNotifier(settings.pushplus_token, settings.pushplus_endpoint)
    monitor = Monitor(settings, Sampler(), notifier)
    monitor.run_forever()


if __name__ == "__main__":
    main()
