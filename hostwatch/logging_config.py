import logging
import sys
from typing import Dict, List, Optional, Tuple

from rich.console import Console
from rich.logging import RichHandler

logger = logging.getLogger(__name__)

_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_STYLES = ("always", "auto", "never")

# env_logger-Namen, die es in logging nicht gibt
_LEVEL_ALIASES = {
    "trace": logging.DEBUG,
    "off": logging.CRITICAL + 1,
}


def _level_value(name: str) -> Optional[int]:
    name = name.strip().lower()
    if name in _LEVEL_ALIASES:
        return _LEVEL_ALIASES[name]
    value = logging.getLevelName(name.upper())
    if isinstance(value, int):
        return value
    return None


def parse_level_filter(spec: str) -> Tuple[int, Dict[str, int], List[str]]:
    """
    Parse a MY_LOG_LEVEL value such as "info" or "warn,hostwatch=debug".

    A bare level sets the root level, "name=level" sets the level of a single
    logger. Returns the root level, the per-logger levels and the parts that
    could not be understood. The root level defaults to INFO.
    """
    root_level = logging.INFO
    per_logger: Dict[str, int] = {}
    unknown: List[str] = []

    for part in spec.split(","):
        part = part.strip()
        if not part:
            continue

        if "=" in part:
            name, _, level_name = part.partition("=")
            value = _level_value(level_name)
            if not name.strip() or value is None:
                unknown.append(part)
                continue
            per_logger[name.strip().replace("::", ".")] = value
            continue

        value = _level_value(part)
        if value is None:
            unknown.append(part)
            continue
        root_level = value

    return root_level, per_logger, unknown


def build_handler(style: str) -> logging.Handler:
    """
    Create the log handler for the given MY_LOG_STYLE value.

    "always" forces coloured output even when stderr is not a terminal,
    "auto" lets rich decide, "never" writes plain text lines.
    Unknown styles behave like "auto".
    """
    style = style.strip().lower()
    if style not in _STYLES:
        style = "auto"

    if style == "never":
        handler: logging.Handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_PLAIN_FORMAT))
        return handler

    console = Console(stderr=True, force_terminal=True if style == "always" else None)
    return RichHandler(console=console, show_path=False, rich_tracebacks=True)


def configure_logging(level: str = "info", style: str = "always") -> None:
    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)

    root.addHandler(build_handler(style))

    root_level, per_logger, unknown = parse_level_filter(level)
    root.setLevel(root_level)
    for name, value in per_logger.items():
        logging.getLogger(name).setLevel(value)

    # httpx loggt jeden Request auf INFO, das enthält den Token
    logging.getLogger("httpx").setLevel(logging.WARNING)

    if unknown:
        logger.warning(
            "Ignoring unknown MY_LOG_LEVEL entries %s in %r",
            ", ".join(unknown),
            level,
        )
