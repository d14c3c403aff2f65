import logging
import os
from typing import Optional

ENV_LOG_LEVEL = "CARGO_NEXT_LOG_LEVEL"
DEFAULT_LEVEL = "WARNING"

_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}


def parse_level(level: Optional[str]) -> int:
    if level is None:
        level = os.getenv(ENV_LOG_LEVEL, DEFAULT_LEVEL)
    lvl = str(level).upper()
    return _LEVELS.get(lvl, logging.WARNING)


def init_logging(level: Optional[str] = None) -> None:
    """Set up root logging for one cargo-next run.

    An explicit ``level`` wins over ``CARGO_NEXT_LOG_LEVEL``. Records go to
    stderr, leaving stdout for the version alone. A second call, or a host that
    already installed handlers, only gets its level adjusted.
    """
    lvl = parse_level(level)
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(
            level=lvl,
            format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
            datefmt="%H:%M:%S",
        )
    else:
        root.setLevel(lvl)


def get_logger(name: str) -> logging.Logger:
    """Named logger; configures the root first when nothing else has."""
    if not logging.getLogger().handlers:
        init_logging(os.getenv(ENV_LOG_LEVEL, DEFAULT_LEVEL))
    return logging.getLogger(name)
