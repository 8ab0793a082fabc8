"""
Logging for readbulk.

Every module logs under the "readbulk" namespace. Progress messages
("Start merging subdirectory", "Reading <file>") are INFO records, details
such as column counts and type fallbacks are DEBUG records. Nothing is shown
until a handler is configured, either with readbulk.verbose() or with the
application's own logging setup.
"""

import logging
from typing import Optional, Union

from readbulk._exceptions import InvalidArgumentError

NAMESPACE = "readbulk"
DEFAULT_FORMAT = "%(levelname)s [%(name)s] %(message)s"

# verbose() argument -> logging level
VERBOSITY_LEVELS = {
    True: logging.INFO,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def get_logger(name: str) -> logging.Logger:
    """Logger inside the readbulk namespace."""
    if name == "__main__":
        return logging.getLogger(NAMESPACE)
    if not name.startswith(NAMESPACE):
        name = f"{NAMESPACE}.{name}"
    return logging.getLogger(name)


def setup_basic_logging(
    level: int = logging.INFO, format: Optional[str] = None
) -> None:
    """
    Print readbulk records to stderr at the given level.

    A stream handler is attached on the first call only. Later calls just
    move the logger and its handlers to the new level, so switching from
    INFO to DEBUG takes effect immediately.
    """
    logger = logging.getLogger(NAMESPACE)
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(format or DEFAULT_FORMAT))
        logger.addHandler(handler)

    for handler in logger.handlers:
        handler.setLevel(level)

    # Records are printed here, not again by the root logger
    logger.propagate = False


def disable_logging() -> None:
    """Drop every readbulk record, including errors."""
    logging.getLogger(NAMESPACE).setLevel(logging.CRITICAL + 1)


def set_verbosity(level: Union[bool, str] = True) -> None:
    """
    Apply a verbose() setting.

    Args:
        level: True or "info" for progress messages, "debug" for details,
            False to silence readbulk

    Raises:
        InvalidArgumentError: Unknown level
    """
    if level is False:
        disable_logging()
        return

    # 1 == True and lists are unhashable
    if not isinstance(level, (bool, str)) or level not in VERBOSITY_LEVELS:
        raise InvalidArgumentError(
            f"Invalid verbose level: {level!r}. Use True, 'info', 'debug', or False."
        )
    setup_basic_logging(level=VERBOSITY_LEVELS[level])
