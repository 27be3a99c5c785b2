"""Logging setup for devpulse.

The package logs through the standard library ``logging`` module under the
``devpulse`` logger hierarchy. ``configure_logging`` installs one stream
handler on that hierarchy; library users who configure logging themselves
can skip it.
"""

import logging
import sys

_ROOT_LOGGER = "devpulse"
_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Status code classes mapped to the level used for request logs
_STATUS_LEVELS = {2: logging.INFO, 4: logging.WARNING, 5: logging.ERROR}


def get_logger(name: str) -> logging.Logger:
    """Return a logger inside the devpulse hierarchy.

    Args:
        name: Usually ``__name__`` of the calling module.
    """
    if name == _ROOT_LOGGER or name.startswith(_ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_ROOT_LOGGER}.{name}")


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """Attach a stream handler to the devpulse logger.

    Calling this more than once replaces the level but does not add a
    second handler.

    Args:
        level: Level name ("DEBUG", "INFO", ...) or number.

    Returns:
        The configured root devpulse logger.
    """
    root = logging.getLogger(_ROOT_LOGGER)
    if isinstance(level, str):
        level = level.upper()
    root.setLevel(level)
    if not any(getattr(h, "_devpulse", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._devpulse = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    return root


def level_for_status(status_code: int) -> int:
    """Map an HTTP status code to a logging level.

    - 2xx -> INFO
    - 4xx -> WARNING
    - 5xx -> ERROR
    - anything else -> INFO
    """
    return _STATUS_LEVELS.get(status_code // 100, logging.INFO)


def log_exception(message: str, logger: logging.Logger | None = None) -> None:
    """Log message at ERROR level together with the active exception."""
    (logger or logging.getLogger(_ROOT_LOGGER)).exception(message)
