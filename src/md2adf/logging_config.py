"""Logging setup for the md2adf CLI and API."""

import logging
from pathlib import Path

LOGGER_NAME = "md2adf"
DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(
    level: str = "WARNING",
    log_file: Path | None = None,
    format_string: str | None = None,
) -> logging.Logger:
    """Configure the root logger and return the package logger.

    Repeated calls replace the handlers installed by earlier calls instead of
    stacking them.

    Args:
        level: Level name (DEBUG, INFO, ...)
        log_file: Optional file to log to in addition to stderr
        format_string: Record format (default: DEFAULT_FORMAT)

    Returns:
        The ``md2adf`` logger
    """
    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_md2adf", False):
            root.removeHandler(handler)
            handler.close()

    for handler in handlers:
        handler.setFormatter(formatter)
        handler._md2adf = True  # type: ignore[attr-defined]
        root.addHandler(handler)

    root.setLevel(level.upper())
    return logging.getLogger(LOGGER_NAME)


def get_logger(name: str) -> logging.Logger:
    """Return a child of the package logger, e.g. ``md2adf.cli``."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
