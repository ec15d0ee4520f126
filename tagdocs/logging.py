"""Logger hierarchy and handler setup for the tagdocs CLI."""

from __future__ import annotations

import logging
from pathlib import Path

PACKAGE_LOGGER = "tagdocs"
CONSOLE_FORMAT = "[tagdocs] %(levelname)s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``tagdocs`` or one of its children, e.g. ``tagdocs.indexing``."""
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}" if name else PACKAGE_LOGGER)


def _with_format(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def configure_logging(*, verbose: bool = False, log_file: Path | None = None) -> logging.Logger:
    """Send package records to stderr and, when ``log_file`` is given, append them to that file.

    Existing handlers are closed and replaced so repeated CLI invocations in one
    process do not duplicate output.
    """
    level = logging.DEBUG if verbose else logging.INFO
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    package_logger.propagate = False

    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    package_logger.addHandler(_with_format(logging.StreamHandler(), level, CONSOLE_FORMAT))
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        package_logger.addHandler(
            _with_format(logging.FileHandler(log_file, encoding="utf-8"), level, FILE_FORMAT)
        )
    return package_logger


__all__ = ["configure_logging", "get_logger"]
