"""Logging setup for the editor service."""

from __future__ import annotations

import logging
import logging.handlers
import sys
from pathlib import Path

# Per-component levels applied after the root logger is configured
LOGGING_CONFIG = {
    "locale_table": logging.INFO,
    # Reduce noise from libraries
    "uvicorn.access": logging.WARNING,
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "asyncio": logging.ERROR,
}

CONSOLE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s - %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s (%(filename)s:%(lineno)d) - %(message)s"

_configured = False


def setup_logging(level: str = "INFO", log_file: Path | None = None, debug: bool = False) -> None:
    """
    Configure the root logger once per process.

    Repeated calls (one per create_app() in tests) are no-ops so handlers are
    not stacked.
    """
    global _configured
    if _configured:
        return

    root_level = logging.DEBUG if debug else logging.getLevelName(level.upper())
    if not isinstance(root_level, int):
        root_level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(root_level)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(root_level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
    root_logger.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root_logger.addHandler(file_handler)

    for logger_name, component_level in LOGGING_CONFIG.items():
        logging.getLogger(logger_name).setLevel(component_level)
    if debug:
        logging.getLogger("locale_table").setLevel(logging.DEBUG)

    _configured = True
    logging.getLogger(__name__).info(
        "Logging configured (level=%s, file=%s)",
        logging.getLevelName(root_level),
        log_file or "disabled",
    )
