"""
logging_cfg.py
--------------
Centralized logging configuration for the EMG pointer client.

Features:
✔ Console logging (INFO+)
✔ Optional rotating file logging for persistent debug logs
✔ Uniform formatting across modules
✔ Optional colorized console output
"""

import copy
import logging
import logging.handlers
from pathlib import Path
from typing import Optional, Union

ROOT_LOGGER_NAME = "emg_pointer"

ENABLE_COLORS = True  # Toggle ANSI console colors


# ---------------------------------------------------
# Colored Log Formatter
# ---------------------------------------------------
class ColorFormatter(logging.Formatter):
    COLORS = {
        "DEBUG": "\033[37m",
        "INFO": "\033[36m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[91m",
    }
    RESET = "\033[0m"

    def format(self, record):
        level = record.levelname
        if ENABLE_COLORS and level in self.COLORS:
            # Other handlers share the record, so colour a copy.
            record = copy.copy(record)
            record.levelname = f"{self.COLORS[level]}{level}{self.RESET}"
        return super().format(record)


# ---------------------------------------------------
# Build Logger
# ---------------------------------------------------
def _build_logger():
    """Create and configure the package logger only once."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if logger.handlers:  # Already initialized
        return logger

    logger.setLevel(logging.DEBUG)

    # ---- Console ----
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)

    console_format = ColorFormatter(
        "[%(levelname)s] %(asctime)s - %(name)s - %(message)s",
        datefmt="%H:%M:%S"
    )
    console_handler.setFormatter(console_format)
    logger.addHandler(console_handler)

    logger.propagate = False
    return logger


def add_file_handler(log_file: Union[str, Path]) -> logging.Handler:
    """
    Attach a rotating file handler (DEBUG+) to the package logger.

    Calling it twice with the same path is a no-op and returns the
    existing handler.
    """
    logger = _build_logger()
    log_path = Path(log_file).resolve()

    for handler in logger.handlers:
        if isinstance(handler, logging.handlers.RotatingFileHandler) \
                and Path(handler.baseFilename) == log_path:
            return handler

    log_path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=3 * 1024 * 1024,    # 3 MB
        backupCount=5,
        encoding="utf-8"
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(funcName)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    ))
    logger.addHandler(file_handler)
    return file_handler


def configure_logging(log_file: Optional[Union[str, Path]] = None,
                      console_level: int = logging.INFO) -> logging.Logger:
    """Set console verbosity and optionally start logging to a file."""
    logger = _build_logger()
    for handler in logger.handlers:
        if type(handler) is logging.StreamHandler:
            handler.setLevel(console_level)
    if log_file:
        add_file_handler(log_file)
    return logger


# ---------------------------------------------------
# Public Access Function
# ---------------------------------------------------
def get_logger(module_name: str) -> logging.Logger:
    """
    Returns a logger instance bound to a module.

    Usage:
        from emg_pointer.utils.logging_cfg import get_logger
        log = get_logger(__name__)
        log.info("Hello!")
    """
    logger = _build_logger()
    if module_name == ROOT_LOGGER_NAME:
        return logger
    if module_name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(module_name)
    return logger.getChild(module_name)
