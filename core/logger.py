"""
Centralized Logging Module for the Romaji Converter.

Every module logs through get_logger(__name__), which writes to:
- Console (INFO and above)
- File (romaji_converter.log, everything) in logs/ next to the code, or in
  the directory named by ROMAJI_CONVERTER_LOG_DIR
"""
import logging
import os
import sys

DEFAULT_LOG_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "logs")
LOG_DIR_ENV = "ROMAJI_CONVERTER_LOG_DIR"
LOG_FILE_NAME = "romaji_converter.log"

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(funcName)s() | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def log_file_path() -> str:
    """Resolved when a logger is first configured, so the variable can be set late."""
    log_dir = os.environ.get(LOG_DIR_ENV) or DEFAULT_LOG_DIR
    os.makedirs(log_dir, exist_ok=True)
    return os.path.join(log_dir, LOG_FILE_NAME)


def get_logger(name: str) -> logging.Logger:
    """
    Returns a configured logger instance.

    Args:
        name: Usually __name__ of the calling module.
    """
    logger = logging.getLogger(name)

    # Handlers are attached once per logger name
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG)

    file_handler = logging.FileHandler(log_file_path(), encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    return logger


def setup_exception_hook():
    """
    Installs a global exception hook that logs uncaught exceptions before exit.
    Call this once at startup.
    """
    crash_logger = get_logger("CRASH")

    def exception_hook(exc_type, exc_value, exc_tb):
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_tb)
            return
        crash_logger.critical("Uncaught exception!", exc_info=(exc_type, exc_value, exc_tb))
        sys.__excepthook__(exc_type, exc_value, exc_tb)

    sys.excepthook = exception_hook
