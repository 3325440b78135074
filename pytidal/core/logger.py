"""
Logging configuration for pytidal.

Library modules only ever call get_logger(__name__); nothing is printed
unless the application configures logging. setup_logging() is the optional
one-call setup for scripts using the client:
    - Console: colored level names (colorama), compact format
    - log_file: every record of the pytidal hierarchy (DEBUG and above)
    - error_file: only ERROR and CRITICAL records

Usage:
    from pytidal.core.logger import setup_logging, get_logger

    setup_logging("DEBUG", log_file=Path("tidal.log"))  # once at startup
    logger = get_logger(__name__)

    logger.debug("GET /artists/37312")
"""

import logging
import sys
from pathlib import Path
from typing import TextIO

import colorama
from colorama import Back, Fore, Style


# Root of the library's logger hierarchy
LOGGER_NAME = "pytidal"

# Log format for file output (detailed with timestamp)
FILE_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Log format for console output (compact)
CONSOLE_LOG_FORMAT = "%(levelname)s: %(message)s"

# Third-party loggers that are too chatty at DEBUG
EXTERNAL_LOGGERS = ("aiohttp.access", "aiohttp.client", "aiohttp.internal", "asyncio")


class ColoredConsoleFormatter(logging.Formatter):
    """
    Formatter that colors the level name for terminal output.

    Colors:
        - DEBUG: Cyan
        - INFO: Green
        - WARNING: Yellow
        - ERROR: Red
        - CRITICAL: Bright red on white
    """

    LEVEL_COLORS = {
        logging.DEBUG: Fore.CYAN,
        logging.INFO: Fore.GREEN,
        logging.WARNING: Fore.YELLOW,
        logging.ERROR: Fore.RED,
        logging.CRITICAL: Fore.RED + Back.WHITE + Style.BRIGHT,
    }

    def __init__(self, fmt: str = CONSOLE_LOG_FORMAT, use_colors: bool = True) -> None:
        super().__init__(fmt)
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        if not self.use_colors or record.levelno not in self.LEVEL_COLORS:
            return super().format(record)

        # Work on a copy so other handlers see the plain level name
        record_copy = logging.makeLogRecord(record.__dict__)
        color = self.LEVEL_COLORS[record.levelno]
        record_copy.levelname = f"{color}{record.levelname}{Style.RESET_ALL}"
        return super().format(record_copy)


class ErrorOnlyFilter(logging.Filter):
    """
    Filter that only allows ERROR and CRITICAL level records.

    Used by the error log file handler to exclude DEBUG, INFO, and WARNING.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= logging.ERROR


def setup_logging(
    level: str = "INFO",
    log_file: Path | None = None,
    error_file: Path | None = None,
    console_output: bool = True,
    colored_output: bool = True,
    stream: TextIO = sys.stderr
) -> logging.Logger:
    """
    Configure the pytidal logger hierarchy.

    Only the "pytidal" logger is touched, so an application's own logging
    setup is left alone. Calling it again replaces the previous handlers.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               Unknown names fall back to INFO.
        log_file: Optional file receiving every record at DEBUG and above.
        error_file: Optional file receiving only ERROR and CRITICAL records.
        console_output: Whether to log to the console at all.
        colored_output: Whether console level names are colored.
        stream: Console stream, stderr by default.

    Returns:
        logging.Logger: The configured "pytidal" logger.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    package_logger = logging.getLogger(LOGGER_NAME)
    package_logger.setLevel(logging.DEBUG)  # Handlers decide what to keep

    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    if console_output:
        if colored_output:
            # Translate ANSI codes on Windows consoles
            colorama.just_fix_windows_console()
        console_handler = logging.StreamHandler(stream)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(ColoredConsoleFormatter(use_colors=colored_output))
        package_logger.addHandler(console_handler)

    for path, only_errors in ((log_file, False), (error_file, True)):
        if path is None:
            continue
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, mode="a", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, FILE_DATE_FORMAT))
        if only_errors:
            file_handler.addFilter(ErrorOnlyFilter())
        package_logger.addHandler(file_handler)

    for name in EXTERNAL_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    package_logger.debug(
        f"Logging initialized - Level: {level}, Console: {console_output}, File: {log_file}"
    )
    return package_logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: The logger name, typically __name__ of the calling module.
              This creates a hierarchy like 'pytidal.client'.

    Returns:
        logging.Logger: A logger under the "pytidal" hierarchy.
    """
    if name != LOGGER_NAME and not name.startswith(LOGGER_NAME + "."):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)
