import logging
import sys
from pathlib import Path
from typing import Optional, TextIO, Union

LOGGER_NAME = "noteclip"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
# DEBUG output names the line that logged, for tracing conversion fallbacks
DEBUG_FORMAT = "%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s"


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    format_string: Optional[str] = None,
    force: bool = False,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Configure the noteclip logger for the CLI or an embedding program.

    Diagnostics go to stderr by default so converted Markdown and block
    JSON on stdout stay machine-readable. At DEBUG level the format also
    carries the logging line number unless a format is given.

    Args:
        level: Level name, case-insensitive; unknown names fall back to INFO
        log_file: Also append records to this file
        format_string: Override the record format
        force: Replace handlers installed by an earlier call
        stream: Console stream (default: sys.stderr at call time)

    Returns:
        The "noteclip" logger
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    if format_string is None:
        format_string = DEBUG_FORMAT if numeric_level <= logging.DEBUG else DEFAULT_FORMAT
    formatter = logging.Formatter(format_string)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)

    if force or not logger.handlers:
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()

        console_handler = logging.StreamHandler(stream or sys.stderr)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        if log_file:
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setLevel(numeric_level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    logger.propagate = False

    return logger
