# blocks_world_planner/utils/logging_utils.py

import logging
import sys

# Define standard logging levels
LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEFAULT_LEVEL = logging.INFO # Default level if not specified

def setup_logger(name: str, level: int = DEFAULT_LEVEL, log_file: str = None, log_format: str = DEFAULT_FORMAT):
    """
    Configures and returns a logger instance.

    Args:
        name (str): The name for the logger (e.g., __name__ for the module).
        level (int): The minimum logging level to output (e.g., logging.DEBUG, logging.INFO).
        log_file (str, optional): Path to a file to output logs. If None, only console output. Defaults to None.
        log_format (str, optional): The format string for log messages. Defaults to DEFAULT_FORMAT.

    Returns:
        logging.Logger: The configured logger instance.
    """
    logger = logging.getLogger(name)
    # Re-running setup for the same name replaces handlers instead of stacking them
    if logger.hasHandlers():
        logger.handlers.clear()

    logger.setLevel(level)

    formatter = logging.Formatter(log_format)

    # --- Console Handler ---
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # --- File Handler (Optional) ---
    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode='a')
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
            logger.debug(f"Logging configured. Console level: {logging.getLevelName(level)}, File output: {log_file}")
        except OSError as e:
            logger.error(f"Failed to set up file handler for {log_file}: {e}")
    else:
        logger.debug(f"Logging configured. Console level: {logging.getLevelName(level)}, No file output.")

    return logger


def set_logger_level(logger: logging.Logger, level: int):
    """Applies a level to a logger and all of its handlers."""
    logger.setLevel(level)
    for h in logger.handlers:
        h.setLevel(level)


def get_level_from_string(level_str: str) -> int:
    """Converts a log level string to a logging level constant."""
    return LOG_LEVELS.get(level_str.lower(), DEFAULT_LEVEL)
