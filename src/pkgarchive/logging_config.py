# ABOUTME: Logging configuration setup for pkgarchive application
# ABOUTME: Configures console and file logging with rotation and exception handling
import logging
import logging.handlers
import sys
from pathlib import Path

from pkgarchive.config import Config


def setup_logging(
    log_level: str = "INFO",
    log_file: str | None = None,
    log_dir: str | None = None,
) -> None:
    """
    Set up logging configuration for pkgarchive.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Log file name (if None, logs to stderr only)
        log_dir: Directory for log files (if None, uses XDG state directory)
    """
    level = getattr(logging, log_level.upper())
    logger = logging.getLogger("pkgarchive")
    logger.setLevel(level)
    logger.handlers.clear()

    detailed_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    simple_formatter = logging.Formatter("%(levelname)s: %(message)s")

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(simple_formatter)
    logger.addHandler(console_handler)

    if log_file:
        if log_dir is None:
            log_path = Config().get_log_dir()
        else:
            log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        # Rotate to prevent unbounded growth
        file_handler = logging.handlers.RotatingFileHandler(
            log_path / log_file, maxBytes=10 * 1024 * 1024, backupCount=5  # 10MB
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(detailed_formatter)
        logger.addHandler(file_handler)

    def handle_exception(exc_type, exc_value, exc_traceback):
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_traceback)
            return

        logger.critical("Uncaught exception", exc_info=(exc_type, exc_value, exc_traceback))

    sys.excepthook = handle_exception

    logger.debug(f"Logging initialized at {log_level} level")
