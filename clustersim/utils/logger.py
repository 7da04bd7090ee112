
import logging
import sys
from typing import Optional
from pathlib import Path

PACKAGE_LOGGER = 'clustersim'
LOG_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

_initialized = False

def setup_logging(log_file: Optional[str] = None, level: int = logging.INFO, force: bool = False):
    """
    Attaches console and optional file handlers to the 'clustersim' logger.

    The root logger is left alone, so importing the library from another
    application does not change that application's logging. Entry points
    (runDetection, scripts/compare.py) call this with force=True to apply
    their --logpath after the import-time default.
    """
    global _initialized
    if _initialized and not force:
        return

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)

    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

    if log_file:
        try:
            Path(log_file).parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(formatter)
            package_logger.addHandler(file_handler)
        except OSError as e:
            package_logger.warning(f"Failed to create log file handler for {log_file}: {e}")

    _initialized = True

def get_logger(name: str) -> logging.Logger:
    """
    Returns a logger below 'clustersim' (script names such as "CompareScript"
    become "clustersim.CompareScript"), configuring defaults on first use.
    """
    if not _initialized:
        setup_logging()
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + '.'):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)
