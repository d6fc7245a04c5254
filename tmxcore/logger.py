"""
Centralized Logging Module for tmxcore.

Provides consistent logging across all modules with output to:
- Console (warnings about skipped TMX elements, version errors)
- File (logs/tmxcore.log, including per-unit DEBUG traces)
"""
import logging
import os
import sys

# Relative to the working directory, never inside an installed package;
# can be redirected, e.g. for CI runs
LOG_DIR = os.environ.get("TMXCORE_LOG_DIR") or os.path.join(os.getcwd(), "logs")

LOG_FILE_NAME = "tmxcore.log"

# Formatter with timestamp, level, module, and message
LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(funcName)s() | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str) -> logging.Logger:
    """
    Returns a configured logger instance.
    
    Args:
        name: Usually __name__ of the calling module.
        
    Returns:
        A logging.Logger instance configured for file and console output.
    """
    logger = logging.getLogger(name)
    
    # Avoid adding handlers multiple times
    if logger.handlers:
        return logger
    
    logger.setLevel(logging.DEBUG)
    
    # File Handler - captures everything (DEBUG and above)
    os.makedirs(LOG_DIR, exist_ok=True)
    file_handler = logging.FileHandler(os.path.join(LOG_DIR, LOG_FILE_NAME), encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    
    # Console Handler - only INFO and above for cleaner output
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    
    logger.addHandler(file_handler)
    logger.addHandler(console_handler)
    
    return logger
