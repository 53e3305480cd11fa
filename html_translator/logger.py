"""
Logging for the HTML translator: one stdout handler on the package logger,
child loggers per pipeline stage.
"""

import logging
import sys


def setup_logger(level: int = logging.INFO) -> logging.Logger:
    """
    Configure the "html_translator" logger, or just change its level when it
    is already configured (run_translator.py does this for --verbose).
    """
    logger = logging.getLogger("html_translator")
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        ))
        logger.addHandler(handler)

    return logger


setup_logger()


def get_module_logger(module_name: str) -> logging.Logger:
    """Child logger, e.g. "html_translator.chunker"; output goes through the package handler."""
    return logging.getLogger(f"html_translator.{module_name}")
