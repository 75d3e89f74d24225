# utils/logger.py
import logging
import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()

# Get config from .env (with safe defaults)
LOG_DIR = Path(os.getenv("LOG_DIR", "logs"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE = Path(os.getenv("LOG_FILE", LOG_DIR / "bay_allocation.log"))

formatter = logging.Formatter(
    fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(filename)s:%(lineno)d | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)

# Shared by every logger; created on first get_logger() call
_handlers: List[logging.Handler] = []
_console_handler: Optional[logging.StreamHandler] = None


def _build_handlers() -> List[logging.Handler]:
    global _console_handler

    if _handlers:
        return _handlers

    LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(LOG_FILE, encoding="utf-8")
    file_handler.setLevel(LOG_LEVEL)
    file_handler.setFormatter(formatter)

    # Console shows INFO+ unless the CLI asks for less
    _console_handler = logging.StreamHandler()
    _console_handler.setLevel("INFO")
    _console_handler.setFormatter(formatter)

    _handlers.extend([file_handler, _console_handler])
    return _handlers


def set_console_level(level: str) -> None:
    """Change what reaches the console; the log file keeps LOG_LEVEL."""
    _build_handlers()
    _console_handler.setLevel(level.upper())


def get_logger(name: str = "bay_allocation") -> logging.Logger:
    """Return a configured logger instance."""
    logger = logging.getLogger(name)
    logger.setLevel(LOG_LEVEL)

    # Avoid duplicate handlers if called multiple times
    if not logger.handlers:
        for handler in _build_handlers():
            logger.addHandler(handler)

    return logger
