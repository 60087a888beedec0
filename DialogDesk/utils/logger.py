"""Logging utilities."""

import logging
from datetime import date
from pathlib import Path
from typing import Optional

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
ROOT_LOGGER_NAME = "DialogDesk"


def get_logger(name: str) -> logging.Logger:
    """Return a module logger under the package namespace."""
    return logging.getLogger(name)


def log_file_path(log_dir: str | Path, day: Optional[date] = None) -> Path:
    """Daily log file, e.g. logs/2024-05-01.log."""
    return Path(log_dir) / f"{(day or date.today()).isoformat()}.log"


def configure_logging(log_dir: str | Path | None = None, level: str = "INFO") -> logging.Logger:
    """Attach stream and daily file handlers to the package logger once."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    if logger.handlers:
        return logger
    formatter = logging.Formatter(LOG_FORMAT)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if log_dir is not None:
        path = log_file_path(log_dir)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
    return logger


def shorten(text: str, limit: int = 80) -> str:
    """Single-line preview of user text for log messages."""
    flat = " ".join(str(text).split())
    return flat if len(flat) <= limit else flat[: limit - 3] + "..."


__all__ = ["LOG_FORMAT", "configure_logging", "get_logger", "log_file_path", "shorten"]
