from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path


LOGGER_NAME = "pomolog"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s:%(filename)s:%(lineno)d] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _has_handler(logger: logging.Logger, handler_name: str) -> bool:
    return any(h.get_name() == handler_name for h in logger.handlers)


def get_logger(
    log_dir: Path | None = None,
    level: int = logging.INFO,
    max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 5,
    console: bool = False,
) -> logging.Logger:
    """Configures the package logger; safe to call more than once."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.propagate = False
    logger.setLevel(level)
    fmt = logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT)

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)

        # Rotating history across runs
        persistent_name = f"{LOGGER_NAME}:persistent"
        if not _has_handler(logger, persistent_name):
            persistent = RotatingFileHandler(
                filename=log_dir / f"{LOGGER_NAME}.log",
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
            persistent.setLevel(level)
            persistent.setFormatter(fmt)
            persistent.set_name(persistent_name)
            logger.addHandler(persistent)

        # Overwritten on every run
        latest_name = f"{LOGGER_NAME}:latest"
        if not _has_handler(logger, latest_name):
            latest = logging.FileHandler(log_dir / "latest.log", mode="w", encoding="utf-8")
            latest.setLevel(level)
            latest.setFormatter(fmt)
            latest.set_name(latest_name)
            logger.addHandler(latest)

    console_name = f"{LOGGER_NAME}:console"
    if console and not _has_handler(logger, console_name):
        stream = logging.StreamHandler()
        stream.setLevel(level)
        stream.setFormatter(fmt)
        stream.set_name(console_name)
        logger.addHandler(stream)

    return logger
