"""
Logging configuration.
"""
import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler

from app.core.config import settings

_CONFIGURED_FLAG = "_netmon_configured"


def setup_logging():
    """Configure application logging (console + rotating file)."""
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    logger = logging.getLogger()
    logger.setLevel(log_level)

    # Module reloads and test imports call this more than once
    if getattr(logger, _CONFIGURED_FLAG, False):
        return

    log_dir = Path(settings.LOG_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    ))

    file_handler = RotatingFileHandler(
        log_dir / "netmon_dashboard.log",
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,
    )
    file_handler.setLevel(log_level)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
    ))

    logger.addHandler(console_handler)
    logger.addHandler(file_handler)
    setattr(logger, _CONFIGURED_FLAG, True)
