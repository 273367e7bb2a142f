import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from app.utils.logging_redaction import install_redaction_filter


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(
    level: str = "INFO",
    log_file: str = "",
    max_bytes: int = 10_485_760,
    backup_count: int = 5,
) -> None:
    """
    Configure centralized application logging.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backup_count)
        )

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
    install_redaction_filter()

    # Reduce noisy loggers
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("apscheduler").setLevel(logging.WARNING)
