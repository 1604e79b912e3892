"""Logging setup for the API process and scripts."""
import logging
import sys

from app.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
DATE_FMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str | None = None) -> None:
    """
    Configure the root logger once.
    Level defaults to settings.log_level; noisy third-party loggers are capped at WARNING.
    """
    resolved = (level or settings.log_level or "INFO").upper()
    root = logging.getLogger()
    if not any(getattr(h, "_procurement_handler", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FMT))
        handler._procurement_handler = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    root.setLevel(resolved)

    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.db_echo else logging.WARNING
    )
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
