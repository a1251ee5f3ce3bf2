"""
logging_config.py — Centralized Logging Configuration

Sets up Loguru as the single logging backend. Intercepts Python's stdlib
logging module so uvicorn and SQLAlchemy log records route through Loguru
with the same format and request context.

Business Rules:
- All logs go through Loguru (no print() or direct stdlib handlers)
- JSON format in production for machine parsing
- Human-readable format in development
- Request ID from middleware is included when available
- Optional log file rotates at 50MB with 7-day retention

Called by: product_api/main.py (create_app)
Depends on: product_api/config.py (log_level, environment, log_file)
"""

import logging
import sys

from loguru import logger

from .config import Settings, get_settings


def setup_logging(settings: Settings | None = None) -> None:
    """Configure Loguru and intercept stdlib logging.

    Safe to call more than once; each call replaces the previous handlers.
    """
    settings = settings or get_settings()
    logger.remove()
    logger.configure(extra={"request_id": "-"})

    log_level = settings.log_level.upper()

    if settings.is_production:
        logger.add(sys.stdout, level=log_level, format="{message}", serialize=True)
    else:
        logger.add(
            sys.stdout,
            level=log_level,
            format=(
                "<green>{time:HH:mm:ss}</green> | "
                "<level>{level: <8}</level> | "
                "<magenta>{extra[request_id]}</magenta> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
                "{message}"
            ),
            colorize=True,
        )

    if settings.log_file:
        logger.add(
            settings.log_file,
            level=log_level,
            rotation="50 MB",
            retention="7 days",
            compression="gz",
            serialize=True,
        )

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)

    for noisy in ("httpx", "httpcore", "uvicorn.access", "sqlalchemy.engine"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    logger.info("Logging configured level={} production={}", log_level, settings.is_production)


class _InterceptHandler(logging.Handler):
    """Forward stdlib records (uvicorn, SQLAlchemy, alembic) into Loguru.

    Maps the stdlib level name onto the matching Loguru level and reports
    the original call site instead of this handler.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # walk out of logging/__init__.py to the real caller
        frame, depth = logging.currentframe(), 0
        while frame and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )
