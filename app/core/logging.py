"""Process-wide logging configuration."""

import logging
import sys

import structlog

from app.core.config import LogFormatEnum, settings

SIMPLE_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"


def json_formatter() -> structlog.stdlib.ProcessorFormatter:
    """Formatter rendering each stdlib record as a single JSON object per line.

    Keys passed through ``extra=`` are emitted at the top level.
    """
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.ExtraAdder(),
        ],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
    )


def setup_logging(level: str | None = None, log_format: LogFormatEnum | None = None) -> None:
    """Configure the root logger from settings.

    Safe to call more than once; existing handlers are replaced.
    """
    level = level or settings.log_level.value
    log_format = log_format or settings.log_format

    handler = logging.StreamHandler(sys.stdout)
    if log_format == LogFormatEnum.json:
        handler.setFormatter(json_formatter())
    else:
        handler.setFormatter(logging.Formatter(SIMPLE_FORMAT))

    logging.basicConfig(level=level, handlers=[handler], force=True)

    # SQL echo is controlled by settings.debug on the engine, keep the logger quiet otherwise
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
