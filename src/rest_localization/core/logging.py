import logging
import sys
from typing import Any

import structlog


def _resolve_level(settings: Any) -> int:
    if settings.DEBUG:
        return logging.DEBUG
    level: int = logging.getLevelName(settings.LOG_LEVEL)
    return level


def setup_logging(*, json_logs: bool | None = None) -> None:
    """Route structlog events through stdlib logging.

    Local environments get colored console output, everything else gets one
    JSON object per line. ``json_logs`` overrides the environment choice.
    """
    # Deferred: the settings module imports the cultures package, which logs.
    from rest_localization.core.config import settings

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=_resolve_level(settings),
    )

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_logs is None:
        json_logs = settings.ENVIRONMENT != "local"

    processors: list[Any]
    if json_logs:
        processors = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [*shared_processors, structlog.dev.ConsoleRenderer(colors=True)]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
