"""Structured logging for iblm.

Events are snake_case names with key/value context, rendered as JSON
lines in production or coloured console output during development.
While a session is open, every event (including those logged from
background hydration tasks) carries its session_id.

Defaults come from LoggingSettings:
    IBLM_LOG_LEVEL=DEBUG
    IBLM_LOG_JSON_OUTPUT=true
"""

import logging
import sys
from typing import Any

import structlog

from iblm.config import LoggingSettings

__all__ = [
    "bind_session",
    "configure_logging",
    "get_logger",
    "unbind_session",
]

# Provider SDKs and their HTTP stack log every request at INFO
_QUIET_LOGGERS = ("httpx", "httpcore", "openai", "anthropic", "redis")


def _processors(json_output: bool, add_timestamp: bool) -> list[Any]:
    processors: list[Any] = []
    if add_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))
    processors += [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if json_output:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stdout.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            )
        )
    return processors


def configure_logging(
    level: int = logging.INFO,
    json_output: bool = False,
    add_timestamp: bool = True,
) -> None:
    """Configure structlog for the application.

    Args:
        level: Logging level (default: INFO)
        json_output: If True, output JSON lines; if False, console output
        add_timestamp: If True, add ISO timestamp to log entries
    """
    structlog.configure(
        processors=_processors(json_output, add_timestamp),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a configured structlog logger.

    Args:
        name: Logger name (usually __name__ of the calling module)
    """
    return structlog.get_logger(name)


def bind_session(session_id: str) -> None:
    """Attach session_id to every event logged in the current context.

    Tasks created afterwards inherit the binding.
    """
    structlog.contextvars.bind_contextvars(session_id=session_id)


def unbind_session() -> None:
    structlog.contextvars.unbind_contextvars("session_id")


_configured = False


def _ensure_configured() -> None:
    global _configured
    if _configured:
        return
    settings = LoggingSettings()
    level = logging.getLevelName(settings.level.upper())
    configure_logging(
        level=level if isinstance(level, int) else logging.INFO,
        json_output=settings.json_output,
    )
    _configured = True


_ensure_configured()
