"""Structured logging using structlog.

configure_logging() sets structlog up with:
- ISO-8601 timestamps
- Logger name and level
- Redaction of sensitive fields (passwords, tokens, DSNs)
- JSON rendering through the stdlib logging tree

Importing this module configures nothing, so a host application keeps its own
structlog and stdlib setup. The level comes from batch_upsert.config
(LOG_LEVEL, default INFO) unless passed explicitly.

Usage:
    >>> from batch_upsert.utils.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("upsert.statement_built", table="users", rows=3)
"""

import logging
import os
import re
from typing import Any, Dict, MutableMapping, Optional

import structlog
from structlog.types import EventDict, Processor

from batch_upsert.config import get_settings

SENSITIVE_PATTERNS = [
    re.compile(r".*password.*", re.IGNORECASE),
    re.compile(r".*token.*", re.IGNORECASE),
    re.compile(r".*api_key.*", re.IGNORECASE),
    re.compile(r".*secret.*", re.IGNORECASE),
    re.compile(r"^(DATABASE_URL|dsn)$", re.IGNORECASE),
]

REDACTED_VALUE = "[REDACTED]"


def _is_sensitive(key: str) -> bool:
    return any(pattern.match(key) for pattern in SENSITIVE_PATTERNS)


def sanitize_for_logging(data: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``data`` with sensitive values replaced by [REDACTED].

    Nested dictionaries are sanitized recursively.

    Example:
        >>> sanitize_for_logging({"password": "secret123", "user": "admin"})
        {'password': '[REDACTED]', 'user': 'admin'}
    """
    sanitized: Dict[str, Any] = {}
    for key, value in data.items():
        if _is_sensitive(key):
            sanitized[key] = REDACTED_VALUE
        elif isinstance(value, dict):
            sanitized[key] = sanitize_for_logging(value)
        else:
            sanitized[key] = value
    return sanitized


def sanitization_processor(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> MutableMapping[str, Any]:
    """Structlog processor applying sanitize_for_logging to the event."""
    return sanitize_for_logging(dict(event_dict))


def _get_log_level() -> int:
    try:
        level_name = get_settings().LOG_LEVEL.upper()
    except Exception:
        # Settings may be invalid (bad env); logging must still come up
        level_name = os.getenv("LOG_LEVEL", "INFO").upper()

    return getattr(logging, level_name, logging.INFO)


def configure_logging(level: Optional[str] = None) -> None:
    """Route structlog through stdlib logging with JSON rendering.

    Nothing is configured on import; the host application (or the test
    suite) calls this once if it wants the package's JSON log format.

    Args:
        level: Level name; defaults to LOG_LEVEL from settings
    """
    log_level = (
        getattr(logging, level.upper(), logging.INFO) if level else _get_log_level()
    )
    logging.basicConfig(format="%(message)s", level=log_level)

    processors: list[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        sanitization_processor,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> Any:
    """Get a structlog BoundLogger for ``name`` (usually ``__name__``)."""
    return structlog.get_logger(name)


def bind_context(logger_name: Optional[str] = None, **kwargs: Any) -> Any:
    """Create a logger with context fields already bound.

    Example:
        >>> logger = bind_context(__name__, table="users", schema="public")
        >>> logger.info("upsert.batch_built", batch=0)
    """
    logger = structlog.get_logger(logger_name) if logger_name else structlog.get_logger()
    return logger.bind(**kwargs)
