"""
webhook_gateway.observability.logging

Structured logging configuration for the gateway.

Responsibilities:
- Configure `structlog` for JSON logs on stdout.
- Provide a small wrapper for obtaining bound loggers.
- Redact bearer tokens before they reach a log line.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

_REDACTED_PREFIX_LEN = 4


def configure_logging(*, service_name: str, level: str) -> None:
    """
    Structured JSON logs, one event per line.
    """

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _add_service_name(service_name),
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def _add_service_name(service_name: str):
    def processor(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service_name)
        return event_dict

    return processor


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def redact_token(token: str | None) -> str:
    """
    Shorten a token to a prefix that identifies it in logs without disclosing it.
    """

    if not token:
        return "<none>"
    if len(token) <= _REDACTED_PREFIX_LEN:
        return "***"
    return f"{token[:_REDACTED_PREFIX_LEN]}***"


# --- Module Notes -----------------------------------------------------------
# Tokens are bearer credentials and registry keys at the same time. Every log call
# that mentions one goes through `redact_token`.
