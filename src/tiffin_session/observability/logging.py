"""
tiffin_session.observability.logging

Structured logging for the session core and the development credential store.

Responsibilities:
- Configure `structlog` JSON output tagged with the emitting service.
- Redact credentials (passwords, bearer tokens) from every event.
- Provide bound loggers for modules.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from typing import Any

import structlog

from tiffin_session.settings import Settings

REDACTED = "[redacted]"
SENSITIVE_KEYS = frozenset({"password", "token", "authorization", "jwt_secret"})


def redact_credentials(
    _: Any, __: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    for key in event_dict.keys() & SENSITIVE_KEYS:
        event_dict[key] = REDACTED
    return event_dict


def _add_service_name(service_name: str):
    def processor(
        _: Any, __: str, event_dict: MutableMapping[str, Any]
    ) -> MutableMapping[str, Any]:
        event_dict.setdefault("service", service_name)
        return event_dict

    return processor


def configure_logging(*, service_name: str, level: str) -> None:
    """
    One JSON event per line on stdout. Client and store processes share the format
    and differ only in `service`.
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
            redact_credentials,
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def configure_from_settings(settings: Settings, *, component: str | None = None) -> None:
    service = settings.service_name
    if component is not None:
        service = f"{service}-{component}"
    configure_logging(service_name=service, level=settings.log_level)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


# --- Module Notes -----------------------------------------------------------
# Redaction runs after contextvars are merged, so request-bound values are covered too.
