"""
errorapi.core.logging
──────────────────────
Structured logs with levels and redaction. Adapters log dotted event names
(``sentry.project.created``) with key/value context.

Minimal stack: structlog (stdout JSON or console)
Configure via: ERRORAPI_LOG_LEVEL, ERRORAPI_LOG_FORMAT=json|console
"""
from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from errorapi.core.config import get_config
from errorapi.core.redact import structlog_redact_processor


# ── Configuration ─────────────────────────────────────────────────────────────

def _configure_structlog() -> None:
    config = get_config()
    log_level = config.log_level.upper()

    shared_processors: list[Any] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog_redact_processor,
    ]

    if config.log_format == "console":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level, logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    errorapi_logger = logging.getLogger("errorapi")
    errorapi_logger.addHandler(handler)
    errorapi_logger.setLevel(getattr(logging, log_level, logging.INFO))


# ── Public API ────────────────────────────────────────────────────────────────

_configured = False


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Return a structured logger bound to the given name.

    Usage:
        log = get_logger(__name__)
        log.info("sentry.project.created", slug="api-example-com")
    """
    global _configured
    if not _configured:
        _configure_structlog()
        _configured = True
    return structlog.get_logger(name or __name__)

