"""
errorapi.core.redact
─────────────────────
Secret redaction for log output. The management API token travels in an
Authorization header and the ingestion credentials travel in the store URL
query string, so both are scrubbed before anything reaches a log sink.
"""
from __future__ import annotations

import re
from typing import Any

# ── Default redacted key names (case-insensitive) ─────────────────────────

_SENSITIVE_KEYS: frozenset[str] = frozenset({
    "password", "secret", "token", "api_key", "authorization",
    "secret_key", "sentry_secret", "sentry_key", "public_key",
    "cookie", "session",
})

# ── Regex patterns for inline scrubbing ───────────────────────────────────

_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    # Bearer tokens
    (re.compile(r"Bearer\s+[A-Za-z0-9\-._~+/]+=*", re.I), "Bearer [REDACTED]"),
    # Store URL credentials
    (re.compile(r"(sentry_key|sentry_secret)=[^&\s\"']+", re.I), r"\1=[REDACTED]"),
    # Generic key=value secrets
    (re.compile(r"(secret|token|api[_-]?key)\s*=\s*[^\s&\"']+", re.I), r"\1=[REDACTED]"),
]

REDACTED = "[REDACTED]"


# ── Public API ─────────────────────────────────────────────────────────────

def redact_dict(
    data: dict[str, Any],
    sensitive_keys: frozenset[str] | None = None,
    *,
    deep: bool = True,
) -> dict[str, Any]:
    """
    Return a copy of *data* with sensitive key values replaced by REDACTED
    and string values scrubbed. If *deep* is True, recurse into nested dicts.
    """
    keys = sensitive_keys if sensitive_keys is not None else _SENSITIVE_KEYS
    result: dict[str, Any] = {}
    for k, v in data.items():
        if isinstance(k, str) and k.lower() in keys:
            result[k] = REDACTED
        elif deep and isinstance(v, dict):
            result[k] = redact_dict(v, keys, deep=True)
        elif isinstance(v, str):
            result[k] = scrub_string(v)
        else:
            result[k] = v
    return result


def scrub_string(text: str) -> str:
    """Apply regex-based scrubbing to an arbitrary string."""
    for pattern, replacement in _PATTERNS:
        text = pattern.sub(replacement, text)
    return text


def structlog_redact_processor(
    logger: Any,
    method: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """
    structlog processor that redacts sensitive keys from the event dict.
    Add to the structlog processor chain before any serialisation step.
    """
    return redact_dict(event_dict)


__all__ = [
    "REDACTED",
    "redact_dict",
    "scrub_string",
    "structlog_redact_processor",
]
