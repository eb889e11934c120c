"""
errorapi.core.errors
─────────────────────
Error taxonomy for the error API integrations. Every error carries a stable
code, a message that is safe to surface to end users, and internal detail
that is only ever logged.

Only two kinds escape an adapter: ConfigurationError (raised while the
adapter is being constructed) and IntegrationError (remote credentials could
not be obtained). Transport and submission failures are reported through
boolean results instead.
"""
from __future__ import annotations

from typing import Any


# ── Base error ────────────────────────────────────────────────────────────────

class ErrorApiError(Exception):
    """
    Base class for all errorapi errors. Every error has:
    - code: stable machine-readable string (snake_case)
    - user_message: safe to surface to end users
    - detail: internal context, never shown to users
    - whitelisted: True when user_message may be rendered verbatim
    """

    code: str = "internal_error"
    whitelisted: bool = False

    def __init__(
        self,
        user_message: str = "An unexpected error occurred.",
        *,
        code: str | None = None,
        detail: str | None = None,
        **metadata: Any,
    ) -> None:
        self.code = code or self.__class__.code
        self.user_message = user_message
        self.detail = detail or user_message
        self.metadata = metadata
        super().__init__(user_message)

    def to_dict(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.user_message,
            }
        }


# ── Typed error classes ───────────────────────────────────────────────────────

class ConfigurationError(ErrorApiError):
    """Misconfiguration detected while constructing an adapter."""
    code = "configuration_error"


class IntegrationError(ErrorApiError):
    """
    The remote service refused to hand out ingestion credentials.
    The message never contains credentials and may be shown to users.
    """
    code = "integration_error"
    whitelisted = True


class ValidationError(ErrorApiError):
    """An incoming error event did not match the expected schema."""
    code = "validation_error"

    def __init__(
        self,
        user_message: str = "Validation failed.",
        *,
        fields: dict | None = None,
        **metadata: Any,
    ) -> None:
        self.fields = fields or {}
        super().__init__(user_message, **metadata)

    def to_dict(self) -> dict:
        d = super().to_dict()
        if self.fields:
            d["error"]["fields"] = self.fields
        return d


__all__ = [
    "ErrorApiError",
    "ConfigurationError",
    "IntegrationError",
    "ValidationError",
]
