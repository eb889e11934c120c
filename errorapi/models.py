"""
errorapi.models
────────────────
Value types shared by the adapters.

ErrorEvent is the read-only view of one error reported by a LUYA/Yii
application. Adapters only read from it. ProjectCredentials and
ResolvedProject are transient results of talking to Sentry and are never
cached.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

from errorapi.core.validate import validate_input


class TraceEntry(BaseModel):
    """One stack trace entry as captured by the reporting application."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    file: str | None = None
    function: str | None = None
    line: int | None = None
    context_line: str | None = None
    pre_context: list[str] = Field(default_factory=list)
    post_context: list[str] = Field(default_factory=list)
    abs_path: str | None = None

    @field_validator("pre_context", "post_context", mode="before")
    @classmethod
    def none_to_list(cls, v: Any) -> Any:
        return [] if v is None else v


class ClientEnvironment(BaseModel):
    """Operating system and browser detected from the request's user agent."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    os_name: str | None = None
    os_version: str | None = None
    browser_name: str | None = None
    browser_version: str | None = None


class ErrorEvent(BaseModel):
    """An error reported to the error API."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    error_message: str | None = None
    exception_name: str | None = None
    exception_class_name: str | None = None
    file: str | None = None
    line: int | None = None
    request_uri: str | None = None
    status_code: int | None = None
    server_name: str | None = None
    ip: str | None = None

    post: dict[str, Any] = Field(default_factory=dict)
    get: dict[str, Any] = Field(default_factory=dict)
    server: dict[str, Any] = Field(default_factory=dict)
    session: dict[str, Any] = Field(default_factory=dict)

    app_version: str | None = None
    luya_version: str | None = None
    yii_version: str | None = None
    php_version: str | None = None
    yii_env: str | None = None
    yii_debug: bool | None = None

    trace: list[TraceEntry] = Field(default_factory=list)
    client: ClientEnvironment | None = None

    @field_validator("post", "get", "server", "session", mode="before")
    @classmethod
    def empty_to_dict(cls, v: Any) -> Any:
        # PHP json_encode renders an empty array as [], a missing session as null.
        return {} if v is None or v == [] else v

    def get_server(self, key: str) -> Any:
        """Return one entry of the server map, or None when absent."""
        return self.server.get(key)

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> "ErrorEvent":
        """Build an event from a decoded request body. Raises ValidationError."""
        return validate_input(cls, data)


@dataclass(frozen=True)
class ProjectCredentials:
    """Ingestion credentials of one Sentry project."""
    id: str
    public_key: str
    secret_key: str = field(repr=False)


@dataclass(frozen=True)
class ResolvedProject:
    """A project found or created for a reporting server."""
    slug: str
    name: str
    created: bool = False
