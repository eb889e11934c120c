"""
errorapi.adapters.sentry
─────────────────────────
Sentry integration. Every reported error is forwarded in four synchronous
steps:

  1. resolve_project  find the project for the reporting server, create it
                      when the lookup fails
  2. fetch_keys       read the project's ingestion credentials
  3. build_payload    map the ErrorEvent onto Sentry's store payload
  4. send             POST the payload to the store endpoint

Nothing is cached between reports. The only compensating action is deleting
a freshly created project when its keys cannot be read.

Configure via: SentryAdapter(token=..., organisation=..., team=...)
               or SentryAdapter.from_config() (ERRORAPI_SENTRY_* env vars)
"""
from __future__ import annotations

from typing import Any, Callable

import httpx

from errorapi.adapters.base import BaseIntegrationAdapter
from errorapi.core.config import SENTRY_BASE_URL, ErrorApiConfig, get_config
from errorapi.core.errors import ConfigurationError, IntegrationError
from errorapi.core.http import ApiClient, is_success
from errorapi.core.logging import get_logger
from errorapi.core.serialize import serialize
from errorapi.helpers import project_slug, url_domain
from errorapi.models import ErrorEvent, ProjectCredentials, ResolvedProject

log = get_logger(__name__)

FingerprintFn = Callable[[ErrorEvent], list]

LOGGER_NAME = "luya.errorapi"
PLATFORM = "php"
SDK = {"name": "luya-errorapi", "version": "2.0.0"}
STORE_PROTOCOL_VERSION = 5

KEYS_ERROR_MESSAGE = (
    "The request for organisation key went wrong, "
    "maybe invalid sentry api credentials provided?"
)


def default_fingerprint(event: ErrorEvent) -> list:
    """Group events by error message and request URI."""
    return [event.error_message, event.request_uri]


class SentryAdapter(BaseIntegrationAdapter):
    """
    Forwards error events to sentry.io, creating one project per server.

    Usage::

        adapter = SentryAdapter(token="...", organisation="acme", team="backend")
        adapter.on_create(event)    # → True when Sentry accepted the event

    A custom fingerprint strategy receives the event and returns the list of
    strings Sentry groups by::

        SentryAdapter(..., fingerprint=lambda e: ["{{ default }}", e.request_uri])
    """

    def __init__(
        self,
        token: str | None = None,
        organisation: str | None = None,
        team: str | None = None,
        *,
        fingerprint: FingerprintFn | None = None,
        base_url: str = SENTRY_BASE_URL,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        missing = [
            name
            for name, value in (("token", token), ("organisation", organisation), ("team", team))
            if not value or not str(value).strip()
        ]
        if missing:
            raise ConfigurationError(
                "The sentry adapter token, team and organisation property can not be empty.",
                missing=missing,
            )

        self.token = token
        self.organisation = organisation
        self.team = team
        self._fingerprint: FingerprintFn = fingerprint or default_fingerprint
        self._api = ApiClient(base_url, token=token, timeout=timeout, client=client)

    @classmethod
    def from_config(
        cls,
        config: ErrorApiConfig | None = None,
        **kwargs: Any,
    ) -> "SentryAdapter":
        """
        Build an adapter from ERRORAPI_SENTRY_* settings.

        ERRORAPI_SENTRY_BASE_URL moves both the management API and event
        ingestion (the store endpoint), e.g. to a self-hosted Sentry.
        """
        config = config or get_config()
        return cls(
            config.sentry_token,
            config.sentry_organisation,
            config.sentry_team,
            base_url=config.sentry_base_url,
            timeout=config.http_timeout,
            **kwargs,
        )

    # ── Project resolution ────────────────────────────────────────────────────

    def generate_project_slug(self, event: ErrorEvent) -> str:
        return project_slug(event.server_name)

    def resolve_project(self, event: ErrorEvent) -> ResolvedProject:
        """Find the project for the event's server, creating it if the lookup fails."""
        name = url_domain(event.server_name)
        slug = self.generate_project_slug(event)

        lookup = self._api.get(f"/api/0/projects/{self.organisation}/{slug}/")
        if is_success(lookup):
            return ResolvedProject(slug=slug, name=name)

        created = self._api.post(
            f"/api/0/teams/{self.organisation}/{self.team}/projects/",
            json={"name": name, "slug": slug},
        )
        if is_success(created):
            log.info("sentry.project.created", organisation=self.organisation, slug=slug)
            return ResolvedProject(slug=slug, name=name, created=True)

        log.warning(
            "sentry.project.create_failed",
            organisation=self.organisation,
            slug=slug,
            status=created.status_code if created is not None else None,
        )
        return ResolvedProject(slug=slug, name=name)

    # ── Keys ──────────────────────────────────────────────────────────────────

    def fetch_keys(self, project: ResolvedProject) -> ProjectCredentials:
        """
        Return the first key of *project*. Raises IntegrationError when the
        keys cannot be read; a project created for this report is deleted first.
        """
        path = f"/api/0/projects/{self.organisation}/{project.slug}/"
        response = self._api.get(f"{path}keys/")
        credentials = _first_key(response) if is_success(response) else None
        if credentials is not None:
            return credentials

        log.warning(
            "sentry.keys.failed",
            organisation=self.organisation,
            slug=project.slug,
            status=response.status_code if response is not None else None,
        )
        if project.created:
            # Outcome intentionally ignored.
            self._api.delete(path)
            log.info("sentry.project.deleted", organisation=self.organisation, slug=project.slug)

        raise IntegrationError(KEYS_ERROR_MESSAGE, slug=project.slug)

    # ── Payload ───────────────────────────────────────────────────────────────

    def get_fingerprint(self, event: ErrorEvent) -> list:
        return self._fingerprint(event)

    def generate_stack_trace_frames(self, event: ErrorEvent) -> list[dict[str, Any]]:
        return [
            {
                "filename": entry.file,
                "function": entry.function,
                "lineno": entry.line,
                "context_line": entry.context_line,
                "pre_context": entry.pre_context,
                "post_context": entry.post_context,
                "abs_path": entry.abs_path,
            }
            for entry in event.trace
        ]

    def generate_context(self, event: ErrorEvent) -> dict[str, Any]:
        contexts: dict[str, Any] = {}

        if event.client is not None:
            contexts["os"] = {
                "version": event.client.os_version,
                "name": event.client.os_name,
                "type": "os",
            }
            contexts["browser"] = {
                "version": event.client.browser_version,
                "name": event.client.browser_name,
                "type": "browser",
            }

        if event.php_version:
            contexts["runtime"] = {
                "version": event.php_version,
                "type": "runtime",
                "name": PLATFORM,
            }

        return contexts

    def build_payload(
        self,
        event: ErrorEvent,
        credentials: ProjectCredentials | None = None,
    ) -> dict[str, Any]:
        """
        Map *event* onto Sentry's store payload.

        Top-level keys with an empty value are dropped; nested values are kept
        as they are. *credentials* is accepted for callers that build and send
        in one place, the payload itself never contains them.
        """
        payload = {
            "transaction": event.file,
            "server_name": event.server_name,
            "release": event.app_version,
            "metadata": {
                "value": event.error_message,
                "filename": event.file,
            },
            "fingerprint": self.get_fingerprint(event),
            "logger": LOGGER_NAME,
            "platform": PLATFORM,
            "sdk": dict(SDK),
            "environment": event.yii_env,
            "level": "error",
            "contexts": self.generate_context(event),
            "tags": {
                "luya_version": event.luya_version,
                "php_version": event.php_version,
                "yii_version": event.yii_version,
                "app_version": event.app_version,
                "file": event.file,
                "url": event.get_server("SCRIPT_URI"),
            },
            "user": {
                "ip_address": event.ip,
            },
            "extra": {
                "request_uri": event.request_uri,
                "line": event.line,
                "post": event.post,
                "get": event.get,
                "server": event.server,
                "session": event.session,
                "yii_debug": event.yii_debug,
                "yii_env": event.yii_env,
                "http_status_code": event.status_code,
                "exception_name": event.exception_name,
            },
            "exception": {
                "values": [
                    {
                        "type": event.exception_class_name,
                        "value": event.error_message,
                        "stacktrace": {
                            "frames": self.generate_stack_trace_frames(event),
                        },
                    }
                ]
            },
        }
        return {key: value for key, value in payload.items() if value}

    # ── Submission ────────────────────────────────────────────────────────────

    def store_url(self, credentials: ProjectCredentials) -> str:
        return (
            f"{self._api.base_url}/api/{credentials.id}/store/"
            f"?sentry_version={STORE_PROTOCOL_VERSION}"
            f"&sentry_key={credentials.public_key}"
            f"&sentry_secret={credentials.secret_key}"
        )

    def send(self, credentials: ProjectCredentials, payload: dict[str, Any]) -> bool:
        """POST *payload* to the project's store endpoint. True iff Sentry answered 2xx."""
        response = self._api.post(
            self.store_url(credentials),
            content=serialize(payload),
            authenticated=False,
        )
        if is_success(response):
            return True
        log.warning(
            "sentry.store.failed",
            project_id=credentials.id,
            status=response.status_code if response is not None else None,
        )
        return False

    # ── Integration hook ──────────────────────────────────────────────────────

    def on_create(self, event: ErrorEvent) -> bool:
        project = self.resolve_project(event)
        credentials = self.fetch_keys(project)
        return self.send(credentials, self.build_payload(event, credentials))

    report = on_create

    def close(self) -> None:
        self._api.close()


def _first_key(response: httpx.Response) -> ProjectCredentials | None:
    try:
        keys = response.json()
    except ValueError:
        return None
    if not isinstance(keys, list) or not keys or not isinstance(keys[0], dict):
        return None
    first = keys[0]
    try:
        return ProjectCredentials(
            id=str(first["projectId"]),
            public_key=first["public"],
            secret_key=first["secret"],
        )
    except KeyError:
        return None


__all__ = ["SentryAdapter", "FingerprintFn", "default_fingerprint"]
