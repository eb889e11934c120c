"""
errorapi.core.http
───────────────────
HTTP primitives: success classification and a small
synchronous client for the Sentry management and ingestion APIs.

The client never raises on transport failure. Every call returns either the
httpx.Response or None, and callers classify the outcome with is_success().

Minimal stack: httpx (sync)
"""
from __future__ import annotations

from typing import Any

import httpx

from errorapi.core.logging import get_logger

log = get_logger(__name__)


def is_success(response: httpx.Response | None) -> bool:
    """True iff a response was received and its status is 2xx."""
    return response is not None and response.is_success


# ── Client ────────────────────────────────────────────────────────────────

class ApiClient:
    """
    Blocking HTTP client with optional bearer authentication.

    Usage::

        client = ApiClient("https://sentry.io", token="abc")
        response = client.get("/api/0/projects/acme/api-example-com/")
        if is_success(response):
            ...
    """

    def __init__(
        self,
        base_url: str,
        *,
        token: str | None = None,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._token = token
        if client is None:
            client = httpx.Client(timeout=timeout) if timeout is not None else httpx.Client()
        self._client = client

    @property
    def base_url(self) -> str:
        return self._base_url

    def _build_headers(self, authenticated: bool) -> dict[str, str]:
        headers: dict[str, str] = {"Content-Type": "application/json"}
        if authenticated and self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def url(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        return f"{self._base_url}/{path.lstrip('/')}"

    def get(self, path: str, **kwargs: Any) -> httpx.Response | None:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> httpx.Response | None:
        return self.request("POST", path, **kwargs)

    def delete(self, path: str, **kwargs: Any) -> httpx.Response | None:
        return self.request("DELETE", path, **kwargs)

    def request(
        self,
        method: str,
        path: str,
        *,
        authenticated: bool = True,
        **kwargs: Any,
    ) -> httpx.Response | None:
        url = self.url(path)
        headers = {**self._build_headers(authenticated), **kwargs.pop("headers", {})}
        try:
            response = self._client.request(method, url, headers=headers, **kwargs)
        except httpx.HTTPError as exc:
            log.warning("http.request.failed", method=method, url=url, error=str(exc))
            return None
        log.debug("http.request", method=method, url=url, status=response.status_code)
        return response

    def close(self) -> None:
        self._client.close()


__all__ = ["ApiClient", "is_success"]
