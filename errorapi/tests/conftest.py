"""
errorapi test configuration.

All HTTP traffic goes through httpx.MockTransport, so no network access is
required. Override routes per test through the ``sentry`` fixture.
"""
from __future__ import annotations

import os

import httpx
import pytest

# ── Environment defaults ──────────────────────────────────────────────────
# These must be set before any errorapi modules are imported.

os.environ.setdefault("ERRORAPI_LOG_LEVEL", "WARNING")


class FakeSentry:
    """
    Minimal stand-in for the Sentry API. Routes are keyed by
    ``(method, path)``; unknown routes answer 404. Every request is recorded.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], tuple[int, object] | Exception] = {}
        self.requests: list[httpx.Request] = []

    def route(self, method: str, path: str, status: int = 200, json=None) -> None:
        self.routes[(method, path)] = (status, json)

    def fail(self, method: str, path: str) -> None:
        self.routes[(method, path)] = httpx.ConnectError("connection refused")

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        result = self.routes.get((request.method, request.url.path))
        if result is None:
            return httpx.Response(404, json={"detail": "The requested resource does not exist"})
        if isinstance(result, Exception):
            raise result
        status, body = result
        return httpx.Response(status, json=body)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))

    def calls(self) -> list[tuple[str, str]]:
        return [(r.method, r.url.path) for r in self.requests]


# ── Fixtures ───────────────────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def reset_config():
    """Each test reads a fresh config so env changes do not leak."""
    from errorapi.core.config import _reset_config

    _reset_config()
    yield
    _reset_config()


@pytest.fixture
def sentry() -> FakeSentry:
    return FakeSentry()


@pytest.fixture
def adapter(sentry):
    from errorapi.adapters.sentry import SentryAdapter

    with SentryAdapter(
        token="t", organisation="org", team="team", client=sentry.client()
    ) as adapter:
        yield adapter


@pytest.fixture
def event():
    """A fully populated error event."""
    from errorapi.models import ErrorEvent

    return ErrorEvent.from_payload({
        "error_message": "Undefined index: id",
        "exception_name": "PHP Notice",
        "exception_class_name": "yii\\base\\ErrorException",
        "file": "/var/www/controllers/SiteController.php",
        "line": 42,
        "request_uri": "/site/view?id=1",
        "status_code": 500,
        "server_name": "api.example.com",
        "ip": "10.0.0.1",
        "post": {},
        "get": {"id": "1"},
        "server": {"SCRIPT_URI": "https://api.example.com/site/view"},
        "session": {},
        "app_version": "1.4.0",
        "luya_version": "1.0.20",
        "yii_version": "2.0.15",
        "php_version": "7.2.1",
        "yii_env": "prod",
        "yii_debug": False,
        "trace": [
            {
                "file": "a.php",
                "function": "f",
                "line": 10,
                "context_line": "$x = $y['id'];",
                "pre_context": ["<?php"],
                "post_context": ["return $x;"],
                "abs_path": "/var/www/a.php",
            },
            {"file": "b.php", "function": "g", "line": 20},
        ],
        "client": {
            "os_name": "macOS",
            "os_version": "10.14",
            "browser_name": "Firefox",
            "browser_version": "65.0",
        },
    })
