"""
errorapi.helpers
─────────────────
Pure string helpers used to turn a reporting server's name into a project
slug. None of them hold state; the same input always yields the same output.
"""
from __future__ import annotations

import re
import unicodedata
from urllib.parse import urlsplit

_SCHEME_RE = re.compile(r"^[a-z][a-z0-9+.\-]*://", re.I)

# A capital not preceded by a capital, or a capital followed by a lowercase
# letter, starts a new word ("myApp" → "my App", "HTTPServer" → "HTTP Server").
_WORD_BOUNDARY_RE = re.compile(r"(?<![A-Z])([A-Z])|([A-Z])(?=[a-z])")

_SLUG_STRIP_RE = re.compile(r"[^a-zA-Z0-9=\s—–-]+")
_SLUG_COLLAPSE_RE = re.compile(r"[=\s—–-]+")

_TRANSLITERATIONS = {"ä": "ae", "ö": "oe", "ü": "ue", "Ä": "Ae", "Ö": "Oe", "Ü": "Ue", "ß": "ss"}


def url_domain(url: str | None) -> str:
    """
    Return the host of *url* without a leading ``www.``.

    ``https://www.example.com/docs`` → ``example.com``; bare host names such
    as ``api.example.com`` are accepted as-is.
    """
    if not url:
        return ""
    url = url.strip()
    if not _SCHEME_RE.match(url):
        url = f"http://{url.lstrip('/')}"
    host = urlsplit(url).hostname or ""
    if host.startswith("www."):
        host = host[4:]
    return host


def camel2words(name: str, ucwords: bool = True) -> str:
    """
    Split a camel-cased or dotted token into space separated words.

    ``myApp.example-com`` → ``My App Example Com``
    """
    label = _WORD_BOUNDARY_RE.sub(lambda m: " " + m.group(0), name)
    for separator in ("-", "_", "."):
        label = label.replace(separator, " ")
    label = label.strip().lower()
    if ucwords:
        label = " ".join(word.capitalize() for word in label.split(" "))
    return label


def slugify(value: str, replacement: str = "-") -> str:
    """
    Return a lowercase, hyphen separated, URL-safe version of *value*.

    Idempotent: ``slugify(slugify(x)) == slugify(x)``.
    """
    for char, ascii_form in _TRANSLITERATIONS.items():
        value = value.replace(char, ascii_form)
    normalized = unicodedata.normalize("NFKD", value)
    value = "".join(char for char in normalized if not unicodedata.combining(char))
    value = _SLUG_STRIP_RE.sub("", value)
    value = _SLUG_COLLAPSE_RE.sub(replacement, value)
    return value.strip(replacement).lower()


def project_slug(server_name: str | None) -> str:
    """Derive the remote project slug for a reporting server name."""
    return slugify(camel2words(url_domain(server_name)))


__all__ = ["url_domain", "camel2words", "slugify", "project_slug"]
