"""
errorapi.core.serialize
────────────────────────
JSON encoding for outgoing payloads. Values json cannot encode natively
(dates, decimals, arbitrary objects found in request data) fall back to str().
"""
from __future__ import annotations

import json

from pydantic import BaseModel


def serialize(obj: BaseModel | dict | list) -> bytes:
    """
    Serialize a Pydantic model, dict or list to UTF-8 JSON bytes.

    Usage:
        body = serialize(payload)           # → b'{"level": "error", ...}'
    """
    if isinstance(obj, BaseModel):
        return obj.model_dump_json().encode()
    return json.dumps(obj, default=str).encode()

