"""Helpers for safe debug logging.

The login flow sends a visitor's student number and name to the server and
gets an id back. This module redacts those fields before they are emitted in
DEBUG logs.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel

_SENSITIVE_VALUE_KEYS: frozenset[str] = frozenset(
    {
        "user_name",
        "user_id",
        "username",
        "userid",
        "cookie",
        "authorization",
    }
)
_MAX_DEPTH = 20
_REDACTED = "<redacted>"


def _is_sensitive(key: object) -> bool:
    return str(key).lower() in _SENSITIVE_VALUE_KEYS


def redact_for_log(value: Any, *, max_string: int = 256, _depth: int = 0) -> Any:
    """Return a copy of *value* with visitor identity masked.

    Wire models are dumped first, so a ``LoginResponse`` can be passed as is.
    """
    if _depth > _MAX_DEPTH:
        return "<max-depth>"
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, str):
        return value if len(value) <= max_string else f"{value[:max_string]}…<truncated>"
    if isinstance(value, (bytes, bytearray)):
        return f"<bytes:{len(value)}b>"
    if isinstance(value, BaseModel):
        value = value.model_dump()

    nested = _depth + 1
    if isinstance(value, Mapping):
        return {
            str(key): _REDACTED if _is_sensitive(key) else redact_for_log(item, max_string=max_string, _depth=nested)
            for key, item in value.items()
        }
    if isinstance(value, Sequence):
        return [redact_for_log(item, max_string=max_string, _depth=nested) for item in value]
    return repr(value)
