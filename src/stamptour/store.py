"""Client-side key/value storage with per-entry expiry.

The page keeps its persisted state (visitor identity, the "guide shown"
marker, the collected-stamp record) in cookies. :class:`CookieStore` mirrors
that jar; :class:`MemoryStore` is a plain in-process store with the same
contract.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol
from urllib.parse import quote


def _utcnow() -> datetime:
    return datetime.now(UTC)


def is_expired(now: datetime, expires_at: datetime) -> bool:
    return now >= expires_at


class PersistentStore(Protocol):
    """Structural store interface consumed by the page components."""

    def get(self, key: str) -> str | None:
        ...

    def set(self, key: str, value: str, expiry_days: float) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


@dataclass(frozen=True)
class StoredEntry:
    value: str
    expires_at: datetime


class MemoryStore:
    """In-memory :class:`PersistentStore`; entries vanish once expired."""

    def __init__(self, *, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock
        self._entries: dict[str, StoredEntry] = {}

    def get(self, key: str) -> str | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if is_expired(self._clock(), entry.expires_at):
            del self._entries[key]
            return None
        return entry.value

    def set(self, key: str, value: str, expiry_days: float) -> None:
        expires_at = self._clock() + timedelta(days=expiry_days)
        self._entries[key] = StoredEntry(value=str(value), expires_at=expires_at)

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None


class CookieStore(MemoryStore):
    """``document.cookie``-style jar.

    Names and values are URI-encoded on write (``encodeURIComponent``) and
    values are returned still encoded on read, exactly as a cookie lookup
    sees them. Non-positive expiries delete the cookie.
    """

    def set(self, key: str, value: str, expiry_days: float) -> None:
        if expiry_days <= 0:
            self.delete(key)
            return
        super().set(quote(key, safe=""), quote(str(value), safe="!'()*-._~"), expiry_days)

    def get(self, key: str) -> str | None:
        return super().get(quote(key, safe=""))

    def delete(self, key: str) -> None:
        super().delete(quote(key, safe=""))

    def load(self, header: str) -> None:
        """Seed the jar from a ``name=value; name2=value2`` header, one day each."""
        for part in header.split(";"):
            name, sep, value = part.strip().partition("=")
            if sep and name:
                MemoryStore.set(self, name, value, 1)

    def cookie_header(self) -> str:
        parts: list[str] = []
        for name in list(self._entries):
            value = MemoryStore.get(self, name)
            if value is not None:
                parts.append(f"{name}={value}")
        return "; ".join(parts)
