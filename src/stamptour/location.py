"""Page URL accessors."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import parse_qs, urlsplit


@dataclass(frozen=True)
class PageLocation:
    """Query string and fragment of the page URL."""

    query: str = ""
    hash: str = ""

    @classmethod
    def from_url(cls, url: str) -> PageLocation:
        parts = urlsplit(url)
        return cls(query=parts.query, hash=f"#{parts.fragment}" if parts.fragment else "")

    def parameter(self, name: str) -> str | None:
        """First value of query parameter *name*, URI-decoded, or ``None``."""
        values = parse_qs(self.query, keep_blank_values=True).get(name)
        return values[0] if values else None
