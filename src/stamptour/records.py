"""Collected-stamp record codec.

The record is written out of band (by the scan flow) as a JSON array of stamp
ids, URI-encoded when it travels as a cookie.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from urllib.parse import unquote

from pydantic import TypeAdapter, ValidationError

from stamptour.exceptions import MalformedRecordError

_STAMP_ID_LIST: TypeAdapter[list[str]] = TypeAdapter(list[str])


@dataclass(frozen=True)
class CollectedStampRecord:
    """Ordered set of collected stamp ids."""

    stamp_ids: tuple[str, ...] = ()

    @classmethod
    def from_ids(cls, stamp_ids: Iterable[str]) -> CollectedStampRecord:
        # dict preserves first-seen order
        return cls(tuple(dict.fromkeys(stamp_ids)))

    def __iter__(self) -> Iterator[str]:
        return iter(self.stamp_ids)

    def __len__(self) -> int:
        return len(self.stamp_ids)

    def __contains__(self, stamp_id: object) -> bool:
        return stamp_id in self.stamp_ids

    def with_stamp(self, stamp_id: str) -> CollectedStampRecord:
        return CollectedStampRecord.from_ids((*self.stamp_ids, stamp_id))


def decode_stamp_record(raw: str) -> CollectedStampRecord:
    """Decode a stored record, URI-encoded or plain.

    Raises
    ------
    MalformedRecordError
        If the value is not a JSON array of strings.
    """
    text = unquote(raw)
    try:
        stamp_ids = _STAMP_ID_LIST.validate_json(text)
    except ValidationError as exc:
        raise MalformedRecordError(f"Collected-stamp record is not a list of ids: {text[:64]!r}") from exc
    return CollectedStampRecord.from_ids(stamp_ids)


def encode_stamp_record(record: CollectedStampRecord) -> str:
    return json.dumps(list(record.stamp_ids), separators=(",", ":"))
