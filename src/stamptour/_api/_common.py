"""Shared helpers for the endpoint modules."""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from stamptour.exceptions import StampTourTransportError

M = TypeVar("M", bound=BaseModel)


def parse_payload(model: type[M], payload: Any, *, endpoint: str) -> M:
    """Validate *payload* into *model*, mapping validation errors to transport errors."""
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise StampTourTransportError(
            f"Unexpected payload from {endpoint}: {exc.error_count()} validation error(s)",
            status_code=200,
            endpoint=endpoint,
        ) from exc
