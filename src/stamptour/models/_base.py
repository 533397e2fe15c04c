"""Base model for event server payloads.

Every wire model inherits from :class:`TourBaseModel` which provides
``alias_generator=to_camel`` so the server's camelCase keys (``stampId``,
``classList``) map to snake_case fields, while still accepting the field
names themselves.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class TourBaseModel(BaseModel):
    """Frozen, extra-tolerant base for server payloads."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
        str_strip_whitespace=True,
    )
