"""Classroom endpoints.

Endpoints:
  - /api/classList.json
  - /api/classroom/<classId>.json
"""

from __future__ import annotations

from typing import Any

from stamptour._api._common import parse_payload
from stamptour._constants import CLASS_LIST_ENDPOINT, classroom_info_endpoint
from stamptour._transport import NetworkGateway
from stamptour.models.classroom import Classroom, ClassList


async def fetch_class_list(gateway: NetworkGateway) -> list[Classroom]:
    """Fetch the classrooms that host a booth."""
    payload: Any = await gateway.get_json(CLASS_LIST_ENDPOINT)
    return parse_payload(ClassList, payload, endpoint=CLASS_LIST_ENDPOINT).class_list


async def fetch_classroom_info(gateway: NetworkGateway, classroom_id: str) -> dict[str, Any]:
    """Fetch the free-form booth description of one classroom."""
    endpoint = classroom_info_endpoint(classroom_id)
    payload: Any = await gateway.get_json(endpoint)
    return payload if isinstance(payload, dict) else {}
