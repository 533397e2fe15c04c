"""Stamp catalog endpoints.

Endpoints:
  - /api/stampList.json
  - /api/stamp/<stampId>.json
"""

from __future__ import annotations

from typing import Any

from stamptour._api._common import parse_payload
from stamptour._constants import STAMP_LIST_ENDPOINT, stamp_info_endpoint
from stamptour._transport import NetworkGateway
from stamptour.models.stamp import Stamp, StampList


async def fetch_stamp_list(gateway: NetworkGateway) -> list[Stamp]:
    """Fetch the full stamp catalog."""
    payload: Any = await gateway.get_json(STAMP_LIST_ENDPOINT)
    return parse_payload(StampList, payload, endpoint=STAMP_LIST_ENDPOINT).stamp_list


async def fetch_stamp_info(gateway: NetworkGateway, stamp_id: str) -> Stamp:
    """Fetch the details of a single stamp."""
    endpoint = stamp_info_endpoint(stamp_id)
    payload: Any = await gateway.get_json(endpoint)
    return parse_payload(Stamp, payload, endpoint=endpoint)
