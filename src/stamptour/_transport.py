"""One-shot JSON transport to the event server."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from stamptour._redact import redact_for_log
from stamptour.config import StampTourConfig
from stamptour.exceptions import StampTourTransportError

_logger = logging.getLogger(__name__)


class NetworkGateway(Protocol):
    """Structural gateway interface used by the endpoint modules.

    Every call is a single attempt. Failures raise
    :class:`~stamptour.exceptions.StampTourTransportError`.
    """

    async def get_json(self, endpoint: str) -> Any:
        ...

    async def post_json(self, endpoint: str, body: Mapping[str, Any]) -> Any:
        ...


class HttpGateway:
    """aiohttp implementation of :class:`NetworkGateway`."""

    def __init__(self, config: StampTourConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    def _url(self, endpoint: str) -> str:
        return f"{self._config.base_url.rstrip('/')}{endpoint}"

    async def get_json(self, endpoint: str) -> Any:
        return await self._request("GET", endpoint)

    async def post_json(self, endpoint: str, body: Mapping[str, Any]) -> Any:
        return await self._request("POST", endpoint, body)

    async def _request(self, method: str, endpoint: str, body: Mapping[str, Any] | None = None) -> Any:
        url = self._url(endpoint)
        data = json.dumps(dict(body)) if body is not None else None
        headers = {"content-type": "application/json"} if body is not None else {}

        _logger.debug("%s %s body=%s", method, url, redact_for_log(body))

        try:
            async with self._http.request(
                method,
                url,
                data=data,
                headers=headers,
                timeout=self._timeout,
            ) as resp:
                text = await resp.text()
                if resp.status != 200:
                    raise StampTourTransportError(
                        f"HTTP {resp.status} from {endpoint}: {text[:200]}",
                        status_code=resp.status,
                        endpoint=endpoint,
                    )
        except StampTourTransportError:
            raise
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise StampTourTransportError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc

        try:
            result = json.loads(text)
        except json.JSONDecodeError as exc:
            raise StampTourTransportError(
                f"Invalid JSON from {endpoint}: {text[:200]}",
                status_code=200,
                endpoint=endpoint,
            ) from exc

        _logger.debug("%s %s -> %s", method, endpoint, redact_for_log(result))
        return result
