"""Login endpoint.

Endpoint:
  - /login
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from stamptour._constants import LOGIN_ENDPOINT
from stamptour._redact import redact_for_log
from stamptour._transport import NetworkGateway
from stamptour.exceptions import StampTourLoginError, StampTourTransportError
from stamptour.models.login import LoginRequest, LoginResponse

_logger = logging.getLogger(__name__)


def build_login_request(student_id: str, student_name: str) -> LoginRequest:
    """Build the login body; the server keys visitors by number + name."""
    return LoginRequest(user_name=f"{student_id}{student_name}")


async def submit_login(gateway: NetworkGateway, request: LoginRequest) -> LoginResponse:
    """Send one login request.

    Raises
    ------
    StampTourLoginError
        If the request failed or the response is missing identity fields.
    """
    try:
        payload = await gateway.post_json(LOGIN_ENDPOINT, request.model_dump())
    except StampTourLoginError:
        raise
    except StampTourTransportError as exc:
        raise StampTourLoginError(
            f"Login failed: {exc}",
            status_code=exc.status_code,
            endpoint=LOGIN_ENDPOINT,
        ) from exc

    try:
        response = LoginResponse.model_validate(payload)
    except ValidationError as exc:
        raise StampTourLoginError(
            "Login response missing user_id/user_name",
            status_code=200,
            endpoint=LOGIN_ENDPOINT,
        ) from exc

    _logger.debug("Login succeeded response=%s", redact_for_log(response))
    return response
