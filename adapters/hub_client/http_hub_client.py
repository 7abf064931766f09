"""
Adapter: HttpHubClient
Implementuje port HubClient przez HTTP API huba.

Kontrakt huba:
    POST {hub_url}/v1/validateMessage
    Content-Type: application/octet-stream
    Body: protobuf Message (surowe bajty)

    ← 200 OK, Content-Type: application/json
    Body: {"valid": true, "message": {"data": {"type": "MESSAGE_TYPE_FRAME_ACTION", ...}, ...}}
"""
from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from contracts import HubErr, HubOk, HubResult, HubValidation

logger = logging.getLogger("fcframes.hub_client")

VALIDATE_MESSAGE_PATH = "/v1/validateMessage"


class HttpHubClient:
    """
    Wysyła wiadomość do huba i mapuje odpowiedź na HubResult.
    Nie ponawia zapytań i nie rzuca wyjątków dla błędów zdalnych.
    """

    def __init__(self, hub_url: str, timeout_ms: int = 10_000) -> None:
        self._url = hub_url.strip().rstrip("/") + VALIDATE_MESSAGE_PATH
        self._timeout = timeout_ms / 1000.0

    # -- HubClient protocol ------------------------------------

    def validate_message(self, message_bytes: bytes) -> HubResult:
        try:
            response = httpx.post(
                self._url,
                content=message_bytes,
                headers={"Content-Type": "application/octet-stream"},
                timeout=self._timeout,
            )
            response.raise_for_status()
            payload: Any = response.json()
        except httpx.HTTPStatusError as exc:
            logger.warning("Hub returned HTTP %s", exc.response.status_code)
            return HubErr(
                error=f"hub returned HTTP {exc.response.status_code}",
                status_code=exc.response.status_code,
            )
        except httpx.HTTPError as exc:
            logger.warning("Hub request failed: %s", exc)
            return HubErr(error=f"hub request failed: {exc}")
        except ValueError as exc:
            return HubErr(error=f"hub response is not JSON: {exc}")

        try:
            return HubOk(value=HubValidation.model_validate(payload))
        except ValidationError as exc:
            logger.warning("Unexpected hub response: %s | raw=%r", exc, payload)
            return HubErr(error=f"unexpected hub response: {exc}")
