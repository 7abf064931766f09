"""
Adapter: HubActionValidator
Implementuje port ActionValidator.

Przepływ:
  body → FramePacket (pydantic) → messageBytes (hex) → koperta Message
       → hub.validate_message(bytes) → ValidationResult

Błędy wywołującego (zły body / hex / protobuf) → MalformedActionPayload.
Wszystko po stronie huba (transport, valid=false, zły typ wiadomości)
sprowadzamy do ValidationResult(is_valid=False, message=None).
"""
from __future__ import annotations

import logging
from typing import Any, Mapping, Union

from pydantic import ValidationError

from adapters.action_validator.message_codec import decode_message_bytes
from contracts import (
    FRAME_ACTION_MESSAGE_TYPE,
    FramePacket,
    MalformedActionPayload,
    ValidationResult,
    message_type_name,
)
from ports.hub_client import HubClient

logger = logging.getLogger("fcframes.action_validator")

_INVALID = ValidationResult(is_valid=False, message=None)


def _as_packet(body: Union[FramePacket, Mapping[str, Any]]) -> FramePacket:
    if isinstance(body, FramePacket):
        return body
    if not isinstance(body, Mapping):
        raise MalformedActionPayload(f"request body must be an object, got {type(body).__name__}")
    try:
        return FramePacket.model_validate(body)
    except ValidationError as exc:
        raise MalformedActionPayload(f"request body is missing trustedData.messageBytes: {exc}") from exc


class HubActionValidator:
    """Weryfikuje akcje ramek przez wstrzyknięty HubClient."""

    def __init__(self, hub: HubClient) -> None:
        self._hub = hub

    # -- ActionValidator protocol ------------------------------

    def validate(
        self, body: Union[FramePacket, Mapping[str, Any]]
    ) -> ValidationResult:
        packet = _as_packet(body)
        raw = decode_message_bytes(packet.trusted_data.message_bytes)

        local_type = message_type_name(raw.data_type) if raw.data_type is not None else None
        logger.debug("Validating %s from fid=%s", local_type, raw.fid)

        result = self._hub.validate_message(raw.message_bytes)
        if not result.is_ok():
            logger.warning("Hub validation call failed: %s", result.error)
            return _INVALID

        validation = result.value
        message = validation.message
        if not validation.valid or message is None:
            logger.info("Hub rejected %s (fid=%s)", local_type, raw.fid)
            return _INVALID
        if message.data is None or message.data.type != FRAME_ACTION_MESSAGE_TYPE:
            logger.info(
                "Message is not a frame action: hub=%s, local=%s",
                message.data.type if message.data else None,
                local_type,
            )
            return _INVALID

        return ValidationResult(is_valid=True, message=message)
