from __future__ import annotations

import logging

import pytest

from adapters.action_validator.hub_action_validator import HubActionValidator
from conftest import encode_message
from contracts import (
    FramePacket,
    HubErr,
    HubOk,
    HubValidation,
    MalformedActionPayload,
    ValidationResult,
)
from ports.action_validator import ActionValidator
from ports.hub_client import HubClient


class _StubHub:
    def __init__(self, result):
        self._result = result
        self.calls: list[bytes] = []

    def validate_message(self, message_bytes: bytes):
        self.calls.append(message_bytes)
        return self._result


def _body(hex_text: str) -> dict:
    return {
        "untrustedData": {"fid": 2, "buttonIndex": 1},
        "trustedData": {"messageBytes": hex_text},
    }


def test_validator_accepts_valid_frame_action(frame_action_hex, hub_frame_action_json):
    hub = _StubHub(HubOk(value=HubValidation.model_validate(hub_frame_action_json)))
    validator = HubActionValidator(hub)

    result = validator.validate(_body(frame_action_hex))

    assert result.is_valid is True
    assert result.message is not None
    assert result.message.data.fid == 2
    assert result.message.data.frame_action_body.button_index == 1
    assert hub.calls == [bytes.fromhex(frame_action_hex)]


def test_validator_accepts_frame_packet_instance(frame_action_hex, hub_frame_action_json):
    hub = _StubHub(HubOk(value=HubValidation.model_validate(hub_frame_action_json)))
    packet = FramePacket.model_validate(_body(frame_action_hex))

    assert HubActionValidator(hub).validate(packet).is_valid is True


def test_validator_normalizes_invalid_and_transport_error(frame_action_hex, hub_frame_action_json):
    rejected = dict(hub_frame_action_json, valid=False)
    hubs = [
        _StubHub(HubOk(value=HubValidation.model_validate(rejected))),
        _StubHub(HubErr(error="hub request failed: connection refused")),
        _StubHub(HubOk(value=HubValidation(valid=True, message=None))),
    ]

    for hub in hubs:
        result = HubActionValidator(hub).validate(_body(frame_action_hex))
        assert result == ValidationResult(is_valid=False, message=None)


def test_validator_rejects_non_frame_action_messages(hub_frame_action_json):
    payload = dict(hub_frame_action_json)
    payload["message"] = dict(payload["message"])
    payload["message"]["data"] = dict(payload["message"]["data"], type="MESSAGE_TYPE_CAST_ADD")
    hub = _StubHub(HubOk(value=HubValidation.model_validate(payload)))

    result = HubActionValidator(hub).validate(_body(encode_message(message_type=1).hex()))

    assert result.is_valid is False
    assert result.message is None


def test_validator_logs_locally_decoded_message_type(caplog, hub_frame_action_json):
    payload = dict(hub_frame_action_json)
    payload["message"] = dict(payload["message"])
    payload["message"]["data"] = dict(payload["message"]["data"], type="MESSAGE_TYPE_CAST_ADD")
    hub = _StubHub(HubOk(value=HubValidation.model_validate(payload)))

    with caplog.at_level(logging.DEBUG, logger="fcframes.action_validator"):
        HubActionValidator(hub).validate(_body(encode_message(message_type=1, fid=7).hex()))

    assert "Validating MESSAGE_TYPE_CAST_ADD from fid=7" in caplog.text
    assert "local=MESSAGE_TYPE_CAST_ADD" in caplog.text


def test_validator_accepts_numeric_frame_action_type(frame_action_hex, hub_frame_action_json):
    payload = dict(hub_frame_action_json)
    payload["message"] = dict(payload["message"])
    payload["message"]["data"] = dict(payload["message"]["data"], type=13)
    hub = _StubHub(HubOk(value=HubValidation.model_validate(payload)))

    assert HubActionValidator(hub).validate(_body(frame_action_hex)).is_valid is True


@pytest.mark.parametrize(
    "body",
    [
        {"trustedData": {"messageBytes": "zz-not-hex"}},
        {"trustedData": {}},
        {"untrustedData": {"fid": 2}},
        {},
        "messageBytes",
    ],
)
def test_validator_raises_for_malformed_payload(body):
    hub = _StubHub(HubErr(error="should not be called"))

    with pytest.raises(MalformedActionPayload):
        HubActionValidator(hub).validate(body)
    assert hub.calls == []


def test_adapters_satisfy_ports():
    hub = _StubHub(HubErr(error="x"))

    assert isinstance(hub, HubClient)
    assert isinstance(HubActionValidator(hub), ActionValidator)
