"""
Pytest fixtures: ręcznie budowane protobufy `Message` do testów walidatora.
"""
from __future__ import annotations

import pytest


def _varint(n: int) -> bytes:
    out = bytearray()
    while True:
        b = n & 0x7F
        n >>= 7
        if n:
            out.append(b | 0x80)
        else:
            out.append(b)
            return bytes(out)


def pb_varint(number: int, value: int) -> bytes:
    return _varint(number << 3) + _varint(value)


def pb_bytes(number: int, value: bytes) -> bytes:
    return _varint(number << 3 | 2) + _varint(len(value)) + value


def encode_message(message_type: int = 13, fid: int = 2, signature: bytes = b"\x22" * 64) -> bytes:
    data = (
        pb_varint(1, message_type)
        + pb_varint(2, fid)
        + pb_varint(3, 95_000_000)
        + pb_varint(4, 1)
        + pb_bytes(16, pb_bytes(1, b"https://example.com/frame") + pb_varint(2, 1))
    )
    return (
        pb_bytes(1, data)
        + pb_bytes(2, b"\x11" * 20)
        + pb_varint(3, 1)
        + pb_bytes(4, signature)
        + pb_varint(5, 1)
        + pb_bytes(6, b"\x33" * 32)
    )


@pytest.fixture
def frame_action_hex() -> str:
    """messageBytes of a FRAME_ACTION message from fid 2."""
    return encode_message().hex()


@pytest.fixture
def hub_frame_action_json() -> dict:
    """Hub /v1/validateMessage response for a valid frame action."""
    return {
        "valid": True,
        "message": {
            "data": {
                "type": "MESSAGE_TYPE_FRAME_ACTION",
                "fid": 2,
                "timestamp": 95000000,
                "network": "FARCASTER_NETWORK_MAINNET",
                "frameActionBody": {
                    "url": "aHR0cHM6Ly9leGFtcGxlLmNvbS9mcmFtZQ==",
                    "buttonIndex": 1,
                    "castId": {"fid": 226, "hash": "0xa48dd46161d8e57725f5e26e34ec19c13ff7f3b9"},
                },
            },
            "hash": "0x1111111111111111111111111111111111111111",
            "hashScheme": "HASH_SCHEME_BLAKE3",
            "signature": "IiIi",
            "signatureScheme": "SIGNATURE_SCHEME_ED25519",
            "signer": "0x3333",
        },
    }
