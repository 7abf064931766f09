"""
message_codec.py — dekodowanie trustedData.messageBytes.

messageBytes to hex zakodowany protobuf `Message`:

  message Message {
    MessageData data = 1;         // length-delimited
    bytes hash = 2;
    HashScheme hash_scheme = 3;
    bytes signature = 4;
    SignatureScheme signature_scheme = 5;
    bytes signer = 6;
    optional bytes data_bytes = 7;
  }
  message MessageData { MessageType type = 1; uint64 fid = 2; ... }

Czytamy tylko wire format (bez schematu .proto): tyle, ile trzeba, żeby
odrzucić śmieci zanim wyślemy cokolwiek do huba. Pełną weryfikację robi hub.
"""
from __future__ import annotations

from typing import Iterator, Union

from contracts import MalformedActionPayload, RawActionMessage

_VARINT = 0
_FIXED64 = 1
_LENGTH_DELIMITED = 2
_FIXED32 = 5

_MAX_VARINT_BYTES = 10

_FIELD_DATA = 1
_FIELD_DATA_BYTES = 7

_DATA_FIELD_TYPE = 1
_DATA_FIELD_FID = 2


def _read_varint(buf: bytes, pos: int) -> tuple[int, int]:
    result = 0
    for shift_index in range(_MAX_VARINT_BYTES):
        if pos >= len(buf):
            raise MalformedActionPayload("truncated varint in message bytes")
        byte = buf[pos]
        pos += 1
        result |= (byte & 0x7F) << (7 * shift_index)
        if not byte & 0x80:
            return result, pos
    raise MalformedActionPayload("varint longer than 10 bytes in message bytes")


def iter_fields(buf: bytes) -> Iterator[tuple[int, int, Union[int, bytes]]]:
    """Yields (field_number, wire_type, value) for each top-level field of buf."""
    pos = 0
    while pos < len(buf):
        key, pos = _read_varint(buf, pos)
        field_number, wire_type = key >> 3, key & 0x07
        if field_number == 0:
            raise MalformedActionPayload("protobuf field number 0")

        if wire_type == _VARINT:
            value, pos = _read_varint(buf, pos)
            yield field_number, wire_type, value
        elif wire_type in (_FIXED64, _FIXED32):
            size = 8 if wire_type == _FIXED64 else 4
            if pos + size > len(buf):
                raise MalformedActionPayload("truncated fixed-width field")
            yield field_number, wire_type, int.from_bytes(buf[pos:pos + size], "little")
            pos += size
        elif wire_type == _LENGTH_DELIMITED:
            length, pos = _read_varint(buf, pos)
            if pos + length > len(buf):
                raise MalformedActionPayload("length-delimited field overruns message")
            yield field_number, wire_type, buf[pos:pos + length]
            pos += length
        else:
            raise MalformedActionPayload(f"unsupported protobuf wire type {wire_type}")


def hex_to_bytes(text: str) -> bytes:
    cleaned = text.strip()
    if cleaned[:2].lower() == "0x":
        cleaned = cleaned[2:]
    try:
        return bytes.fromhex(cleaned)
    except ValueError as exc:
        raise MalformedActionPayload(f"messageBytes is not valid hex: {exc}") from exc


def decode_message_bytes(hex_text: str) -> RawActionMessage:
    """
    Dekoduje hex → bytes → koperta Message.
    Rzuca MalformedActionPayload dla pustego wejścia, złego hexa
    albo protobufa bez MessageData.
    """
    raw = hex_to_bytes(hex_text)
    if not raw:
        raise MalformedActionPayload("messageBytes is empty")

    data: bytes | None = None
    data_bytes: bytes | None = None
    for number, _, value in iter_fields(raw):
        if not isinstance(value, bytes):
            continue
        if number == _FIELD_DATA:
            data = value
        elif number == _FIELD_DATA_BYTES:
            data_bytes = value

    # data_bytes, gdy obecne, jest kanoniczną serializacją MessageData
    payload = data_bytes if data_bytes is not None else data
    if payload is None:
        raise MalformedActionPayload("message has no MessageData")

    data_type: int | None = None
    fid: int | None = None
    for number, _, value in iter_fields(payload):
        if not isinstance(value, int):
            continue
        if number == _DATA_FIELD_TYPE:
            data_type = value
        elif number == _DATA_FIELD_FID:
            fid = value

    return RawActionMessage(
        message_bytes=raw,
        data_type=data_type,
        fid=fid,
    )
