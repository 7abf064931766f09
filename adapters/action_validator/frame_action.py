"""
frame_action.py — pomocnicze funkcje dla zweryfikowanych wiadomości FRAME_ACTION.
"""
from __future__ import annotations

import base64
from typing import Optional, Union

from contracts import CastId, FrameActionBody, HubMessage, NormalizedCastId


def get_frame_action_data(message: Optional[HubMessage]) -> Optional[FrameActionBody]:
    """Body akcji (url, buttonIndex, castId) lub None dla innych wiadomości."""
    if message is None or message.data is None:
        return None
    return message.data.frame_action_body


def decode_action_url(url: str) -> str:
    """
    url z body akcji w czytelnej postaci. Hub HTTP API zwraca pola bajtowe
    w base64; zwykły URL (np. z "://") nie jest poprawnym base64 i wraca bez zmian.
    """
    try:
        return base64.b64decode(url, validate=True).decode("utf-8")
    except ValueError:
        return url


def _hash_hex(value: Union[bytes, str]) -> str:
    if isinstance(value, bytes):
        return value.hex()
    text = value.strip()
    if text[:2].lower() == "0x":
        return text[2:].lower()
    try:
        bytes.fromhex(text)
        return text.lower()
    except ValueError:
        # Hub HTTP API koduje część pól bajtowych w base64
        return base64.b64decode(text, validate=True).hex()


def normalize_cast_id(cast_id: Union[CastId, NormalizedCastId]) -> NormalizedCastId:
    """{fid, hash} z hashem jako "0x" + lowercase hex."""
    return NormalizedCastId(fid=cast_id.fid, hash="0x" + _hash_hex(cast_id.hash))
