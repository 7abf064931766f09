"""
contracts.py — Jedyne źródło prawdy dla wszystkich typów danych w fcframes.
Wszystkie moduły importują WYŁĄCZNIE stąd. Nie modyfikować bez versioning.
"""
from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

CONTRACTS_VERSION = "1.0.0"

MAX_BUTTONS = 4
FRAME_VERSION = "vNext"
FRAME_ACTION_MESSAGE_TYPE = "MESSAGE_TYPE_FRAME_ACTION"


# ─────────────────────────── Errors ──────────────────────────────────────

class MalformedActionPayload(ValueError):
    """Request body cannot be decoded into a frame action message."""


# ─────────────────────────── Frame ───────────────────────────────────────

ButtonAction = Literal["post", "post_redirect"]


class Button(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    action: ButtonAction = "post"


class FrameMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    version: str
    image: str                              # URL, aspect ratio 1.91:1
    og_image: Optional[str] = None          # fallback dla klientów bez obsługi ramek
    post_url: Optional[str] = None          # gdzie trafia POST po kliknięciu przycisku
    buttons: tuple[Button, ...] = ()
    refresh_period: Optional[int] = None    # sekundy; None = brak odświeżania

    @field_validator("buttons")
    @classmethod
    def _max_four_buttons(cls, v: tuple[Button, ...]) -> tuple[Button, ...]:
        if len(v) > MAX_BUTTONS:
            raise ValueError(f"a frame holds at most {MAX_BUTTONS} buttons, got {len(v)}")
        return v

    @model_validator(mode="before")
    @classmethod
    def _drop_redundant_og_image(cls, data: Any) -> Any:
        # og_image == image jest tożsame z brakiem og_image
        if isinstance(data, dict) and data.get("og_image") is not None \
                and data.get("og_image") == data.get("image"):
            data = {**data, "og_image": None}
        return data


class HtmlDocumentOptions(BaseModel):
    """Extra markup spliced verbatim into the rendered document."""
    title: Optional[str] = None
    og_title: Optional[str] = None
    html_head: str = ""
    html_body: str = ""


# ─────────────────────────── Hub messages ────────────────────────────────

class _HubModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class CastId(_HubModel):
    fid: int
    hash: str   # "0x…" hex (hub JSON) lub surowe bajty zakodowane hex


class NormalizedCastId(BaseModel):
    fid: int
    hash: str   # zawsze "0x" + lowercase hex


class FrameActionBody(_HubModel):
    url: str = ""
    button_index: int = Field(0, alias="buttonIndex")
    cast_id: Optional[CastId] = Field(None, alias="castId")


# Numeric MessageType values as they appear in protobuf-encoded messages.
_MESSAGE_TYPE_NAMES = {
    1: "MESSAGE_TYPE_CAST_ADD",
    2: "MESSAGE_TYPE_CAST_REMOVE",
    3: "MESSAGE_TYPE_REACTION_ADD",
    4: "MESSAGE_TYPE_REACTION_REMOVE",
    5: "MESSAGE_TYPE_LINK_ADD",
    6: "MESSAGE_TYPE_LINK_REMOVE",
    7: "MESSAGE_TYPE_VERIFICATION_ADD_ETH_ADDRESS",
    8: "MESSAGE_TYPE_VERIFICATION_REMOVE",
    11: "MESSAGE_TYPE_USER_DATA_ADD",
    12: "MESSAGE_TYPE_USERNAME_PROOF",
    13: FRAME_ACTION_MESSAGE_TYPE,
}


def message_type_name(value: Any) -> str:
    """Maps a numeric MessageType to its enum name; strings pass through."""
    if isinstance(value, int) and not isinstance(value, bool):
        return _MESSAGE_TYPE_NAMES.get(value, f"MESSAGE_TYPE_{value}")
    return str(value)


class MessageData(_HubModel):
    type: str
    fid: int = 0
    timestamp: int = 0
    network: Optional[str] = None
    frame_action_body: Optional[FrameActionBody] = Field(None, alias="frameActionBody")

    @field_validator("type", mode="before")
    @classmethod
    def _type_name(cls, v: Any) -> str:
        return message_type_name(v)


class HubMessage(_HubModel):
    data: Optional[MessageData] = None
    hash: str = ""
    hash_scheme: Optional[str] = Field(None, alias="hashScheme")
    signature: str = ""
    signature_scheme: Optional[str] = Field(None, alias="signatureScheme")
    signer: str = ""


class HubValidation(_HubModel):
    valid: bool = False
    message: Optional[HubMessage] = None


class HubOk(BaseModel):
    kind: Literal["ok"] = "ok"
    value: HubValidation

    def is_ok(self) -> bool:
        return True


class HubErr(BaseModel):
    kind: Literal["err"] = "err"
    error: str
    status_code: Optional[int] = None   # HTTP status, jeśli hub odpowiedział

    def is_ok(self) -> bool:
        return False


HubResult = Annotated[Union[HubOk, HubErr], Field(discriminator="kind")]


# ─────────────────────────── Action payload ──────────────────────────────

class TrustedData(_HubModel):
    message_bytes: str = Field(alias="messageBytes")


class UntrustedData(_HubModel):
    fid: Optional[int] = None
    url: Optional[str] = None
    message_hash: Optional[str] = Field(None, alias="messageHash")
    timestamp: Optional[int] = None
    network: Optional[int] = None
    button_index: Optional[int] = Field(None, alias="buttonIndex")
    cast_id: Optional[CastId] = Field(None, alias="castId")


class FramePacket(_HubModel):
    """POST body sent by a client when a frame button is pressed."""
    trusted_data: TrustedData = Field(alias="trustedData")
    untrusted_data: Optional[UntrustedData] = Field(None, alias="untrustedData")


class RawActionMessage(BaseModel):
    """Envelope read locally from messageBytes before the hub sees it."""
    message_bytes: bytes
    data_type: Optional[int] = None     # MessageData.type (varint), jeśli obecne
    fid: Optional[int] = None


class ValidationResult(BaseModel):
    is_valid: bool
    message: Optional[HubMessage] = None
