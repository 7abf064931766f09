"""
Port: ActionValidator
Odpowiedzialność: walidacja POST body akcji ramki (trustedData.messageBytes).
"""
from typing import Any, Mapping, Protocol, Union, runtime_checkable

from contracts import FramePacket, ValidationResult


@runtime_checkable
class ActionValidator(Protocol):
    def validate(
        self, body: Union[FramePacket, Mapping[str, Any]]
    ) -> ValidationResult:
        """
        Decodes trustedData.messageBytes and asks the hub to verify it.
        Returns ValidationResult(is_valid=True, message=...) only for a
        valid FRAME_ACTION message; any hub failure gives is_valid=False.
        Raises MalformedActionPayload if the body itself is unusable
        (missing field, non-hex bytes, broken protobuf envelope).
        """
        ...
