"""
Port: HubClient
Odpowiedzialność: weryfikacja podpisanej wiadomości przez zewnętrzny hub.
"""
from typing import Protocol, runtime_checkable

from contracts import HubResult


@runtime_checkable
class HubClient(Protocol):
    def validate_message(self, message_bytes: bytes) -> HubResult:
        """
        Sends a protobuf-encoded Message to the hub for verification.
        Returns HubOk(HubValidation) when the hub answered,
        HubErr when the call failed (transport, HTTP status, bad response).
        Never raises for remote failures.
        """
        ...
