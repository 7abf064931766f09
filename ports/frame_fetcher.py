"""
Port: FrameFetcher
Odpowiedzialność: pobranie strony spod URL i sparsowanie jej ramki.
"""
from typing import Optional, Protocol, runtime_checkable

from contracts import FrameMetadata


@runtime_checkable
class FrameFetcher(Protocol):
    def fetch(self, url: str) -> Optional[FrameMetadata]:
        """
        Downloads url and parses it with the fetched URL as post_url fallback.
        Returns None if the page carries no frame.
        Raises httpx.HTTPError on transport or HTTP status failures.
        """
        ...
