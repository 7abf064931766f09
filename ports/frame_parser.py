"""
Port: FrameParser
Odpowiedzialność: z surowego HTML wyciąga opis ramki (tagi fc:frame*).
"""
from typing import Optional, Protocol, runtime_checkable

from contracts import FrameMetadata


@runtime_checkable
class FrameParser(Protocol):
    def parse(
        self, html: str, source_url: Optional[str] = None
    ) -> Optional[FrameMetadata]:
        """
        Parses an HTML document into FrameMetadata.
        source_url: URL the document was fetched from; used as post_url
        when the document carries no fc:frame:post_url tag.
        Returns None if fc:frame or fc:frame:image is missing.
        Never raises on malformed markup.
        """
        ...
