"""
Port: FrameSerializer
Odpowiedzialność: zamiana FrameMetadata z powrotem na tagi <meta> i dokument HTML.
"""
from typing import Optional, Protocol, runtime_checkable

from contracts import FrameMetadata, HtmlDocumentOptions


@runtime_checkable
class FrameSerializer(Protocol):
    def to_meta_tags(self, frame: FrameMetadata) -> str:
        """
        Renders one <meta> tag per frame field.
        Buttons are numbered by position (1..k), not by their source ordinal.
        """
        ...

    def to_html_document(
        self,
        frame: FrameMetadata,
        options: Optional[HtmlDocumentOptions] = None,
    ) -> str:
        """
        Wraps to_meta_tags() in a full HTML document.
        options.html_head / options.html_body are inserted without escaping.
        """
        ...
