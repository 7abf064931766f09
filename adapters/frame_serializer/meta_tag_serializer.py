"""
Adapter: MetaTagFrameSerializer
Implementuje port FrameSerializer, odwrotność MetaTagFrameParser.

Zawsze emitowane: og:image, fc:frame (= "vNext"), fc:frame:image,
fc:frame:post_url. Przyciski numerowane pozycyjnie 1..k (nie oryginalnym
ordinalem ze źródła). fc:frame:refresh_period tylko gdy ustawione.
"""
from __future__ import annotations

from html import escape
from typing import Optional

from contracts import FRAME_VERSION, FrameMetadata, HtmlDocumentOptions


def _meta(key: str, content: object, attr: str = "name") -> str:
    return f'<meta {attr}="{key}" content="{escape(str(content), quote=True)}">'


class MetaTagFrameSerializer:

    # -- FrameSerializer protocol ------------------------------

    def to_meta_tags(self, frame: FrameMetadata) -> str:
        tags = [
            _meta("og:image", frame.og_image or frame.image, attr="property"),
            _meta("fc:frame", FRAME_VERSION),
            _meta("fc:frame:image", frame.image),
            _meta("fc:frame:post_url", frame.post_url or ""),
        ]
        for index, button in enumerate(frame.buttons):
            ordinal = index + 1
            tags.append(_meta(f"fc:frame:button:{ordinal}", button.label))
            tags.append(_meta(f"fc:frame:button:{ordinal}:action", button.action))
        if frame.refresh_period is not None:
            tags.append(_meta("fc:frame:refresh_period", frame.refresh_period))
        return "\n".join(tags)

    def to_html_document(
        self,
        frame: FrameMetadata,
        options: Optional[HtmlDocumentOptions] = None,
    ) -> str:
        options = options or HtmlDocumentOptions()

        head: list[str] = []
        if options.title:
            head.append(f"<title>{options.title}</title>")
        if options.og_title:
            head.append(f'<meta property="og:title" content="{options.og_title}">')
        head.append(self.to_meta_tags(frame))
        if options.html_head:
            head.append(options.html_head)

        head_html = "\n".join(head)
        return (
            "<!DOCTYPE html>\n"
            "<html>\n"
            f"<head>\n{head_html}\n</head>\n"
            f"<body>{options.html_body}</body>\n"
            "</html>\n"
        )
