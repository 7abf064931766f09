"""
Adapter: HttpFrameFetcher
Implementuje port FrameFetcher: GET strony + FrameParser.
"""
from __future__ import annotations

import logging
from typing import Optional

import httpx

from contracts import FrameMetadata
from ports.frame_parser import FrameParser

logger = logging.getLogger("fcframes.frame_fetcher")


class HttpFrameFetcher:

    def __init__(
        self,
        parser: FrameParser,
        timeout_ms: int = 10_000,
        user_agent: str = "fcframes",
    ) -> None:
        self._parser = parser
        self._timeout = timeout_ms / 1000.0
        self._headers = {"User-Agent": user_agent, "Accept": "text/html"}

    def fetch(self, url: str) -> Optional[FrameMetadata]:
        response = httpx.get(
            url,
            headers=self._headers,
            timeout=self._timeout,
            follow_redirects=True,
        )
        response.raise_for_status()
        frame = self._parser.parse(response.text, source_url=url)
        if frame is None:
            logger.info("No frame found at %s", url)
        return frame
