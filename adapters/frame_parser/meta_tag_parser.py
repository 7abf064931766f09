"""
Adapter: MetaTagFrameParser
Implementuje port FrameParser.

Wejście: dowolny (także uszkodzony) HTML. Szukamy tagów <meta>, których
atrybut `name` lub `property` należy do rodziny fc:frame*:

  fc:frame                     → version        (wymagane)
  fc:frame:image               → image          (wymagane)
  fc:frame:post_url            → post_url       (fallback: source_url)
  fc:frame:refresh_period      → refresh_period (int)
  og:image                     → og_image       (FrameMetadata zeruje, gdy == image)

Gramatyka przycisków:
  label  = "fc:frame:button:" ORDINAL
  action = "fc:frame:button:" ORDINAL ":action"
  ORDINAL = ["-"] DIGITS          (tylko ASCII 0-9)
  refresh_period = ["-"] DIGITS

Nazwy zaczynające się od "fc:frame:button", które nie pasują do gramatyki,
są pomijane pojedynczo (nie przerywają parsowania).
"""
from __future__ import annotations

import logging
import re
from typing import NamedTuple, Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

from contracts import MAX_BUTTONS, Button, ButtonAction, FrameMetadata

logger = logging.getLogger("fcframes.meta_tag_parser")

_KEY_ATTRS = ("name", "property")

_BUTTON_PREFIX = "fc:frame:button"
_BUTTON_RE = re.compile(r"^fc:frame:button:(?P<ordinal>-?[0-9]+)(?P<action>:action)?$")
_INTEGER_RE = re.compile(r"^-?[0-9]+$")


class _ButtonTag(NamedTuple):
    ordinal: int
    content: str


def _keys(tag: Tag) -> list[str]:
    """Wartości atrybutów name/property (w tej kolejności), bez pustych."""
    keys = []
    for attr in _KEY_ATTRS:
        value = tag.get(attr)
        if isinstance(value, str) and value:
            keys.append(value)
    return keys


def _content(tag: Tag) -> Optional[str]:
    value = tag.get("content")
    return value if isinstance(value, str) else None


class MetaTagFrameParser:
    """Skaner tagów <meta> po drzewie BeautifulSoup."""

    def __init__(self, features: str = "html.parser") -> None:
        self._features = features

    # -- FrameParser protocol ----------------------------------

    def parse(
        self, html: str, source_url: Optional[str] = None
    ) -> Optional[FrameMetadata]:
        soup = BeautifulSoup(html or "", self._features)
        metas = [m for m in soup.find_all("meta") if isinstance(m, Tag)]

        version = self._lookup(metas, "fc:frame")
        image = self._lookup(metas, "fc:frame:image")
        if not version or not image:
            return None

        post_url = self._lookup(metas, "fc:frame:post_url") or source_url

        labels, actions = self._button_tags(metas)
        buttons = self._assemble_buttons(labels, actions)

        return FrameMetadata(
            version=version,
            image=image,
            og_image=self._lookup(metas, "og:image") or None,
            post_url=post_url or None,
            buttons=buttons,
            refresh_period=self._refresh_period(metas),
        )

    # -- Lookups -----------------------------------------------

    @staticmethod
    def _lookup(metas: list[Tag], key: str) -> Optional[str]:
        """content pierwszego (w kolejności dokumentu) tagu z name/property == key."""
        for meta in metas:
            if key in _keys(meta):
                return _content(meta)
        return None

    @staticmethod
    def _button_tags(metas: list[Tag]) -> tuple[list[_ButtonTag], list[_ButtonTag]]:
        labels: list[_ButtonTag] = []
        actions: list[_ButtonTag] = []
        for meta in metas:
            key = next((k for k in _keys(meta) if k.startswith(_BUTTON_PREFIX)), None)
            if key is None:
                continue
            m = _BUTTON_RE.match(key)
            if not m:
                logger.debug("Skipping malformed button tag %r", key)
                continue
            tag = _ButtonTag(int(m.group("ordinal")), _content(meta) or "")
            if m.group("action"):
                actions.append(tag)
            else:
                labels.append(tag)
        return labels, actions

    @staticmethod
    def _assemble_buttons(
        labels: list[_ButtonTag], actions: list[_ButtonTag]
    ) -> list[Button]:
        assembled: list[tuple[int, Button]] = []
        for label in labels:
            matching = next((a for a in actions if a.ordinal == label.ordinal), None)
            action: ButtonAction = (
                "post_redirect"
                if matching is not None and matching.content == "post_redirect"
                else "post"
            )
            assembled.append((label.ordinal, Button(label=label.content, action=action)))

        # Stabilne sortowanie po ordinal, bez przenumerowania
        assembled.sort(key=lambda pair: pair[0])
        return [button for _, button in assembled[:MAX_BUTTONS]]

    def _refresh_period(self, metas: list[Tag]) -> Optional[int]:
        raw = self._lookup(metas, "fc:frame:refresh_period")
        if not raw:
            return None
        value = raw.strip()
        if not _INTEGER_RE.match(value):
            logger.warning("Invalid fc:frame:refresh_period %r: not an integer", raw)
            return None
        return int(value)
