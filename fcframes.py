#!/usr/bin/env python3
"""
fcframes.py — CLI narzędzie fcframes.

Konfiguracja: zmienne środowiskowe z prefiksem FCFRAMES_
lub plik .env (np. FCFRAMES_HUB_URL=https://hub.example:2281).

Podkomendy:
    inspect   — pobierz stronę spod URL i pokaż jej ramkę
    parse     — sparsuj ramkę z lokalnego HTML (plik / tekst / stdin)
    render    — wygeneruj tagi <meta> lub cały dokument HTML dla ramki
    validate  — zweryfikuj POST body akcji ramki przez hub

Użycie:
    python fcframes.py inspect https://example.com/frame
    python fcframes.py parse --file page.html --url https://example.com/frame
    python fcframes.py render --image https://example.com/a.png --button "Yes" --button "Docs:post_redirect"
    python fcframes.py render --image https://example.com/a.png --document --title "Poll"
    python fcframes.py validate --file packet.json
    python fcframes.py validate --message-bytes 0a4c0801...
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

import httpx
from rich import box
from rich.console import Console
from rich.table import Table

from adapters.action_validator.frame_action import (
    decode_action_url,
    get_frame_action_data,
    normalize_cast_id,
)
from adapters.action_validator.hub_action_validator import HubActionValidator
from adapters.frame_fetcher.http_frame_fetcher import HttpFrameFetcher
from adapters.frame_parser.meta_tag_parser import MetaTagFrameParser
from adapters.frame_serializer.meta_tag_serializer import MetaTagFrameSerializer
from adapters.hub_client.http_hub_client import HttpHubClient
from config import Settings
from contracts import (
    Button,
    FrameMetadata,
    HtmlDocumentOptions,
    MalformedActionPayload,
    ValidationResult,
)

EXIT_INVALID = 1
EXIT_MALFORMED = 2


# -- helpers ---------------------------------------------------------------

_CONSOLE: Console | None = None


def _console() -> Console:
    global _CONSOLE
    if _CONSOLE is None:
        _CONSOLE = Console(highlight=False)
    return _CONSOLE


def _safe_terminal_text(value: Any) -> str:
    s = str(value)
    encoding = sys.stdout.encoding or "utf-8"
    try:
        s.encode(encoding)
        return s
    except UnicodeEncodeError:
        return s.encode(encoding, errors="replace").decode(encoding, errors="replace")


def _short(value: Any, limit: int = 64) -> str:
    s = _safe_terminal_text(value).replace("\n", " ").strip()
    if len(s) <= limit:
        return s
    return s[: limit - 3] + "..."


def _print_kv_table(title: str, rows: list[tuple[str, Any]]) -> None:
    table = Table(title=title, box=box.ASCII, show_header=False, pad_edge=False)
    table.add_column("Key", no_wrap=True, style="bold cyan")
    table.add_column("Value")
    for key, value in rows:
        table.add_row(_safe_terminal_text(key), _safe_terminal_text(value))
    _console().print(table)


def _print_frame(frame: FrameMetadata, title: str = "Frame") -> None:
    _print_kv_table(title, [
        ("version", frame.version),
        ("image", _short(frame.image, 96)),
        ("og_image", _short(frame.og_image, 96) if frame.og_image else "-"),
        ("post_url", frame.post_url or "-"),
        ("refresh_period", frame.refresh_period if frame.refresh_period is not None else "-"),
    ])
    if not frame.buttons:
        _console().print("(no buttons)")
        return
    table = Table(title=f"Buttons [{len(frame.buttons)}]", box=box.ASCII)
    table.add_column("#", justify="right", no_wrap=True, style="cyan")
    table.add_column("Label")
    table.add_column("Action", no_wrap=True)
    for index, button in enumerate(frame.buttons, 1):
        table.add_row(str(index), _short(button.label, 48), button.action)
    _console().print(table)


def _emit_frame(frame: FrameMetadata, as_json: bool, title: str) -> None:
    if as_json:
        print(frame.model_dump_json(indent=2))
    else:
        _print_frame(frame, title)


def _read_text(args: argparse.Namespace) -> str:
    if getattr(args, "file", None):
        path = Path(args.file)
        if not path.exists():
            print(f"Plik nie istnieje: {path}", file=sys.stderr)
            sys.exit(1)
        return path.read_text(encoding="utf-8")
    if getattr(args, "text", None):
        return args.text
    if sys.stdin.isatty():
        print("Podaj --file, --text albo dane na stdin.", file=sys.stderr)
        sys.exit(1)
    return sys.stdin.read()


def _parse_button(value: str) -> Button:
    """'Label' albo 'Label:post_redirect' / 'Label:post'."""
    label, sep, action = value.rpartition(":")
    if sep and action in ("post", "post_redirect"):
        return Button(label=label, action=action)
    return Button(label=value)


def _settings() -> Settings:
    settings = Settings()
    logging.basicConfig(level=settings.log_level.upper())
    return settings


# -- commands --------------------------------------------------------------

def _inspect(args: argparse.Namespace) -> None:
    settings = _settings()
    fetcher = HttpFrameFetcher(
        MetaTagFrameParser(),
        timeout_ms=settings.fetch_timeout_ms,
        user_agent=settings.user_agent,
    )
    try:
        frame = fetcher.fetch(args.url)
    except httpx.HTTPStatusError as exc:
        print(f"Strona zwróciła błąd: HTTP {exc.response.status_code}", file=sys.stderr)
        sys.exit(1)
    except httpx.HTTPError as exc:
        print(f"Nie udało się pobrać strony: {exc}", file=sys.stderr)
        sys.exit(1)

    if frame is None:
        print("Invalid frame: brak fc:frame lub fc:frame:image", file=sys.stderr)
        sys.exit(1)
    _emit_frame(frame, args.json, title=_short(args.url, 80))


def _parse(args: argparse.Namespace) -> None:
    _settings()
    html = _read_text(args)
    frame = MetaTagFrameParser().parse(html, source_url=args.url)
    if frame is None:
        print("Invalid frame: brak fc:frame lub fc:frame:image", file=sys.stderr)
        sys.exit(1)
    _emit_frame(frame, args.json, title="Frame")


def _render(args: argparse.Namespace) -> None:
    buttons = [_parse_button(b) for b in args.button]
    try:
        frame = FrameMetadata(
            version=args.version,
            image=args.image,
            og_image=args.og_image,
            post_url=args.post_url,
            buttons=buttons,
            refresh_period=args.refresh_period,
        )
    except ValueError as exc:
        print(f"Nieprawidłowa ramka: {exc}", file=sys.stderr)
        sys.exit(1)

    serializer = MetaTagFrameSerializer()
    if args.document:
        options = HtmlDocumentOptions(
            title=args.title,
            og_title=args.og_title,
            html_head=args.head or "",
            html_body=args.body or "",
        )
        print(serializer.to_html_document(frame, options))
    else:
        print(serializer.to_meta_tags(frame))


def _validate(args: argparse.Namespace) -> None:
    settings = _settings()
    if args.message_bytes:
        body: Any = {"trustedData": {"messageBytes": args.message_bytes}}
    else:
        try:
            body = json.loads(_read_text(args))
        except json.JSONDecodeError as exc:
            print(f"Body nie jest poprawnym JSON: {exc}", file=sys.stderr)
            sys.exit(EXIT_MALFORMED)

    validator = HubActionValidator(
        HttpHubClient(settings.hub_url, timeout_ms=settings.hub_timeout_ms)
    )
    try:
        result = validator.validate(body)
    except MalformedActionPayload as exc:
        print(f"Malformed payload: {exc}", file=sys.stderr)
        sys.exit(EXIT_MALFORMED)

    _print_validation(result)
    if not result.is_valid:
        sys.exit(EXIT_INVALID)


def _print_validation(result: ValidationResult) -> None:
    rows: list[tuple[str, Any]] = [("is_valid", result.is_valid)]
    message = result.message
    if message is not None and message.data is not None:
        rows += [
            ("type", message.data.type),
            ("fid", message.data.fid),
            ("timestamp", message.data.timestamp),
            ("hash", message.hash or "-"),
        ]
        action = get_frame_action_data(message)
        if action is not None:
            rows += [
                ("button_index", action.button_index),
                ("url", _short(decode_action_url(action.url), 96) or "-"),
            ]
            if action.cast_id is not None:
                cast = normalize_cast_id(action.cast_id)
                rows.append(("cast", f"{cast.fid} {cast.hash}"))
    _print_kv_table("Frame action", rows)


def main() -> None:
    settings = Settings()
    parser = argparse.ArgumentParser(
        prog=settings.app_title,
        description=f"{settings.app_title} — parsowanie, generowanie i walidacja ramek fc:frame",
    )
    parser.add_argument(
        "--version", action="version",
        version=f"{settings.app_title} {settings.app_version}",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # inspect
    p = sub.add_parser("inspect", help="Pobierz stronę i pokaż jej ramkę")
    p.add_argument("url", help="URL strony z ramką")
    p.add_argument("--json", action="store_true", help="Wypisz ramkę jako JSON")

    # parse
    p = sub.add_parser("parse", help="Sparsuj ramkę z lokalnego HTML")
    p.add_argument("--file", "-f", help="Ścieżka do pliku HTML")
    p.add_argument("--text", "-t", help="HTML w argumencie (lub stdin)")
    p.add_argument("--url", help="URL źródłowy (fallback dla post_url)")
    p.add_argument("--json", action="store_true", help="Wypisz ramkę jako JSON")

    # render
    p = sub.add_parser("render", help="Wygeneruj tagi <meta> / dokument HTML")
    p.add_argument("--image", required=True)
    p.add_argument("--og-image")
    p.add_argument("--post-url")
    p.add_argument("--version", default="vNext")
    p.add_argument("--button", action="append", default=[], metavar="LABEL[:ACTION]",
                   help="Przycisk; ACTION = post | post_redirect (max 4)")
    p.add_argument("--refresh-period", type=int, metavar="SECONDS")
    p.add_argument("--document", action="store_true", help="Cały dokument HTML")
    p.add_argument("--title")
    p.add_argument("--og-title")
    p.add_argument("--head", help="Surowy HTML do <head> (bez escapowania)")
    p.add_argument("--body", help="Surowy HTML do <body> (bez escapowania)")

    # validate
    p = sub.add_parser("validate", help="Zweryfikuj akcję ramki przez hub")
    p.add_argument("--file", "-f", help="Plik JSON z POST body")
    p.add_argument("--text", "-t", help="POST body jako JSON (lub stdin)")
    p.add_argument("--message-bytes", help="Samo trustedData.messageBytes (hex)")

    args = parser.parse_args()

    commands = {
        "inspect":  _inspect,
        "parse":    _parse,
        "render":   _render,
        "validate": _validate,
    }
    commands[args.command](args)


if __name__ == "__main__":
    main()
