"""
CLI subcommands for controlling node canvases.

Usage:
    nodegate canvas snapshot [--format png|jpg] [--max-width PX] [--quality Q]
    nodegate canvas present [--target URL] [--x PX --y PX --width PX --height PX]
    nodegate canvas hide
    nodegate canvas navigate <url>
    nodegate canvas eval [JS] [--js CODE]
    nodegate canvas a2ui push (--jsonl PATH | --text TEXT)
    nodegate canvas a2ui reset

Every command accepts --node, --url, --token, --timeout and --json.
"""

import json
from pathlib import Path
from typing import Optional

import typer

from nodegate.a2ui.messages import build_text_jsonl
from nodegate.cli._gateway import (
    JsonOption,
    NodeOption,
    TimeoutOption,
    TokenOption,
    UrlOption,
    _gateway_call,
)
from nodegate.dispatcher import CommandDispatcher
from nodegate.errors import NodegateError
from nodegate.logger import get_logger
from nodegate.media import canvas_snapshot_temp_path, write_base64_to_file

logger = get_logger(__name__)

canvas_app = typer.Typer(
    help="Control node canvases (present/navigate/eval/snapshot/a2ui)"
)
a2ui_app = typer.Typer(help="Render A2UI content on the canvas")
canvas_app.add_typer(a2ui_app, name="a2ui")

_FAILURES = (NodegateError, ValueError, OSError)


def _dispatcher(url, token, timeout) -> CommandDispatcher:
    return CommandDispatcher(_gateway_call(url, token, timeout), "canvas")


def _fail(name: str, err: Exception):
    logger.debug(f"canvas {name} failed: {err!r}")
    typer.echo(f"❌ canvas {name} failed: {err}")
    raise typer.Exit(code=1)


@canvas_app.command("snapshot")
def canvas_snapshot(
    node: NodeOption = None,
    fmt: str = typer.Option("png", "--format", help="Output format (png or jpg)"),
    max_width: Optional[int] = typer.Option(None, "--max-width", help="Max width (px)"),
    quality: Optional[float] = typer.Option(
        None, "--quality", help="JPEG quality 0-1 (default 0.82)"
    ),
    url: UrlOption = None,
    token: TokenOption = None,
    timeout: TimeoutOption = None,
    as_json: JsonOption = False,
):
    """Capture a canvas snapshot (prints MEDIA:<path>)."""
    try:
        dispatcher = _dispatcher(url, token, timeout)
        payload = dispatcher.snapshot(node, fmt, max_width=max_width, quality=quality)
        ext = "jpg" if payload.format == "jpeg" else payload.format
        file_path = write_base64_to_file(canvas_snapshot_temp_path(ext), payload.base64)
    except _FAILURES as e:
        _fail("snapshot", e)

    if as_json:
        typer.echo(json.dumps({"file": {"path": str(file_path)}}, indent=2))
        return
    typer.echo(f"MEDIA:{file_path}")


@canvas_app.command("present")
def canvas_present(
    node: NodeOption = None,
    target: Optional[str] = typer.Option(
        None, "--target", help="Target URL/path (optional)"
    ),
    x: Optional[float] = typer.Option(None, "--x", help="Placement x coordinate"),
    y: Optional[float] = typer.Option(None, "--y", help="Placement y coordinate"),
    width: Optional[float] = typer.Option(None, "--width", help="Placement width"),
    height: Optional[float] = typer.Option(None, "--height", help="Placement height"),
    url: UrlOption = None,
    token: TokenOption = None,
    timeout: TimeoutOption = None,
    as_json: JsonOption = False,
):
    """Show the canvas (optionally with a target URL/path)."""
    try:
        _dispatcher(url, token, timeout).present(
            node, target=target, x=x, y=y, width=width, height=height
        )
    except _FAILURES as e:
        _fail("present", e)
    if not as_json:
        typer.echo("canvas present ok")


@canvas_app.command("hide")
def canvas_hide(
    node: NodeOption = None,
    url: UrlOption = None,
    token: TokenOption = None,
    timeout: TimeoutOption = None,
    as_json: JsonOption = False,
):
    """Hide the canvas."""
    try:
        _dispatcher(url, token, timeout).hide(node)
    except _FAILURES as e:
        _fail("hide", e)
    if not as_json:
        typer.echo("canvas hide ok")


@canvas_app.command("navigate")
def canvas_navigate(
    target_url: str = typer.Argument(help="Target URL/path"),
    node: NodeOption = None,
    url: UrlOption = None,
    token: TokenOption = None,
    timeout: TimeoutOption = None,
    as_json: JsonOption = False,
):
    """Navigate the canvas to a URL."""
    try:
        _dispatcher(url, token, timeout).navigate(node, target_url)
    except _FAILURES as e:
        _fail("navigate", e)
    if not as_json:
        typer.echo("canvas navigate ok")


@canvas_app.command("eval")
def canvas_eval(
    js_arg: Optional[str] = typer.Argument(None, help="JavaScript to evaluate"),
    js: Optional[str] = typer.Option(None, "--js", help="JavaScript to evaluate"),
    node: NodeOption = None,
    url: UrlOption = None,
    token: TokenOption = None,
    timeout: TimeoutOption = None,
    as_json: JsonOption = False,
):
    """Evaluate JavaScript in the canvas."""
    try:
        raw = _dispatcher(url, token, timeout).eval(node, js or js_arg or "")
    except _FAILURES as e:
        _fail("eval", e)

    if as_json:
        typer.echo(json.dumps(raw, indent=2))
        return

    payload = raw.get("payload") if isinstance(raw, dict) else None
    result = payload.get("result") if isinstance(payload, dict) else None
    typer.echo(result if result else "canvas eval ok")


@a2ui_app.command("push")
def a2ui_push(
    jsonl: Optional[Path] = typer.Option(None, "--jsonl", help="Path to JSONL payload"),
    text: Optional[str] = typer.Option(
        None, "--text", help="Render a quick A2UI text payload"
    ),
    node: NodeOption = None,
    url: UrlOption = None,
    token: TokenOption = None,
    timeout: TimeoutOption = None,
    as_json: JsonOption = False,
):
    """Push A2UI JSONL to the canvas."""
    try:
        if (jsonl is None) == (text is None):
            raise ValueError("provide exactly one of --jsonl or --text")

        if text is not None:
            payload = build_text_jsonl(text)
        else:
            payload = jsonl.read_text(encoding="utf-8")
        summary = _dispatcher(url, token, timeout).push_a2ui(node, payload)
    except _FAILURES as e:
        _fail("a2ui push", e)

    if not as_json:
        count = summary.message_count
        typer.echo(
            f"canvas a2ui push ok ({summary.version}, {count} message{'' if count == 1 else 's'})"
        )


@a2ui_app.command("reset")
def a2ui_reset(
    node: NodeOption = None,
    url: UrlOption = None,
    token: TokenOption = None,
    timeout: TimeoutOption = None,
    as_json: JsonOption = False,
):
    """Reset A2UI renderer state."""
    try:
        _dispatcher(url, token, timeout).reset_a2ui(node)
    except _FAILURES as e:
        _fail("a2ui reset", e)
    if not as_json:
        typer.echo("canvas a2ui reset ok")
