"""
Helpers for canvas snapshot payloads and writing decoded media to disk.
"""

import base64
import binascii
import tempfile
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass
class CanvasSnapshotPayload:
    """Decoded ``payload`` of a canvas.snapshot response."""

    format: str
    base64: str


def parse_canvas_snapshot_payload(value: Any) -> CanvasSnapshotPayload:
    """
    Validate the snapshot payload shape: ``{"format": str, "base64": str}``.

    Raises:
        ValueError: If either field is missing or not a string.
    """
    obj = value if isinstance(value, dict) else {}
    fmt = obj.get("format")
    data = obj.get("base64")
    if not isinstance(fmt, str) or not isinstance(data, str):
        raise ValueError("invalid canvas.snapshot payload")
    return CanvasSnapshotPayload(format=fmt, base64=data)


def canvas_snapshot_temp_path(ext: str, tmp_dir: Path | None = None) -> Path:
    """Unique temp path for a snapshot with the given extension."""
    base = tmp_dir or Path(tempfile.gettempdir())
    return base / f"nodegate-canvas-snapshot-{uuid.uuid4()}.{ext.lstrip('.')}"


def write_base64_to_file(path: Path, data: str) -> Path:
    """
    Decode base64 ``data`` and write it to ``path``.

    Raises:
        ValueError: If ``data`` is not valid base64.
        OSError: If the file cannot be written.
    """
    try:
        raw = base64.b64decode(data, validate=True)
    except binascii.Error as e:
        raise ValueError(f"invalid base64 payload: {e}") from e

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(raw)
    return path
