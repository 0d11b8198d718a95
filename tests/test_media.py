"""
Unit tests for snapshot payload parsing and media writes.
"""

import base64

import pytest

from nodegate.media import (
    canvas_snapshot_temp_path,
    parse_canvas_snapshot_payload,
    write_base64_to_file,
)


class TestSnapshotPayload:
    def test_valid(self):
        payload = parse_canvas_snapshot_payload({"format": "png", "base64": "AA=="})
        assert payload.format == "png"
        assert payload.base64 == "AA=="

    @pytest.mark.parametrize(
        "value", [None, "png", {}, {"format": "png"}, {"format": 1, "base64": "AA=="}]
    )
    def test_invalid(self, value):
        with pytest.raises(ValueError, match="invalid canvas.snapshot payload"):
            parse_canvas_snapshot_payload(value)


class TestWriteMedia:
    def test_temp_path(self, tmp_path):
        path = canvas_snapshot_temp_path("jpg", tmp_dir=tmp_path)
        assert path.parent == tmp_path
        assert path.name.startswith("nodegate-canvas-snapshot-")
        assert path.suffix == ".jpg"
        assert canvas_snapshot_temp_path("png", tmp_dir=tmp_path) != path

    def test_write_decodes(self, tmp_path):
        data = b"\x89PNG\r\n\x1a\n"
        target = tmp_path / "out" / "snap.png"
        written = write_base64_to_file(target, base64.b64encode(data).decode())
        assert written == target
        assert target.read_bytes() == data

    def test_write_rejects_bad_base64(self, tmp_path):
        with pytest.raises(ValueError, match="invalid base64"):
            write_base64_to_file(tmp_path / "x.png", "not base64!!")
