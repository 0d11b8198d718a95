"""
Unit tests for the `nodegate canvas` subcommands.
"""

import base64
import json
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from nodegate.cli import app

runner = CliRunner()


@pytest.fixture
def gateway(fake_gateway, studio_directory):
    fake_gateway.responses["node.list"] = studio_directory
    fake_gateway.responses["node.invoke"] = {"ok": True}
    with patch("nodegate.cli.canvas._gateway_call", return_value=fake_gateway):
        yield fake_gateway


def last_invoke(gateway):
    method, envelope = gateway.calls[-1]
    assert method == "node.invoke"
    return envelope


class TestCanvasCommands:
    def test_canvas_help(self):
        result = runner.invoke(app, ["canvas", "--help"])
        assert result.exit_code == 0
        for name in ("snapshot", "present", "hide", "navigate", "eval", "a2ui"):
            assert name in result.output

    def test_hide(self, gateway):
        result = runner.invoke(app, ["canvas", "hide"])
        assert result.exit_code == 0
        assert "canvas hide ok" in result.output
        assert last_invoke(gateway)["nodeId"] == "mac-123"

    def test_hide_json_is_quiet(self, gateway):
        result = runner.invoke(app, ["canvas", "hide", "--json"])
        assert result.exit_code == 0
        assert result.output == ""

    def test_navigate_with_node(self, gateway):
        result = runner.invoke(app, ["canvas", "navigate", "https://example.com", "--node", "pc-7"])
        assert result.exit_code == 0
        envelope = last_invoke(gateway)
        assert envelope["nodeId"] == "pc-7"
        assert envelope["command"] == "canvas.navigate"
        assert envelope["params"] == {"url": "https://example.com"}

    def test_present_placement(self, gateway):
        result = runner.invoke(
            app, ["canvas", "present", "--target", "/a.html", "--x", "5", "--y", "6"]
        )
        assert result.exit_code == 0
        params = last_invoke(gateway)["params"]
        assert params["url"] == "/a.html"
        assert params["placement"]["x"] == 5.0
        assert params["placement"]["y"] == 6.0

    def test_unknown_node(self, gateway):
        result = runner.invoke(app, ["canvas", "hide", "--node", "kitchen"])
        assert result.exit_code == 1
        assert "canvas hide failed: unknown node: kitchen" in result.output

    def test_eval_prints_result(self, gateway):
        gateway.responses["node.invoke"] = {"payload": {"result": "42"}}
        result = runner.invoke(app, ["canvas", "eval", "6*7"])
        assert result.exit_code == 0
        assert result.output.strip() == "42"
        assert last_invoke(gateway)["params"] == {"javaScript": "6*7"}

    def test_eval_option_wins(self, gateway):
        result = runner.invoke(app, ["canvas", "eval", "1", "--js", "2"])
        assert result.exit_code == 0
        assert "canvas eval ok" in result.output
        assert last_invoke(gateway)["params"] == {"javaScript": "2"}

    def test_eval_missing_code(self, gateway):
        result = runner.invoke(app, ["canvas", "eval"])
        assert result.exit_code == 1
        assert "missing --js" in result.output

    def test_snapshot_writes_file(self, gateway, tmp_path):
        data = b"jpeg-bytes"
        gateway.responses["node.invoke"] = {
            "payload": {"format": "jpeg", "base64": base64.b64encode(data).decode()}
        }
        with patch("nodegate.cli.canvas.canvas_snapshot_temp_path") as mock_path:
            mock_path.side_effect = lambda ext: tmp_path / f"snap.{ext}"
            result = runner.invoke(app, ["canvas", "snapshot", "--format", "jpg", "--json"])

        assert result.exit_code == 0
        out = json.loads(result.output)
        path = Path(out["file"]["path"])
        assert path.name == "snap.jpg"
        assert path.read_bytes() == data

    def test_snapshot_prints_media(self, gateway, tmp_path):
        gateway.responses["node.invoke"] = {"payload": {"format": "png", "base64": "AAAA"}}
        with patch("nodegate.cli.canvas.canvas_snapshot_temp_path") as mock_path:
            mock_path.return_value = tmp_path / "snap.png"
            result = runner.invoke(app, ["canvas", "snapshot"])
        assert result.exit_code == 0
        assert result.output.strip() == f"MEDIA:{tmp_path / 'snap.png'}"

    def test_snapshot_bad_format(self, gateway):
        result = runner.invoke(app, ["canvas", "snapshot", "--format", "gif"])
        assert result.exit_code == 1
        assert "invalid format" in result.output


class TestA2UICommands:
    def test_push_text(self, gateway):
        result = runner.invoke(app, ["canvas", "a2ui", "push", "--text", "Hello"])
        assert result.exit_code == 0
        assert "canvas a2ui push ok (v0.8, 2 messages)" in result.output
        envelope = last_invoke(gateway)
        assert envelope["command"] == "canvas.a2ui.pushJSONL"
        assert "Hello" in envelope["params"]["jsonl"]

    def test_push_file_single_message(self, gateway, tmp_path):
        path = tmp_path / "ui.jsonl"
        path.write_text('{"deleteSurface":{"surfaceId":"main"}}\n', encoding="utf-8")
        result = runner.invoke(app, ["canvas", "a2ui", "push", "--jsonl", str(path)])
        assert result.exit_code == 0
        assert "(v0.8, 1 message)" in result.output

    def test_push_requires_exactly_one_source(self, gateway, tmp_path):
        result = runner.invoke(app, ["canvas", "a2ui", "push"])
        assert result.exit_code == 1
        assert "exactly one of --jsonl or --text" in result.output

        path = tmp_path / "ui.jsonl"
        path.write_text('{"beginRendering":{}}', encoding="utf-8")
        result = runner.invoke(
            app, ["canvas", "a2ui", "push", "--jsonl", str(path), "--text", "x"]
        )
        assert result.exit_code == 1
        assert gateway.calls == []

    def test_push_invalid_lists_all_errors(self, gateway, tmp_path):
        path = tmp_path / "bad.jsonl"
        path.write_text('{"beginRendering":{}}\nnope\n{}\n', encoding="utf-8")
        result = runner.invoke(app, ["canvas", "a2ui", "push", "--jsonl", str(path)])
        assert result.exit_code == 1
        assert "Invalid A2UI JSONL" in result.output
        assert "line 2:" in result.output
        assert "line 3:" in result.output
        assert gateway.calls == []

    def test_push_v09_unsupported(self, gateway, tmp_path):
        path = tmp_path / "v09.jsonl"
        path.write_text('{"createSurface":{}}', encoding="utf-8")
        result = runner.invoke(app, ["canvas", "a2ui", "push", "--jsonl", str(path)])
        assert result.exit_code == 1
        assert "Detected A2UI v0.9" in result.output
        assert gateway.calls == []

    def test_push_missing_file(self, gateway, tmp_path):
        result = runner.invoke(
            app, ["canvas", "a2ui", "push", "--jsonl", str(tmp_path / "missing.jsonl")]
        )
        assert result.exit_code == 1
        assert "canvas a2ui push failed" in result.output

    def test_push_invalid_utf8(self, gateway, tmp_path):
        path = tmp_path / "bad.jsonl"
        path.write_bytes(b'\xff\xfe{"beginRendering":{}}')
        result = runner.invoke(app, ["canvas", "a2ui", "push", "--jsonl", str(path)])
        assert result.exit_code == 1
        assert "canvas a2ui push failed" in result.output
        assert gateway.calls == []

    def test_push_deeply_nested_line(self, gateway, tmp_path):
        path = tmp_path / "deep.jsonl"
        path.write_text(
            '{"beginRendering":{}}\n' + "[" * 100000 + "]" * 100000, encoding="utf-8"
        )
        result = runner.invoke(app, ["canvas", "a2ui", "push", "--jsonl", str(path)])
        assert result.exit_code == 1
        assert "canvas a2ui push failed" in result.output
        assert "line 2: nesting too deep" in result.output
        assert gateway.calls == []

    def test_reset(self, gateway):
        result = runner.invoke(app, ["canvas", "a2ui", "reset"])
        assert result.exit_code == 0
        assert "canvas a2ui reset ok" in result.output
        assert last_invoke(gateway)["command"] == "canvas.a2ui.reset"
