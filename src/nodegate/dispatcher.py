"""
Command dispatcher.

Resolves a target node from a fresh directory snapshot, then sends exactly
one ``node.invoke`` to the gateway. A2UI payloads are validated before
anything is sent.
"""

import math
from typing import Any

from nodegate.a2ui.messages import V0_8
from nodegate.a2ui.validator import JsonlSummary, validate_a2ui_jsonl
from nodegate.errors import UnsupportedProtocolVersionError
from nodegate.gateway import GatewayCall, random_idempotency_key
from nodegate.logger import get_logger
from nodegate.media import CanvasSnapshotPayload, parse_canvas_snapshot_payload
from nodegate.nodes.directory import fetch_directory
from nodegate.nodes.resolver import DEFAULT_CAPABILITY, resolve_node_id

logger = get_logger(__name__)

SNAPSHOT_FORMATS = ("png", "jpeg")


def normalize_format(fmt: str) -> str:
    """Lower-case an image format and map ``jpg`` to ``jpeg``."""
    trimmed = fmt.strip().lower()
    return "jpeg" if trimmed == "jpg" else trimmed


def _finite(value: float | None) -> bool:
    return value is not None and math.isfinite(value)


def _payload(result: Any) -> Any:
    return result.get("payload") if isinstance(result, dict) else None


class CommandDispatcher:
    """
    Sends commands to a resolved node.

    Holds no state between calls: every command fetches its own directory
    snapshot and resolves against it.
    """

    def __init__(self, call: GatewayCall, capability: str = DEFAULT_CAPABILITY):
        self._call = call
        self.capability = capability

    def resolve(self, query: str | None) -> str:
        """Resolve ``query`` against a freshly fetched directory."""
        nodes = fetch_directory(self._call)
        node_id = resolve_node_id(query, nodes, self.capability)
        logger.debug(f"Resolved node query {query!r} -> {node_id}")
        return node_id

    def invoke(
        self,
        query: str | None,
        command: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """
        Resolve the target and send one ``node.invoke``.

        Returns:
            The raw gateway result.
        """
        node_id = self.resolve(query)
        logger.info(f"Invoking '{command}' on node {node_id}")
        envelope = {
            "nodeId": node_id,
            "command": command,
            "idempotencyKey": random_idempotency_key(),
        }
        if params is not None:
            envelope["params"] = params
        return self._call("node.invoke", envelope)

    # ─── Canvas commands ─────────────────────────────────────────────

    def present(
        self,
        query: str | None,
        target: str | None = None,
        x: float | None = None,
        y: float | None = None,
        width: float | None = None,
        height: float | None = None,
    ) -> Any:
        params: dict[str, Any] = {}
        if target:
            params["url"] = str(target)
        if any(_finite(v) for v in (x, y, width, height)):
            params["placement"] = {"x": x, "y": y, "width": width, "height": height}
        return self.invoke(query, "canvas.present", params)

    def hide(self, query: str | None) -> Any:
        return self.invoke(query, "canvas.hide")

    def navigate(self, query: str | None, url: str) -> Any:
        return self.invoke(query, "canvas.navigate", {"url": url})

    def eval(self, query: str | None, javascript: str) -> Any:
        """Evaluate JavaScript in the canvas; returns the raw gateway result."""
        if not javascript:
            raise ValueError("missing --js or <js>")
        return self.invoke(query, "canvas.eval", {"javaScript": javascript})

    def snapshot(
        self,
        query: str | None,
        fmt: str = "png",
        max_width: int | None = None,
        quality: float | None = None,
    ) -> CanvasSnapshotPayload:
        """
        Capture the canvas.

        Raises:
            ValueError: For an unsupported format or a malformed payload.
        """
        fmt = normalize_format(fmt)
        if fmt not in SNAPSHOT_FORMATS:
            raise ValueError("invalid format (use png or jpg)")

        raw = self.invoke(
            query,
            "canvas.snapshot",
            {
                "format": fmt,
                "maxWidth": max_width,
                "quality": quality if _finite(quality) else None,
            },
        )
        return parse_canvas_snapshot_payload(_payload(raw))

    def push_a2ui(self, query: str | None, jsonl: str) -> JsonlSummary:
        """
        Validate an A2UI stream and push it to the canvas.

        Raises:
            A2UIValidationError: The stream is malformed; nothing is sent.
            UnsupportedProtocolVersionError: The stream is v0.9; nothing is sent.
        """
        summary = validate_a2ui_jsonl(jsonl)
        if summary.version != V0_8:
            raise UnsupportedProtocolVersionError(summary.version)

        self.invoke(query, "canvas.a2ui.pushJSONL", {"jsonl": jsonl})
        return summary

    def reset_a2ui(self, query: str | None) -> Any:
        return self.invoke(query, "canvas.a2ui.reset")
