"""
A2UI message variants.

Each JSONL line is an object with exactly one action key. The key selects
the variant; its value is the variant's body. ``createSurface`` belongs to
protocol v0.9, the other four to v0.8.
"""

import json
from dataclasses import dataclass, field
from typing import Any, ClassVar, Literal

A2UIVersion = Literal["v0.8", "v0.9"]

V0_8: A2UIVersion = "v0.8"
V0_9: A2UIVersion = "v0.9"


@dataclass
class A2UIMessage:
    """Base class for parsed A2UI messages."""

    action: ClassVar[str] = ""
    version: ClassVar[A2UIVersion] = V0_8

    body: Any = field(default_factory=dict)


@dataclass
class BeginRendering(A2UIMessage):
    """Start rendering a surface from its root component."""

    action: ClassVar[str] = "beginRendering"


@dataclass
class SurfaceUpdate(A2UIMessage):
    """Add or replace components on a surface."""

    action: ClassVar[str] = "surfaceUpdate"


@dataclass
class DataModelUpdate(A2UIMessage):
    """Update the data model bound to a surface."""

    action: ClassVar[str] = "dataModelUpdate"


@dataclass
class DeleteSurface(A2UIMessage):
    """Remove a surface."""

    action: ClassVar[str] = "deleteSurface"


@dataclass
class CreateSurface(A2UIMessage):
    """v0.9 surface creation."""

    action: ClassVar[str] = "createSurface"
    version: ClassVar[A2UIVersion] = V0_9


MESSAGE_TYPES: dict[str, type[A2UIMessage]] = {
    cls.action: cls
    for cls in (BeginRendering, SurfaceUpdate, DataModelUpdate, DeleteSurface, CreateSurface)
}

ACTION_KEYS: tuple[str, ...] = tuple(MESSAGE_TYPES)


class MessageShapeError(ValueError):
    """A decoded line is not a valid single-action A2UI message."""

    pass


def parse_a2ui_message(obj: Any) -> A2UIMessage:
    """
    Build the message variant for one decoded JSONL line.

    Raises:
        MessageShapeError: If ``obj`` is not a JSON object or does not hold
            exactly one action key.
    """
    if not isinstance(obj, dict):
        raise MessageShapeError("expected JSON object")

    present = [key for key in ACTION_KEYS if key in obj]
    if len(present) != 1:
        raise MessageShapeError(
            f"expected exactly one action key ({', '.join(ACTION_KEYS)})"
        )

    action = present[0]
    return MESSAGE_TYPES[action](body=obj[action])


def build_text_jsonl(text: str) -> str:
    """
    A minimal v0.8 payload that renders ``text`` as a single body paragraph.
    """
    surface_id = "main"
    root_id = "root"
    text_id = "text"
    payloads = [
        {
            "surfaceUpdate": {
                "surfaceId": surface_id,
                "components": [
                    {
                        "id": root_id,
                        "component": {
                            "Column": {"children": {"explicitList": [text_id]}}
                        },
                    },
                    {
                        "id": text_id,
                        "component": {
                            "Text": {
                                "text": {"literalString": text},
                                "usageHint": "body",
                            }
                        },
                    },
                ],
            }
        },
        {"beginRendering": {"surfaceId": surface_id, "root": root_id}},
    ]
    return "\n".join(
        json.dumps(p, separators=(",", ":"), ensure_ascii=False) for p in payloads
    )
