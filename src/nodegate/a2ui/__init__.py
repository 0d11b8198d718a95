"""
A2UI: the JSON-Lines UI update protocol pushed to node canvases.
"""

from nodegate.a2ui.messages import (
    ACTION_KEYS,
    A2UIMessage,
    BeginRendering,
    CreateSurface,
    DataModelUpdate,
    DeleteSurface,
    SurfaceUpdate,
    build_text_jsonl,
    parse_a2ui_message,
)
from nodegate.a2ui.validator import JsonlSummary, validate_a2ui_jsonl

__all__ = [
    "ACTION_KEYS",
    "A2UIMessage",
    "BeginRendering",
    "CreateSurface",
    "DataModelUpdate",
    "DeleteSurface",
    "SurfaceUpdate",
    "build_text_jsonl",
    "parse_a2ui_message",
    "JsonlSummary",
    "validate_a2ui_jsonl",
]
