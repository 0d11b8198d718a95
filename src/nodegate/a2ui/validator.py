"""
A2UI JSONL validation.

Scans the whole payload and collects every violation before failing, so an
author sees all defects in one pass. A stream must use a single protocol
version.
"""

import json
import re
from dataclasses import dataclass, field

from nodegate.a2ui.messages import (
    V0_8,
    V0_9,
    A2UIMessage,
    A2UIVersion,
    MessageShapeError,
    parse_a2ui_message,
)
from nodegate.errors import A2UIValidationError

_LINE_BREAK = re.compile(r"\r?\n")


def _reject_constant(name: str):
    # NaN and +/-Infinity are accepted by json.loads but are not JSON
    raise ValueError(f"invalid JSON constant {name}")


@dataclass
class JsonlSummary:
    """Outcome of a successful validation."""

    version: A2UIVersion
    message_count: int
    messages: list[A2UIMessage] = field(default_factory=list)


def validate_a2ui_jsonl(jsonl: str) -> JsonlSummary:
    """
    Validate an A2UI JSONL payload.

    Args:
        jsonl: Raw text, one JSON object per non-blank line.

    Returns:
        The detected version, the message count and the parsed messages.

    Raises:
        A2UIValidationError: With every line and stream-level violation,
            line violations first in line order.
    """
    errors: list[str] = []
    messages: list[A2UIMessage] = []
    saw_v08 = False
    saw_v09 = False
    message_count = 0

    for idx, line in enumerate(_LINE_BREAK.split(jsonl), start=1):
        trimmed = line.strip()
        if not trimmed:
            continue
        message_count += 1

        try:
            obj = json.loads(trimmed, parse_constant=_reject_constant)
        except ValueError as e:
            errors.append(f"line {idx}: {e}")
            continue
        except RecursionError:
            errors.append(f"line {idx}: nesting too deep")
            continue

        try:
            message = parse_a2ui_message(obj)
        except MessageShapeError as e:
            errors.append(f"line {idx}: {e}")
            continue

        messages.append(message)
        if message.version == V0_9:
            saw_v09 = True
        else:
            saw_v08 = True

    if message_count == 0:
        errors.append("no JSONL messages found")
    if saw_v08 and saw_v09:
        errors.append("mixed A2UI v0.8 and v0.9 messages in one file")
    if errors:
        raise A2UIValidationError(errors)

    return JsonlSummary(
        version=V0_9 if saw_v09 else V0_8,
        message_count=message_count,
        messages=messages,
    )
