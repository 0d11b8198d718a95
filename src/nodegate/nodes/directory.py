"""
Node directory adapter.

Fetches the fleet from the gateway and collapses the two possible upstream
shapes into NodeRecord:

- ``node.list``       -> live nodes with capabilities and connection state
- ``node.pair.list``  -> paired nodes only (fallback when node.list fails)
"""

from typing import Any

from pydantic import ValidationError

from nodegate.errors import DirectoryFetchError
from nodegate.gateway import GatewayCall
from nodegate.logger import get_logger
from nodegate.nodes.models import (
    LiveNode,
    NodeRecord,
    PairedNode,
    PairingList,
    PendingRequest,
)

logger = get_logger(__name__)


def _validate_entries(model: type, raw: Any) -> list:
    """Validate each element of a list, dropping the malformed ones."""
    if not isinstance(raw, list):
        return []
    entries = []
    for item in raw:
        try:
            entries.append(model.model_validate(item))
        except ValidationError as e:
            logger.debug(f"Skipping malformed {model.__name__} entry: {e}")
    return entries


def parse_node_list(value: Any) -> list[LiveNode]:
    """Extract the ``nodes`` array; any other shape yields no nodes."""
    obj = value if isinstance(value, dict) else {}
    return _validate_entries(LiveNode, obj.get("nodes"))


def parse_pairing_list(value: Any) -> PairingList:
    """Extract ``pending`` and ``paired`` arrays, tolerating missing keys."""
    obj = value if isinstance(value, dict) else {}
    return PairingList(
        pending=_validate_entries(PendingRequest, obj.get("pending")),
        paired=_validate_entries(PairedNode, obj.get("paired")),
    )


def record_from_live(node: LiveNode) -> NodeRecord:
    return NodeRecord(
        node_id=node.node_id,
        display_name=node.display_name,
        platform=node.platform,
        remote_ip=node.remote_ip,
        caps=tuple(node.caps) if node.caps is not None else None,
        connected=node.connected,
    )


def record_from_paired(node: PairedNode) -> NodeRecord:
    # Pairing entries carry no capability or connection info.
    return NodeRecord(
        node_id=node.node_id,
        display_name=node.display_name,
        remote_ip=node.remote_ip,
    )


def fetch_directory(call: GatewayCall) -> list[NodeRecord]:
    """
    Fetch one directory snapshot.

    Args:
        call: Gateway call ``(method, params) -> result``.

    Returns:
        Normalized node records, in upstream order.

    Raises:
        DirectoryFetchError: If both node.list and node.pair.list fail.
    """
    try:
        result = call("node.list", {})
    except Exception as primary:
        # Any primary failure (including "method not found") falls back.
        logger.warning(f"node.list failed ({primary}); falling back to node.pair.list")
    else:
        return [record_from_live(n) for n in parse_node_list(result)]

    try:
        result = call("node.pair.list", {})
    except Exception as e:
        raise DirectoryFetchError(f"could not fetch node directory: {e}") from e

    pairing = parse_pairing_list(result)
    return [record_from_paired(n) for n in pairing.paired]
