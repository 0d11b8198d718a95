"""
Node directory and resolution.

Nodes are remote agents (desktop apps, phones, headless hosts) reachable
through the gateway. The directory adapter lists them; the resolver picks
exactly one for a command.
"""

from nodegate.nodes.directory import fetch_directory, parse_node_list, parse_pairing_list
from nodegate.nodes.models import LiveNode, NodeRecord, PairedNode, PairingList
from nodegate.nodes.resolver import (
    normalize_node_key,
    pick_default_node,
    resolve_node_id,
)

__all__ = [
    "fetch_directory",
    "parse_node_list",
    "parse_pairing_list",
    "LiveNode",
    "NodeRecord",
    "PairedNode",
    "PairingList",
    "normalize_node_key",
    "pick_default_node",
    "resolve_node_id",
]
