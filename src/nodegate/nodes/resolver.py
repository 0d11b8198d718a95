"""
Node resolution.

Turns an operator-supplied query (id, IP, display name, or a copied id
prefix) into exactly one node id from a directory snapshot. Resolution is
a pure function of (query, directory); nothing is cached between calls.
"""

import re
from typing import Sequence

from nodegate.errors import (
    AmbiguousDefaultError,
    AmbiguousNodeError,
    NoCapableNodeError,
    UnknownNodeError,
)
from nodegate.nodes.models import NodeRecord

DEFAULT_CAPABILITY = "canvas"

# Shorter id prefixes match too many nodes to be useful.
MIN_ID_PREFIX_LENGTH = 6

# Default-selection tie-break: prefer the local Mac node.
LOCAL_PLATFORM_PREFIX = "mac"
LOCAL_NODE_ID_PREFIX = "mac-"

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def normalize_node_key(value: str) -> str:
    """
    Slug form used for display-name matching.

    "My Node!!" and "my-node" both normalize to "my-node".
    """
    return _NON_ALNUM.sub("-", value.lower()).strip("-")


def pick_default_node(
    nodes: Sequence[NodeRecord], capability: str = DEFAULT_CAPABILITY
) -> NodeRecord:
    """
    Choose a node when the operator gave no query.

    Raises:
        NoCapableNodeError: No node advertises ``capability``.
        AmbiguousDefaultError: Several candidates and no local tie-break.
    """
    capable = [n for n in nodes if n.has_capability(capability)]
    if not capable:
        raise NoCapableNodeError(capability)

    connected = [n for n in capable if n.connected is True]
    candidates = connected or capable
    if len(candidates) == 1:
        return candidates[0]

    local = [
        n
        for n in candidates
        if (n.platform or "").lower().startswith(LOCAL_PLATFORM_PREFIX)
        and n.node_id.startswith(LOCAL_NODE_ID_PREFIX)
    ]
    if len(local) == 1:
        return local[0]

    raise AmbiguousDefaultError([n.label for n in candidates])


def _matches(node: NodeRecord, query: str, query_key: str) -> bool:
    if node.node_id == query:
        return True
    if node.remote_ip is not None and node.remote_ip == query:
        return True
    if node.display_name and normalize_node_key(node.display_name) == query_key:
        return True
    return len(query) >= MIN_ID_PREFIX_LENGTH and node.node_id.startswith(query)


def resolve_node_id(
    query: str | None,
    nodes: Sequence[NodeRecord],
    capability: str = DEFAULT_CAPABILITY,
) -> str:
    """
    Resolve a query against a directory snapshot.

    Args:
        query: Node id, remote IP, display name, or id prefix (>= 6 chars).
            None or blank selects a default node.
        nodes: The directory snapshot.
        capability: Capability required for default selection.

    Returns:
        The chosen node id.

    Raises:
        NodeResolutionError: One of its subclasses, describing why no
            single node could be chosen.
    """
    q = (query or "").strip()
    if not q:
        return pick_default_node(nodes, capability).node_id

    q_key = normalize_node_key(q)
    matches = [n for n in nodes if _matches(n, q, q_key)]

    if len(matches) == 1:
        return matches[0].node_id
    if not matches:
        raise UnknownNodeError(q, [n.label for n in nodes])
    raise AmbiguousNodeError(q, [n.label for n in matches])
