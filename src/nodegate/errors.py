"""
Error types raised by node resolution, directory fetches, A2UI validation
and gateway calls.

Everything derives from NodegateError so the CLI can report any of them
the same way.
"""


class NodegateError(Exception):
    """Base class for all nodegate errors."""

    pass


# ─── Node resolution ─────────────────────────────────────────────────


class NodeResolutionError(NodegateError):
    """A query or default selection did not yield exactly one node."""

    pass


class NoCapableNodeError(NodeResolutionError):
    """No node in the directory advertises the required capability."""

    def __init__(self, capability: str):
        self.capability = capability
        super().__init__(f"no node with capability '{capability}' is available")


class AmbiguousDefaultError(NodeResolutionError):
    """Default selection found several equally valid candidates."""

    def __init__(self, candidates: list[str] | None = None):
        self.candidates = candidates or []
        super().__init__(
            "node required (use --node or ensure only one connected node is available)"
        )


class UnknownNodeError(NodeResolutionError):
    """An explicit query matched no node."""

    def __init__(self, query: str, known: list[str]):
        self.query = query
        self.known = known
        suffix = f" (known: {', '.join(known)})" if known else ""
        super().__init__(f"unknown node: {query}{suffix}")


class AmbiguousNodeError(NodeResolutionError):
    """An explicit query matched more than one node."""

    def __init__(self, query: str, matches: list[str]):
        self.query = query
        self.matches = matches
        super().__init__(f"ambiguous node: {query} (matches: {', '.join(matches)})")


# ─── Directory ───────────────────────────────────────────────────────


class DirectoryFetchError(NodegateError):
    """Both the live node list and the pairing list could not be fetched."""

    pass


# ─── A2UI ────────────────────────────────────────────────────────────


class A2UIValidationError(NodegateError):
    """
    A JSONL payload failed validation.

    ``errors`` holds every violation found, line violations first.
    """

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("Invalid A2UI JSONL:\n- " + "\n- ".join(self.errors))


class UnsupportedProtocolVersionError(NodegateError):
    """A structurally valid stream uses a protocol version we cannot push."""

    def __init__(self, version: str):
        self.version = version
        super().__init__(
            f"Detected A2UI {version} JSONL (createSurface). "
            "Only v0.8 is currently supported."
        )


# ─── Gateway ─────────────────────────────────────────────────────────


class GatewayError(NodegateError):
    """A gateway RPC failed at the transport or application level."""

    def __init__(self, method: str, message: str, status_code: int | None = None):
        self.method = method
        self.status_code = status_code
        super().__init__(f"gateway {method} failed: {message}")
