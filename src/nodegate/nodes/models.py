"""
Pydantic models for the node directory.

Covers:
- The two upstream shapes (live node list, pairing list)
- The single normalized NodeRecord the resolver works on
"""

from pydantic import BaseModel, ConfigDict, Field


# ─── Upstream Shapes ─────────────────────────────────────────────────


class _Upstream(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class LiveNode(_Upstream):
    """One element of the ``node.list`` response."""

    node_id: str = Field(alias="nodeId")
    display_name: str | None = Field(default=None, alias="displayName")
    platform: str | None = None
    remote_ip: str | None = Field(default=None, alias="remoteIp")
    caps: list[str] | None = None
    connected: bool | None = None


class PendingRequest(_Upstream):
    """A pairing request that has not been approved yet."""

    request_id: str = Field(alias="requestId")
    node_id: str = Field(alias="nodeId")
    display_name: str | None = Field(default=None, alias="displayName")
    remote_ip: str | None = Field(default=None, alias="remoteIp")


class PairedNode(_Upstream):
    """An approved pairing."""

    node_id: str = Field(alias="nodeId")
    display_name: str | None = Field(default=None, alias="displayName")
    remote_ip: str | None = Field(default=None, alias="remoteIp")


class PairingList(BaseModel):
    """``node.pair.list`` response."""

    pending: list[PendingRequest] = Field(default_factory=list)
    paired: list[PairedNode] = Field(default_factory=list)


# ─── Normalized Record ───────────────────────────────────────────────


class NodeRecord(BaseModel):
    """
    A node as seen in one directory snapshot.

    ``caps`` is None when the upstream did not report capabilities (the
    node is then assumed capable). ``connected`` is None when unknown.
    """

    model_config = ConfigDict(frozen=True)

    node_id: str
    display_name: str | None = None
    platform: str | None = None
    remote_ip: str | None = None
    caps: tuple[str, ...] | None = None
    connected: bool | None = None

    def has_capability(self, capability: str) -> bool:
        """Check capability, treating an unreported capability set as capable."""
        return self.caps is None or capability in self.caps

    @property
    def label(self) -> str:
        """Human label: display name, else remote IP, else id."""
        return self.display_name or self.remote_ip or self.node_id

    def to_dict(self) -> dict:
        """Serialize in the gateway's camelCase shape for --json output."""
        return {
            "nodeId": self.node_id,
            "displayName": self.display_name,
            "platform": self.platform,
            "remoteIp": self.remote_ip,
            "caps": list(self.caps) if self.caps is not None else None,
            "connected": self.connected,
        }
