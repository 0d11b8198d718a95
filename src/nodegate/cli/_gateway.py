"""
Shared gateway helpers for CLI commands.
"""

from typing import Annotated, Optional

import typer

from nodegate.config import load_settings
from nodegate.gateway import GatewayCall, GatewayClient

UrlOption = Annotated[
    Optional[str],
    typer.Option("--url", help="Gateway URL (defaults to NODEGATE_GATEWAY_URL)"),
]
TokenOption = Annotated[
    Optional[str], typer.Option("--token", help="Gateway token (if required)")
]
TimeoutOption = Annotated[
    Optional[str], typer.Option("--timeout", help="Timeout in ms (default 10000)")
]
JsonOption = Annotated[bool, typer.Option("--json", help="Output JSON")]
NodeOption = Annotated[
    Optional[str], typer.Option("--node", help="Node id, name, or IP")
]


def _gateway_call(
    url: Optional[str], token: Optional[str], timeout: Optional[str]
) -> GatewayCall:
    """Build a gateway call from CLI options, exiting on bad settings."""
    try:
        settings = load_settings(url=url, token=token, timeout_ms=timeout)
    except ValueError as e:
        typer.echo(f"❌ {e}")
        raise typer.Exit(code=1)
    return GatewayClient(settings).call
