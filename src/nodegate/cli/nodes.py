"""
CLI subcommands for inspecting the node fleet.

Usage:
    nodegate nodes list [--json]
    nodegate nodes status
    nodegate nodes resolve [QUERY] [--capability CAP]
    nodegate nodes invoke <command> [--node NODE] [--params JSON] [key=value ...]
"""

import json
from typing import Optional

import typer

from nodegate.cli._gateway import (
    JsonOption,
    NodeOption,
    TimeoutOption,
    TokenOption,
    UrlOption,
    _gateway_call,
)
from nodegate.dispatcher import CommandDispatcher
from nodegate.errors import NodegateError
from nodegate.nodes.directory import fetch_directory
from nodegate.nodes.resolver import DEFAULT_CAPABILITY, resolve_node_id

nodes_app = typer.Typer(help="Inspect and address nodes known to the gateway")


def _infer_type(value_str: str):
    """Infer a Python type from a CLI string value."""
    lower = value_str.lower()
    if lower == "true":
        return True
    if lower == "false":
        return False
    if lower in ("null", "none"):
        return None

    for converter in (int, float):
        try:
            return converter(value_str)
        except ValueError:
            pass

    if value_str.startswith(("{", "[")):
        try:
            return json.loads(value_str)
        except json.JSONDecodeError:
            pass

    return value_str


def _status_icon(connected: Optional[bool]) -> str:
    if connected is True:
        return "🟢"
    if connected is False:
        return "🔴"
    return "⚪"


def _load(url, token, timeout):
    call = _gateway_call(url, token, timeout)
    try:
        return fetch_directory(call)
    except NodegateError as e:
        typer.echo(f"❌ {e}")
        raise typer.Exit(code=1)


@nodes_app.command("list")
def nodes_list(
    url: UrlOption = None,
    token: TokenOption = None,
    timeout: TimeoutOption = None,
    as_json: JsonOption = False,
):
    """List all nodes in the gateway directory."""
    nodes = _load(url, token, timeout)

    if as_json:
        typer.echo(json.dumps([n.to_dict() for n in nodes], indent=2))
        return

    if not nodes:
        typer.echo("No nodes known to the gateway.")
        return

    typer.echo(f"📡 Nodes ({len(nodes)}):\n")
    for node in nodes:
        if node.caps is None:
            caps = "unknown"
        else:
            caps = ", ".join(node.caps) or "none"
        typer.echo(
            f"  {_status_icon(node.connected)} {node.label} ({node.platform or 'unknown'})\n"
            f"     ID: {node.node_id}\n"
            f"     IP: {node.remote_ip or 'unknown'}\n"
            f"     Capabilities: {caps}\n"
        )


@nodes_app.command("status")
def nodes_status(
    url: UrlOption = None,
    token: TokenOption = None,
    timeout: TimeoutOption = None,
):
    """Show a connectivity summary."""
    nodes = _load(url, token, timeout)
    connected = sum(1 for n in nodes if n.connected is True)

    typer.echo(f"📡 Nodes: {connected}/{len(nodes)} connected")
    for node in nodes:
        typer.echo(f"  {_status_icon(node.connected)} {node.label} ({node.platform or 'unknown'})")


@nodes_app.command("resolve")
def nodes_resolve(
    query: Optional[str] = typer.Argument(
        None, help="Node id, name, IP, or id prefix (omit to pick the default)"
    ),
    capability: str = typer.Option(
        DEFAULT_CAPABILITY, "--capability", "-c", help="Capability for default selection"
    ),
    url: UrlOption = None,
    token: TokenOption = None,
    timeout: TimeoutOption = None,
):
    """Print the node id a query resolves to."""
    nodes = _load(url, token, timeout)
    try:
        node_id = resolve_node_id(query, nodes, capability)
    except NodegateError as e:
        typer.echo(f"❌ {e}")
        raise typer.Exit(code=1)
    typer.echo(node_id)


@nodes_app.command("invoke")
def nodes_invoke(
    command: str = typer.Argument(help="Command to invoke (e.g., canvas.hide)"),
    extra_args: list[str] = typer.Argument(
        None, help="Key=value params (e.g. url=https://example.com)"
    ),
    node: NodeOption = None,
    params: Optional[str] = typer.Option(
        None, "--params", "-p", help='JSON params (e.g., \'{"format":"png"}\')'
    ),
    url: UrlOption = None,
    token: TokenOption = None,
    timeout: TimeoutOption = None,
    as_json: JsonOption = False,
):
    """
    Invoke any command on a node.

    Without --node, the default node is picked among those advertising the
    command's namespace (e.g. "canvas" for "canvas.hide").

    Examples:
        nodegate nodes invoke canvas.navigate --node "Studio Mac" url=https://example.com
        nodegate nodes invoke camera.snap --node 10.0.0.7 format=png
    """
    parsed_params = {}
    if params:
        try:
            parsed_params = json.loads(params)
        except json.JSONDecodeError as e:
            typer.echo(f"❌ Invalid JSON params: {e}")
            raise typer.Exit(code=1)
        if not isinstance(parsed_params, dict):
            typer.echo("❌ Invalid JSON params: expected an object")
            raise typer.Exit(code=1)

    if extra_args:
        for arg in extra_args:
            if "=" not in arg:
                parsed_params[arg] = True
                continue

            key, value_str = arg.split("=", 1)
            parsed_params[key] = _infer_type(value_str)

    capability = command.split(".", 1)[0]
    dispatcher = CommandDispatcher(_gateway_call(url, token, timeout), capability)

    try:
        result = dispatcher.invoke(node, command, parsed_params or None)
    except NodegateError as e:
        typer.echo(f"❌ {command} failed: {e}")
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps(result, indent=2))
    else:
        typer.echo(f"✅ {command} ok")
        if isinstance(result, dict) and result.get("payload") is not None:
            typer.echo(json.dumps(result["payload"], indent=2))
