"""
nodegate CLI.

This package splits CLI commands into focused modules:
- nodes:  list, status, resolve, invoke
- canvas: snapshot, present, hide, navigate, eval, a2ui push/reset
"""

import typer

from nodegate.cli._gateway import _gateway_call  # noqa: F401 (re-export for test patching)
from nodegate.cli.canvas import canvas_app
from nodegate.cli.main import configure_logging, load_environment
from nodegate.cli.nodes import nodes_app

app = typer.Typer(help="nodegate - address nodes and drive their canvases")


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose logging (DEBUG level)"
    ),
):
    """
    nodegate - address nodes and drive their canvases.
    """
    configure_logging(verbose)
    load_environment()


# Attach subcommand groups
app.add_typer(nodes_app, name="nodes")
app.add_typer(canvas_app, name="canvas")

if __name__ == "__main__":
    app()
