"""Main CLI implementation using Typer."""

import json
import sys
from pathlib import Path
from typing import Optional, Callable, Any

import typer
from pydantic import ValidationError
from rich.console import Console
from ruamel.yaml.error import YAMLError

from dockprov.cli.commands import list_nodes, provision_node, tear_down_node
from dockprov.config import load_config
from dockprov.engine import Provisioner
from dockprov.errors import ProvisionError
from dockprov.task import error_result, run_task
from dockprov.utils.logging import setup_logging


# Create Typer app
app = typer.Typer(
    name="dockprov",
    help="Provision Docker containers as SSH test nodes",
    add_completion=False,
)

# Console for rich output
console = Console(stderr=True)


def _run_cli_command(handler: Callable[..., Any], config: Optional[Path], **kwargs: Any):
    """Helper to run a CLI command with a provisioner and error handling."""
    try:
        settings = load_config(config)
        setup_logging(settings.log_level)
        handler(Provisioner(settings), **kwargs)
    except (ProvisionError, FileNotFoundError, ValidationError, YAMLError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e


@app.command("task")
def task_command(
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Configuration file"
    ),
):
    """Run a JSON request read from stdin and print a JSON result."""
    try:
        settings = load_config(config)
    except Exception as e:
        result, code = error_result(e), 1
    else:
        setup_logging(settings.log_level)
        result, code = run_task(sys.stdin.read(), config=settings)

    typer.echo(json.dumps(result))
    raise typer.Exit(code)


@app.command("provision")
def provision_command(
    platform: str = typer.Argument(..., help="Image to provision, image[:tag]"),
    inventory: Optional[Path] = typer.Option(
        None, "--inventory", "-i", help="Directory holding inventory.yaml"
    ),
    vars: Optional[str] = typer.Option(
        None, "--vars", help="YAML mapping of node vars"
    ),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Configuration file"
    ),
):
    """Create a container and add it to the inventory."""
    _run_cli_command(provision_node, config=config, platform=platform, inventory=inventory, vars=vars)


@app.command("tear-down")
def tear_down_command(
    node_name: str = typer.Argument(..., help="Node name, host:port"),
    inventory: Optional[Path] = typer.Option(
        None, "--inventory", "-i", help="Directory holding inventory.yaml"
    ),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Configuration file"
    ),
):
    """Remove a node's container and drop it from the inventory."""
    _run_cli_command(tear_down_node, config=config, node_name=node_name, inventory=inventory)


@app.command("list")
def list_command(
    inventory: Optional[Path] = typer.Option(
        None, "--inventory", "-i", help="Directory holding inventory.yaml"
    ),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Configuration file"
    ),
):
    """List nodes recorded in the inventory."""
    _run_cli_command(list_nodes, config=config, inventory=inventory)


def main():
    """Main entry point for CLI."""
    app()
