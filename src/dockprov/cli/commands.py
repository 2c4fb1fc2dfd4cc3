"""Command implementations for CLI."""

import asyncio
from pathlib import Path
from typing import Any, Awaitable, Dict, Optional

from rich.console import Console
from rich.table import Table
from rich.progress import Progress, SpinnerColumn, TextColumn

from dockprov.engine import Provisioner
from dockprov.inventory import InventoryManager
from dockprov.models.request import TaskRequest
from dockprov.task import execute


console = Console()
stderr_console = Console(stderr=True)


def _run_action(
    description: str,
    action: Awaitable[Dict[str, Any]],
    quiet: bool = False
) -> Dict[str, Any]:
    """Helper to run a provisioner action with a progress spinner."""
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=stderr_console,
        disable=quiet,
    ) as progress:
        task = progress.add_task(description, total=None)

        response = asyncio.run(action)

        progress.update(task, completed=True)

    return response


def _inventory_arg(inventory: Optional[Path]) -> Optional[str]:
    return str(inventory) if inventory else None


def provision_node(
    provisioner: Provisioner,
    platform: str,
    inventory: Optional[Path] = None,
    vars: Optional[str] = None,
    quiet: bool = False,
):
    """Provision one node and print its record."""
    request = TaskRequest.from_payload({
        "action": "provision",
        "platform": platform,
        "inventory": _inventory_arg(inventory),
        "vars": vars,
    })
    response = _run_action(
        f"Provisioning {platform}...", execute(request, provisioner), quiet=quiet
    )

    if not quiet:
        stderr_console.print(f"[green]✓[/green] Provisioned {response['node_name']}")
    console.print_json(data=response)


def tear_down_node(
    provisioner: Provisioner,
    node_name: str,
    inventory: Optional[Path] = None,
    quiet: bool = False,
):
    """Tear down one node."""
    request = TaskRequest.from_payload({
        "action": "tear_down",
        "node_name": node_name,
        "inventory": _inventory_arg(inventory),
    })
    response = _run_action(
        f"Tearing down {node_name}...", execute(request, provisioner), quiet=quiet
    )

    if not quiet:
        stderr_console.print(f"[green]✓[/green] Removed {node_name}")
    console.print_json(data=response)


def list_nodes(provisioner: Provisioner, inventory: Optional[Path] = None):
    """List inventory nodes with formatted output."""
    manager = InventoryManager(inventory or Path.cwd(), provisioner.config.inventory_file)
    nodes = list(manager.load().nodes())

    if not nodes:
        console.print(f"No nodes in {manager.path}")
        return

    table = Table(title="Nodes")
    table.add_column("Node", style="cyan")
    table.add_column("Group")
    table.add_column("Container", style="magenta")
    table.add_column("Platform", style="dim")

    for group, target in nodes:
        facts = target.get("facts") or {}
        table.add_row(
            str(target.get("uri", "")),
            str(group),
            str(facts.get("container_name", "")),
            str(facts.get("platform", "")),
        )

    console.print(table)
