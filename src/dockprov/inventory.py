"""Inventory file handling and node records."""

import logging
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

from ruamel.yaml import YAML

from dockprov.errors import InventoryNotFound, NodeNotFound, ProvisionError
from dockprov.models.node import NodeConfig, NodeFacts, NodeRecord, SSHConfig


logger = logging.getLogger(__name__)

DEFAULT_GROUP = "ssh_nodes"
INVENTORY_VERSION = 2


def build_node_record(
    container_name: str,
    port: int,
    image: str,
    vars: Optional[Dict[Any, Any]] = None,
    hostname: str = "localhost",
) -> NodeRecord:
    """Build the inventory record for a freshly provisioned container."""
    return NodeRecord(
        uri=f"{hostname}:{port}",
        config=NodeConfig(ssh=SSHConfig(port=port)),
        facts=NodeFacts(container_name=container_name, platform=image),
        vars=vars,
    )


class Inventory:
    """In-memory inventory document: ``{version, groups: [{name, targets}]}``.

    Keys this class does not know about are kept as loaded.
    """

    def __init__(self, data: Optional[Dict[str, Any]] = None):
        self.data = data if data is not None else {"version": INVENTORY_VERSION, "groups": []}

    @property
    def groups(self) -> List[Dict[str, Any]]:
        if self.data.get("groups") is None:
            self.data["groups"] = []
        return self.data["groups"]

    def get_group(self, name: str) -> Optional[Dict[str, Any]]:
        """Get a group by name."""
        for group in self.groups:
            if group.get("name") == name:
                return group
        return None

    def nodes(self) -> Iterator[Tuple[str, Dict[str, Any]]]:
        """Yield ``(group name, target)`` for every target."""
        for group in self.groups:
            for target in group.get("targets") or []:
                yield group.get("name"), target

    def add_node(self, record: NodeRecord, group_name: str = DEFAULT_GROUP) -> None:
        """Append a node to a group, creating the group if needed."""
        group = self.get_group(group_name)
        if group is None:
            group = {"name": group_name, "targets": []}
            self.groups.append(group)
            logger.debug(f"Created inventory group {group_name}")
        if group.get("targets") is None:
            group["targets"] = []
        group["targets"].append(record.to_inventory())

    def find_node(self, node_name: str) -> Optional[Dict[str, Any]]:
        """Find a target by its uri."""
        for _, target in self.nodes():
            if target.get("uri") == node_name:
                return target
        return None

    def facts_for(self, node_name: str) -> Dict[str, Any]:
        """Facts of a node, raising NodeNotFound when absent."""
        target = self.find_node(node_name)
        if target is None:
            raise NodeNotFound(node_name)
        return target.get("facts") or {}

    def remove_node(self, node_name: str) -> bool:
        """Remove a node from every group. Returns whether anything was removed."""
        removed = False
        for group in self.groups:
            targets = group.get("targets") or []
            kept = [target for target in targets if target.get("uri") != node_name]
            if len(kept) != len(targets):
                group["targets"] = kept
                removed = True
        return removed


class InventoryManager:
    """Loads and rewrites ``inventory.yaml`` in a directory."""

    def __init__(self, inventory_dir: Path, filename: str = "inventory.yaml"):
        """Initialize inventory manager."""
        self.inventory_dir = Path(inventory_dir)
        self.path = self.inventory_dir / filename
        self.yaml = YAML()
        self.yaml.preserve_quotes = True
        self.yaml.default_flow_style = False

    def load(self, must_exist: bool = False) -> Inventory:
        """Load the inventory, starting empty when the file is missing."""
        if not self.path.is_file():
            if must_exist:
                raise InventoryNotFound(self.path)
            logger.debug(f"No inventory at {self.path}, starting empty")
            return Inventory()

        data = self.yaml.load(self.path.read_text())
        if data is None:
            return Inventory()
        if not isinstance(data, dict):
            raise ProvisionError(f"Inventory {self.path} is not a mapping")

        logger.debug(f"Loaded inventory: {self.path}")
        return Inventory(data)

    def save(self, inventory: Inventory) -> None:
        """Rewrite the whole inventory file."""
        self.inventory_dir.mkdir(parents=True, exist_ok=True)
        with self.path.open("w") as f:
            self.yaml.dump(inventory.data, f)
        logger.debug(f"Wrote inventory: {self.path}")
