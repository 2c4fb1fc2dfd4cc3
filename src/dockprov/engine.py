"""Provision and tear down SSH test nodes."""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from dockprov.errors import ProvisionError
from dockprov.inventory import InventoryManager, build_node_record
from dockprov.models.config import ProvisionerConfig
from dockprov.platforms.registry import PlatformRegistry
from dockprov.platforms.resolver import resolve_platform
from dockprov.providers.docker import DockerProvider
from dockprov.providers.ports import allocate_port


logger = logging.getLogger(__name__)


class Provisioner:
    """Runs one provision or tear_down against an inventory directory.

    The inventory file is only rewritten once every step has succeeded.
    """

    def __init__(
        self,
        config: Optional[ProvisionerConfig] = None,
        docker: Optional[DockerProvider] = None,
        platforms: Optional[PlatformRegistry] = None,
    ):
        """Initialize provisioner."""
        self.config = config or ProvisionerConfig()
        self.docker = docker or DockerProvider(binary=self.config.docker_binary)
        self.platforms = platforms or PlatformRegistry(self.docker)

    def _inventory_manager(self, inventory_dir: Path) -> InventoryManager:
        return InventoryManager(inventory_dir, self.config.inventory_file)

    async def provision(
        self,
        image: str,
        inventory_dir: Path,
        vars: Optional[Dict[Any, Any]] = None,
    ) -> Dict[str, Any]:
        """Create a container from ``image`` and expose it over SSH."""
        manager = self._inventory_manager(inventory_dir)
        inventory = manager.load()

        logger.warning("!!! Using private port forwarding!!!")
        platform = resolve_platform(image)
        handler = self.platforms.get_handler(platform.family)

        port = await allocate_port(self.docker)
        container_name = platform.container_name(port)

        await self.docker.create(image, container_name, port)
        await handler.install_ssh(platform.version, container_name)
        await handler.harden_ssh(container_name)

        record = build_node_record(
            container_name, port, image, vars=vars, hostname=self.config.hostname
        )
        inventory.add_node(record, self.config.group_name)
        manager.save(inventory)

        logger.info(f"Provisioned {record.uri} ({container_name})")
        return {"status": "ok", "node_name": record.uri, "node": record.to_result()}

    async def tear_down(self, node_name: str, inventory_dir: Path) -> Dict[str, Any]:
        """Remove a node's container and drop it from the inventory."""
        manager = self._inventory_manager(inventory_dir)
        inventory = manager.load(must_exist=True)

        facts = inventory.facts_for(node_name)
        container_name = facts.get("container_name")
        if not container_name:
            raise ProvisionError(f"node {node_name} has no container_name fact")
        await self.docker.remove(container_name)

        inventory.remove_node(node_name)
        manager.save(inventory)

        logger.info(f"Removed {node_name}")
        return {"status": "ok"}
