"""Platform registry mapping OS families to their handlers."""

import logging
from typing import Dict, Type, Union

from dockprov.errors import UnsupportedPlatform
from dockprov.models.platform import Family
from dockprov.platforms.base import PlatformHandler
from dockprov.platforms.archlinux import ArchLinuxHandler
from dockprov.platforms.debian import DebianHandler
from dockprov.platforms.fedora import FedoraHandler
from dockprov.platforms.redhat import RedHatHandler
from dockprov.platforms.sles import SlesHandler
from dockprov.providers.docker import DockerProvider


logger = logging.getLogger(__name__)


class PlatformRegistry:
    """Registry for platform handlers."""

    def __init__(self, docker: DockerProvider):
        """Initialize platform registry."""
        self.docker = docker
        self._handlers: Dict[Family, PlatformHandler] = {}
        self._handler_classes: Dict[Family, Type[PlatformHandler]] = {
            Family.DEBIAN: DebianHandler,
            Family.FEDORA: FedoraHandler,
            Family.REDHAT: RedHatHandler,
            Family.SLES: SlesHandler,
            Family.ARCHLINUX: ArchLinuxHandler,
        }

    def get_handler(self, family: Union[Family, str]) -> PlatformHandler:
        """Get the handler for a family, instantiating it on first use."""
        try:
            family = Family(family)
        except ValueError:
            raise UnsupportedPlatform(str(family))

        if family not in self._handlers:
            handler_class = self._handler_classes.get(family)
            if handler_class is None:
                raise UnsupportedPlatform(family.value)
            self._handlers[family] = handler_class(self.docker)
            logger.debug(f"Initialized handler for {family.value}")

        return self._handlers[family]

    def list_families(self) -> list[str]:
        """List families with a registered handler."""
        return [family.value for family in self._handler_classes]
