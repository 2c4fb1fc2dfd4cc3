"""Debian family: Debian, Ubuntu and Cumulus images."""

import logging

from dockprov.models.platform import Family
from dockprov.platforms.base import PlatformHandler


logger = logging.getLogger(__name__)

ESM_SOURCE_LIST = "/etc/apt/sources.list.d/ubuntu-esm-infra-trusty.list"


class DebianHandler(PlatformHandler):
    """apt-based images."""

    family = Family.DEBIAN

    async def install_packages(self, version: str, container: str) -> None:
        logger.warning("!!! Disabling ESM security updates for ubuntu - no access without privilege !!!")
        await self.docker.exec(container, "rm", "-f", ESM_SOURCE_LIST)
        await self.docker.exec(container, "apt-get", "update")
        await self.docker.exec(
            container, "apt-get", "install", "-y", "openssh-server", "openssh-client"
        )

    async def start_sshd(self, container: str) -> None:
        await self.docker.exec(container, "service", "ssh", "restart")
