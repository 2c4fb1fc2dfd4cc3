"""Fedora family."""

from dockprov.models.platform import Family
from dockprov.platforms.base import PlatformHandler


class FedoraHandler(PlatformHandler):
    """dnf-based images."""

    family = Family.FEDORA

    async def install_packages(self, version: str, container: str) -> None:
        await self.docker.exec(container, "dnf", "clean", "all")
        await self.docker.exec(
            container, "dnf", "install", "-y", "sudo", "openssh-server", "openssh-clients"
        )
        await self.docker.exec(container, "ssh-keygen", "-A")

    async def start_sshd(self, container: str) -> None:
        await self.run_detached_sshd(container)
