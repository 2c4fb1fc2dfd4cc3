"""Arch Linux family."""

from dockprov.models.platform import Family
from dockprov.platforms.base import DISABLE_PAM, PlatformHandler


class ArchLinuxHandler(PlatformHandler):
    """pacman-based images."""

    family = Family.ARCHLINUX

    async def install_packages(self, version: str, container: str) -> None:
        await self.docker.exec(container, "pacman", "--noconfirm", "-Sy", "archlinux-keyring")
        await self.docker.exec(container, "pacman", "--noconfirm", "-Syu")
        await self.docker.exec(container, "pacman", "-S", "--noconfirm", "openssh")
        await self.docker.exec(container, "ssh-keygen", "-A")
        await self.docker.exec(container, *DISABLE_PAM)
        await self.docker.exec(container, "systemctl", "enable", "sshd")

    async def start_sshd(self, container: str) -> None:
        # Enabled above for boot; systemd is not PID 1 in this container.
        await self.run_detached_sshd(container)
