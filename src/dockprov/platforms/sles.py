"""SUSE family: SLES and openSUSE images."""

from dockprov.models.platform import Family
from dockprov.platforms.base import DISABLE_PAM, PlatformHandler, keygen_command


class SlesHandler(PlatformHandler):
    """zypper-based images."""

    family = Family.SLES

    async def install_packages(self, version: str, container: str) -> None:
        await self.docker.exec(container, "zypper", "-n", "in", "openssh")
        await self.docker.exec(container, *keygen_command("rsa"))
        await self.docker.exec(container, *keygen_command("dsa"))
        await self.docker.exec(container, *DISABLE_PAM)

    async def start_sshd(self, container: str) -> None:
        await self.run_detached_sshd(container)
