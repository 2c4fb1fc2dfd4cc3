"""Base platform handler interface."""

import logging
from abc import ABC, abstractmethod
from typing import List, Tuple

from dockprov.models.platform import Family
from dockprov.providers.docker import DockerProvider


logger = logging.getLogger(__name__)

SSHD_CONFIG = "/etc/ssh/sshd_config"
ROOT_PASSWORD = "root"

# Applied in order to sshd_config by every family.
SSHD_CONFIG_EDITS: List[Tuple[str, ...]] = [
    ("sed", "-ri", "s/^#?PermitRootLogin .*/PermitRootLogin yes/", SSHD_CONFIG),
    ("sed", "-ri", "s/^#?PasswordAuthentication .*/PasswordAuthentication yes/", SSHD_CONFIG),
    ("sed", "-ri", "s/^#?UseDNS .*/UseDNS no/", SSHD_CONFIG),
    ("sed", "-e", "/HostKey.*ssh_host_e.*_key/ s/^#*/#/", "-ri", SSHD_CONFIG),
]

DISABLE_PAM: Tuple[str, ...] = ("sed", "-ri", "s/^#?UsePAM .*/UsePAM no/", SSHD_CONFIG)


def keygen_command(key_type: str) -> Tuple[str, ...]:
    """ssh-keygen invocation writing the host key of ``key_type``."""
    return ("ssh-keygen", "-t", key_type, "-f", f"/etc/ssh/ssh_host_{key_type}_key", "-N", "")


class PlatformHandler(ABC):
    """Installs and starts an SSH daemon inside a container of one family."""

    family: Family

    def __init__(self, docker: DockerProvider):
        self.docker = docker

    async def install_ssh(self, version: str, container: str) -> None:
        """Install sshd, then prepare its runtime directory and root password."""
        logger.info(f"Installing SSH in {container} ({self.family.value} {version})")
        await self.install_packages(version, container)

        await self.docker.exec(container, "mkdir", "-p", "/var/run/sshd")
        await self.docker.exec(
            container, "bash", "-c", f"echo root:{ROOT_PASSWORD} | /usr/sbin/chpasswd"
        )

    async def harden_ssh(self, container: str) -> None:
        """Allow root password logins and (re)start the daemon."""
        logger.info(f"Configuring sshd in {container}")
        for edit in SSHD_CONFIG_EDITS:
            await self.docker.exec(container, *edit)
        await self.start_sshd(container)

    async def run_detached_sshd(self, container: str) -> None:
        """Launch sshd in the foreground of a detached exec."""
        await self.docker.exec(container, "/usr/sbin/sshd", "-D", detach=True)

    @abstractmethod
    async def install_packages(self, version: str, container: str) -> None:
        """Family-specific package installation and key generation."""
        pass

    @abstractmethod
    async def start_sshd(self, container: str) -> None:
        """Family-specific daemon (re)start."""
        pass
