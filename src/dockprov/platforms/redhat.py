"""Red Hat family: CentOS, Oracle, Scientific, EL and EOS images."""

import logging
import re

from dockprov.models.platform import Family
from dockprov.platforms.base import PlatformHandler, keygen_command


logger = logging.getLogger(__name__)

YUM_INSTALL = "yum install -y sudo openssh-server openssh-clients"

# EL6 images regularly corrupt their rpmdb ("rpmdb: unable to join the
# environment"); rebuild it before installing anything.
RPMDB_RECOVERY = (
    "rm -f /var/lib/rpm/__db*; "
    "db_verify /var/lib/rpm/Packages; "
    "rpm --rebuilddb; "
    "yum clean all; "
    f"{YUM_INSTALL}"
)

HOST_KEY_TYPES = ("rsa", "dsa")

# Containers whose name mentions 7 or 8 have no usable service restart path.
MODERN_INIT_PATTERN = re.compile(r"7|8")


class RedHatHandler(PlatformHandler):
    """yum-based images."""

    family = Family.REDHAT

    async def install_packages(self, version: str, container: str) -> None:
        if version == "6":
            logger.info(f"Rebuilding rpmdb in {container} before install")
            await self.docker.exec(container, "bash", "-exc", RPMDB_RECOVERY)
        else:
            await self.docker.exec(container, *YUM_INSTALL.split())

        await self.ensure_host_keys(container)

    async def ensure_host_keys(self, container: str) -> None:
        """Generate the RSA and DSA host keys that are not already present."""
        listing = await self.docker.exec(container, "ls", "/etc/ssh/")
        for key_type in HOST_KEY_TYPES:
            if f"ssh_host_{key_type}_key" in listing:
                logger.debug(f"{key_type} host key already present in {container}")
                continue
            await self.docker.exec(container, *keygen_command(key_type))

    async def start_sshd(self, container: str) -> None:
        if not MODERN_INIT_PATTERN.search(container):
            await self.docker.exec(container, "service", "sshd", "restart")
        else:
            await self.run_detached_sshd(container)
