"""Docker provider for creating and removing test containers."""

import logging
import re
from typing import List

from dockprov.utils.process import CommandResult, LocalCommandRunner


logger = logging.getLogger(__name__)

# Images that run systemd need the host cgroup tree; the oldest releases do not.
SYSTEMD_IMAGE_PATTERN = re.compile(r"debian|ubuntu")
LEGACY_INIT_IMAGE_PATTERN = re.compile(r"debian8|ubuntu14")


class DockerProvider:
    """Thin wrapper over the docker CLI."""

    def __init__(self, runner=None, binary: str = "docker"):
        """Initialize docker provider."""
        self.runner = runner or LocalCommandRunner()
        self.binary = binary

    async def _run(self, args: List[str], check: bool = True) -> CommandResult:
        return await self.runner.run([self.binary, *args], check=check)

    async def create(self, image: str, name: str, port: int) -> str:
        """Start a detached, privileged container forwarding ``port`` to 22."""
        logger.info(f"Creating container {name} from {image} on port {port}")
        cmd = ["run", "-d", "-it", *self.volume_args(image), "--privileged",
               "-p", f"{port}:22", "--name", name, image]
        result = await self._run(cmd)
        return result.stdout.strip()

    async def remove(self, name: str) -> None:
        """Force-remove a container."""
        logger.info(f"Removing container {name}")
        await self._run(["rm", "-f", name])

    async def list_containers(self) -> str:
        """Raw ``docker container ls -a`` output.

        The exit status is not checked; a failed listing reads as empty.
        """
        result = await self._run(["container", "ls", "-a"], check=False)
        if result.returncode != 0:
            logger.debug(f"Container listing failed: {result.stderr.strip()}")
        return result.stdout

    async def exec(self, container: str, *command: str, detach: bool = False) -> str:
        """Run a command inside a container and return its stdout."""
        args = ["exec"]
        if detach:
            args.append("-d")
        args.append(container)
        args.extend(command)
        result = await self._run(args)
        return result.stdout

    @staticmethod
    def volume_args(image: str) -> List[str]:
        """Extra volume flags needed by ``image``."""
        if SYSTEMD_IMAGE_PATTERN.search(image) and not LEGACY_INIT_IMAGE_PATTERN.search(image):
            return ["--volume", "/sys/fs/cgroup:/sys/fs/cgroup:ro"]
        return []
