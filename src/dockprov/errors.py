"""Exceptions raised while provisioning or tearing down nodes."""

from typing import List, Optional


class ProvisionError(Exception):
    """Base class for all provisioning failures."""
    pass


class UnsupportedPlatform(ProvisionError):
    """Image or family has no known SSH bootstrap sequence."""

    def __init__(self, platform: str):
        self.platform = platform
        super().__init__(f"platform {platform} not yet supported on docker")


class PortRangeExhausted(ProvisionError):
    """Every candidate host port is already forwarded to a container."""

    def __init__(self, start: int, end: int):
        self.start = start
        self.end = end
        super().__init__(f"All front facing ports are in use ({start}-{end}).")


class NodeNotFound(ProvisionError):
    """Node name is not present in any inventory group."""

    def __init__(self, node_name: str):
        self.node_name = node_name
        super().__init__(f"node {node_name} not found in inventory")


class InventoryNotFound(ProvisionError):
    """Inventory file is missing where one is required."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Unable to find '{path}'")


class RequestValidationError(ProvisionError):
    """Task request fields are missing or contradictory."""
    pass


class CommandExecutionFailure(ProvisionError):
    """External command exited non-zero."""

    def __init__(
        self,
        cmd: List[str],
        returncode: int,
        stdout: Optional[str] = "",
        stderr: Optional[str] = "",
    ):
        self.cmd = cmd
        self.returncode = returncode
        self.stdout = stdout or ""
        self.stderr = stderr or ""
        super().__init__(
            f"Command failed ({returncode}): {' '.join(cmd)}\n{self.stdout}\n{self.stderr}".rstrip()
        )
