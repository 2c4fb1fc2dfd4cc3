"""Container runtime providers."""

from dockprov.providers.docker import DockerProvider
from dockprov.providers.ports import allocate_port, PORT_RANGE_START, PORT_RANGE_END

__all__ = [
    "DockerProvider",
    "allocate_port",
    "PORT_RANGE_START",
    "PORT_RANGE_END",
]
