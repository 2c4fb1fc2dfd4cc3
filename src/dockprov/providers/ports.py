"""Host port allocation for forwarded SSH."""

import logging

from dockprov.errors import PortRangeExhausted
from dockprov.providers.docker import DockerProvider


logger = logging.getLogger(__name__)

PORT_RANGE_START = 2222
PORT_RANGE_END = 2230


async def allocate_port(
    docker: DockerProvider,
    start: int = PORT_RANGE_START,
    end: int = PORT_RANGE_END,
) -> int:
    """Return the first port in ``start..end`` not already forwarded to 22.

    A fresh container listing is taken for every candidate. Nothing reserves
    the port between allocation and container creation.
    """
    for port in range(start, end + 1):
        listing = await docker.list_containers()
        if f"{port}->22" not in listing:
            logger.debug(f"Allocated port {port}")
            return port
        logger.debug(f"Port {port} already in use")

    raise PortRangeExhausted(start, end)
