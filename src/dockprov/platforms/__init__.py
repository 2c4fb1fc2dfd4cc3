"""Per-family SSH bootstrap handlers."""

from dockprov.platforms.base import PlatformHandler
from dockprov.platforms.registry import PlatformRegistry
from dockprov.platforms.resolver import match_os_family, resolve_platform

__all__ = [
    "PlatformHandler",
    "PlatformRegistry",
    "match_os_family",
    "resolve_platform",
]
