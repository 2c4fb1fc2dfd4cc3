"""
dockprov - Docker-backed SSH test nodes.

Provisions short-lived containers for infrastructure tests, exposes each one
over SSH and records it in a Bolt-style inventory.yaml.
"""

__version__ = "1.0.0"

# Re-export key components for easier access
from dockprov.engine import Provisioner
from dockprov.models.config import ProvisionerConfig
from dockprov.models.node import NodeRecord
from dockprov.models.platform import Family, PlatformSpec

__all__ = [
    "Provisioner",
    "ProvisionerConfig",
    "NodeRecord",
    "Family",
    "PlatformSpec",
]
