"""Pydantic models for configuration and validation."""

from dockprov.models.config import ProvisionerConfig
from dockprov.models.node import NodeRecord, NodeConfig, NodeFacts, SSHConfig
from dockprov.models.platform import Family, PlatformSpec
from dockprov.models.request import TaskRequest

__all__ = [
    "ProvisionerConfig",
    "NodeRecord",
    "NodeConfig",
    "NodeFacts",
    "SSHConfig",
    "Family",
    "PlatformSpec",
    "TaskRequest",
]
