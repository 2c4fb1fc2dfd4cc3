"""Inventory node models."""

from typing import Literal, Optional, Dict, Any
from pydantic import BaseModel, ConfigDict, Field


class SSHConfig(BaseModel):
    """SSH connection settings for a node."""
    user: str = Field(default="root")
    password: str = Field(default="root")
    port: int = Field(..., ge=1, le=65535)
    host_key_check: bool = Field(default=False, alias="host-key-check")

    model_config = ConfigDict(populate_by_name=True)


class NodeConfig(BaseModel):
    """Transport configuration."""
    transport: Literal["ssh"] = Field(default="ssh")
    ssh: SSHConfig


class NodeFacts(BaseModel):
    """Facts recorded for teardown."""
    provisioner: Literal["docker"] = Field(default="docker")
    container_name: str = Field(..., description="Backing container name")
    platform: str = Field(..., description="Image the container was created from")

    model_config = ConfigDict(extra="allow")


class NodeRecord(BaseModel):
    """A provisioned node as stored in the inventory."""
    uri: str = Field(..., description="Node name, host:port")
    config: NodeConfig
    facts: NodeFacts
    vars: Optional[Dict[Any, Any]] = None

    def to_inventory(self) -> Dict[str, Any]:
        """Plain mapping in the inventory file's key spelling."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_result(self) -> Dict[str, Any]:
        """Same mapping with YAML-only values (dates, sets) made JSON-safe."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
