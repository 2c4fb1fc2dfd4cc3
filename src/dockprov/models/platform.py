"""Platform models."""

from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class Family(str, Enum):
    """OS family used to select SSH bootstrap commands."""
    DEBIAN = "debian"
    FEDORA = "fedora"
    REDHAT = "redhat"
    SLES = "sles"
    ARCHLINUX = "archlinux"


class PlatformSpec(BaseModel):
    """Resolved platform of a container image."""
    family: Family = Field(..., description="OS family")
    version: str = Field(..., description="Image tag, passed through verbatim")

    model_config = ConfigDict(frozen=True)

    def container_name(self, port: int) -> str:
        """Name of the container exposing SSH on ``port``."""
        return f"{self.family.value}_{self.version}-{port}"
