"""Task request model."""

from pathlib import Path
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from dockprov.errors import RequestValidationError


class TaskRequest(BaseModel):
    """A single provision or tear_down request."""
    platform: Optional[str] = Field(None, description="image[:tag] to provision")
    action: Literal["provision", "tear_down"]
    node_name: Optional[str] = Field(None, description="host:port to tear down")
    inventory: Optional[str] = Field(None, description="Directory holding inventory.yaml")
    vars: Optional[Dict[Any, Any]] = Field(None, description="Extra node vars")

    model_config = ConfigDict(extra="ignore")

    @field_validator("vars", mode="before")
    @classmethod
    def parse_vars(cls, v):
        """Decode YAML-encoded vars into a mapping."""
        if v is None or isinstance(v, dict):
            return v
        if not isinstance(v, str):
            raise ValueError("vars must be a YAML-encoded string")
        if not v.strip():
            return None
        try:
            data = YAML(typ="safe").load(v)
        except YAMLError as e:
            raise ValueError(f"vars is not valid YAML: {e}")
        if data is None:
            return None
        if not isinstance(data, dict):
            raise ValueError("vars must decode to a mapping")
        return data

    @model_validator(mode="after")
    def check_target(self):
        """Require exactly one of node_name and platform, matching the action."""
        if self.action == "tear_down" and self.node_name is None:
            raise ValueError("specify a node_name when tearing down")
        if self.action == "provision" and self.platform is None:
            raise ValueError("specify a platform when provisioning")
        if (self.node_name is None) == (self.platform is None):
            if self.action == "tear_down":
                raise ValueError("specify only a node_name, not platform, when tearing down")
            if self.action == "provision":
                raise ValueError("specify only a platform, not node_name, when provisioning")
            raise ValueError("specify only one of: node_name, platform")
        return self

    @property
    def inventory_dir(self) -> Path:
        """Inventory directory, defaulting to the working directory."""
        return Path(self.inventory) if self.inventory else Path.cwd()

    @classmethod
    def from_payload(cls, payload: Any) -> "TaskRequest":
        """Validate a decoded request, raising RequestValidationError."""
        if not isinstance(payload, dict):
            raise RequestValidationError("request must be a JSON object")
        try:
            return cls.model_validate(payload)
        except ValidationError as e:
            raise RequestValidationError(_format_errors(e)) from e


def _format_errors(error: ValidationError) -> str:
    messages = []
    for err in error.errors():
        ctx_error = err.get("ctx", {}).get("error")
        if ctx_error is not None:
            messages.append(str(ctx_error))
        else:
            loc = ".".join(str(part) for part in err["loc"]) or "request"
            messages.append(f"{loc}: {err['msg']}")
    return "; ".join(messages)
