"""Configuration models."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProvisionerConfig(BaseModel):
    """Provisioner configuration."""
    log_level: str = Field(default="INFO")
    docker_binary: str = Field(default="docker")
    hostname: str = Field(default="localhost")
    group_name: str = Field(default="ssh_nodes")
    inventory_file: str = Field(default="inventory.yaml")

    model_config = ConfigDict(extra="ignore")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()
