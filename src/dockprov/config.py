"""Configuration loading."""

import logging
import os
from pathlib import Path
from typing import Optional

from ruamel.yaml import YAML
from pydantic import ValidationError

from dockprov.models.config import ProvisionerConfig


logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "DOCKPROV_CONFIG"


def load_config(path: Optional[Path] = None) -> ProvisionerConfig:
    """Load configuration from ``path`` or $DOCKPROV_CONFIG.

    With neither set the defaults are used. A named file that does not
    exist is an error.
    """
    if path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if not env_path:
            return ProvisionerConfig()
        path = Path(env_path)

    config_file = Path(path)
    if not config_file.exists():
        raise FileNotFoundError(f"Config not found: {config_file}")

    data = YAML(typ="safe").load(config_file.read_text()) or {}
    try:
        config = ProvisionerConfig(**data)
    except ValidationError as e:
        logger.error(f"Invalid config {config_file}: {e}")
        raise

    logger.debug(f"Loaded config: {config_file}")
    return config
