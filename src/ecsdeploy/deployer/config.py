"""Configuration loading."""

import asyncio
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError
from ruamel.yaml import YAML

from ecsdeploy.models.config import DeployerConfig


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = Path("./config/config.yaml")


class ConfigError(Exception):
    """Configuration could not be loaded."""
    pass


def merge_overrides(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Merge overrides into base, ignoring unset (None) values."""
    merged = dict(base)
    for key, value in overrides.items():
        if value is None:
            continue
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_overrides(merged[key], value)
        elif isinstance(value, dict):
            merged[key] = merge_overrides({}, value)
        elif isinstance(value, (list, tuple)) and not value:
            continue
        else:
            merged[key] = value
    return merged


class ConfigManager:
    """Loads deployer configuration from YAML, command line and environment."""

    def __init__(self, config_file: Optional[Path] = None):
        """Initialize configuration manager."""
        self.config_file = Path(config_file) if config_file else None
        self.yaml = YAML(typ="safe")
        self.config: Optional[DeployerConfig] = None
        self.source: Optional[Path] = None

    async def load(self, overrides: Optional[Dict[str, Any]] = None) -> DeployerConfig:
        """Load configuration, applying overrides on top of the file."""
        data = await self._load_file()
        data = merge_overrides(data, overrides or {})

        if os.environ.get("DEBUG"):
            data["log_level"] = "DEBUG"

        try:
            self.config = DeployerConfig(**data)
        except ValidationError as e:
            logger.error(f"Invalid configuration: {e}")
            raise
        return self.config

    async def _load_file(self) -> Dict[str, Any]:
        """Read the explicit config file, or the default one when present."""
        if self.config_file is not None:
            if not self.config_file.exists():
                raise ConfigError(f"Config file not found: {self.config_file}")
            path = self.config_file
        elif DEFAULT_CONFIG_FILE.exists():
            path = DEFAULT_CONFIG_FILE
        else:
            logger.warning("Config file not found, skipping")
            return {}

        data = await self._read_yaml(path)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config file must contain a mapping: {path}")

        self.source = path
        logger.info(f"Using config file {path}")
        return data

    async def _read_yaml(self, file_path: Path) -> Dict[str, Any]:
        """Read and parse YAML file."""
        content = await asyncio.to_thread(file_path.read_text)
        return self.yaml.load(content)
