"""
Sampling Configuration Management

Loads and validates the JSON configuration files shipped in this directory.
"""

import json
import logging
from typing import Dict, Any
from pathlib import Path
import jsonschema

logger = logging.getLogger(__name__)

CONFIG_DIR = Path(__file__).resolve().parent

CONFIG_FILES = {
    'sampling': 'sampling.json',
}

SCHEMA_FILES = {
    'sampling': 'sampling.schema.json',
}


class ConfigLoader:
    """Loads and manages sampling configurations."""

    def __init__(self, config_dir=CONFIG_DIR):
        """
        Initialize configuration loader.

        Args:
            config_dir: Directory containing configuration files
        """
        self.config_dir = Path(config_dir)
        self.configs = {}
        self._load_all_configs()

    def _load_all_configs(self) -> None:
        """Load all configuration files."""
        for config_name in CONFIG_FILES:
            self.configs[config_name] = self._load(config_name, default={})

    def _load(self, config_name: str, default):
        config_path = self.config_dir / CONFIG_FILES[config_name]
        if not config_path.exists():
            # Missing file is not an error; keep the fallback config
            return default
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config = json.load(f)
            self._validate(config_name, config)
            return config
        except (OSError, ValueError, jsonschema.ValidationError) as e:
            logger.error("Config load failed", extra={
                "config": config_name,
                "path": str(config_path),
                "error": str(e),
            })
            return default

    def _validate(self, config_name: str, config: Dict[str, Any]) -> None:
        """Validate a config against its JSON Schema when one exists."""
        schema_file = SCHEMA_FILES.get(config_name)
        if schema_file is None:
            return
        schema_path = self.config_dir / schema_file
        if not schema_path.exists():
            schema_path = CONFIG_DIR / schema_file
        with open(schema_path, 'r', encoding='utf-8') as sf:
            schema = json.load(sf)
        jsonschema.validate(instance=config, schema=schema)

    def get_config(self, config_name: str) -> Dict[str, Any]:
        """
        Get configuration by name.

        Args:
            config_name: Name of configuration

        Returns:
            Configuration dictionary
        """
        return self.configs.get(config_name, {})

    def get_all_configs(self) -> Dict[str, Dict[str, Any]]:
        """
        Get all configurations.

        Returns:
            Dictionary of all configurations
        """
        return self.configs.copy()

    def reload_config(self, config_name: str) -> None:
        """
        Reload specific configuration, keeping the prior one on failure.

        Args:
            config_name: Name of configuration to reload
        """
        if config_name in CONFIG_FILES:
            self.configs[config_name] = self._load(
                config_name, default=self.configs.get(config_name, {})
            )


def load_config_file(path) -> Dict[str, Any]:
    """
    Load and validate a standalone sampling config file.

    Raises:
        OSError: If the file cannot be read
        jsonschema.ValidationError: If the config does not match the schema
    """
    with open(path, 'r', encoding='utf-8') as f:
        config = json.load(f)
    with open(CONFIG_DIR / SCHEMA_FILES['sampling'], 'r', encoding='utf-8') as sf:
        schema = json.load(sf)
    jsonschema.validate(instance=config, schema=schema)
    return config


# Global configuration loader instance
config_loader = ConfigLoader()
