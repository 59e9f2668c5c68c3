"""
Centralized configuration management for SpotiHooks
Merges JSON config files with environment overrides and validates the
result against the Pydantic schema.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from .config_schema import SpotiHooksConfig, validate_config_dict
from .errors import ConfigurationError

ENV_PREFIX = "SPOTIHOOKS_"

logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages configuration loading and validation"""

    def __init__(self, base_path: Optional[str] = None, *, load_env_file: bool = True):
        self.base_path = Path(base_path) if base_path else Path.cwd()
        self.config_dir = self.base_path / "config"
        if load_env_file:
            # Project-root .env supplies SPOTIHOOKS_* values in dev setups
            load_dotenv(dotenv_path=self.base_path / ".env", override=False)
        self.environment = os.getenv(f"{ENV_PREFIX}ENV", "development")

    def _read_json(self, path: Path) -> Dict[str, Any]:
        if not path.exists():
            return {}
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            raise ConfigurationError(f"Could not load {path.name}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigurationError(f"{path.name} must contain a JSON object")
        return data

    def _env_overrides(self) -> Dict[str, Any]:
        overrides: Dict[str, Any] = {}
        for field_name in SpotiHooksConfig.model_fields:
            value = os.getenv(f"{ENV_PREFIX}{field_name.upper()}")
            if value is not None:
                overrides[field_name] = value
        return overrides

    def load_config(self, config_name: Optional[str] = None) -> SpotiHooksConfig:
        """
        Load configuration based on environment

        Precedence (lowest first): default_config.json, <environment>.json,
        SPOTIHOOKS_* environment variables.

        Raises:
            ConfigurationError: If a file is unreadable or validation fails
        """
        if config_name is None:
            config_name = self.environment

        config = {
            **self._read_json(self.config_dir / "default_config.json"),
            **self._read_json(self.config_dir / f"{config_name}.json"),
            **self._env_overrides(),
        }
        config.setdefault("environment", config_name)

        try:
            validated = validate_config_dict(config)
        except ValueError as e:
            logger.error("❌ Configuration schema validation failed: %s", e)
            raise ConfigurationError(str(e)) from e

        logger.debug("✅ Configuration validated against Pydantic schema")
        return validated

    def get_environment(self) -> str:
        """Get current environment"""
        return self.environment

    def set_environment(self, environment: str) -> None:
        """Set environment for config loading"""
        self.environment = environment

    def list_available_configs(self) -> list[str]:
        """List all available configuration files"""
        if not self.config_dir.exists():
            return []
        return sorted(config_file.stem for config_file in self.config_dir.glob("*.json"))


def load_config(base_path: Optional[str] = None) -> SpotiHooksConfig:
    """Load the configuration for the current environment."""
    return ConfigManager(base_path).load_config()
