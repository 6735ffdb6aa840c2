"""Configuration loader for YAML files."""

import os
import yaml
from pathlib import Path
from typing import Any, Dict, Optional

from .config_schema import AppConfig

CONFIG_PATH_ENV = "GARBI_CONFIG"

# Provider sections whose api_key may come from the environment instead of the file.
API_KEY_ENV = {
    "openai": "OPENAI_API_KEY",
    "gemini": "GEMINI_API_KEY",
}


def _apply_env_api_keys(config_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Fill missing provider api_key values from environment variables."""
    llm = config_dict.get("llm") or {}
    for provider, env_name in API_KEY_ENV.items():
        section = llm.get(provider)
        if isinstance(section, dict) and not section.get("api_key"):
            value = os.environ.get(env_name)
            if value:
                section["api_key"] = value
    return config_dict


class ConfigLoader:
    """Load and validate configuration from YAML files."""

    @staticmethod
    def load_config(path: Optional[str] = None) -> AppConfig:
        """
        Load configuration from YAML file.

        Args:
            path: Path to configuration file. Defaults to $GARBI_CONFIG,
                then config.yaml

        Returns:
            Validated AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        path = path or os.environ.get(CONFIG_PATH_ENV) or "config.yaml"
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(config_path, "r", encoding="utf-8") as f:
            config_dict = yaml.safe_load(f)

        if not config_dict:
            raise ValueError("Configuration file is empty")

        config = AppConfig(**_apply_env_api_keys(config_dict))
        config.validate()

        return config

    @staticmethod
    def validate_config(config: dict) -> bool:
        """
        Validate configuration dictionary.

        Args:
            config: Configuration dictionary

        Returns:
            True if valid

        Raises:
            ValueError: If config is invalid
        """
        app_config = AppConfig(**config)
        app_config.validate()
        return True


def load_config(path: Optional[str] = None) -> AppConfig:
    """
    Convenience function to load configuration.

    Args:
        path: Path to configuration file

    Returns:
        Validated AppConfig instance
    """
    return ConfigLoader.load_config(path)
