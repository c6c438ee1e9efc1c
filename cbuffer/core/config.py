"""
Centralized configuration management.

Configuration is read from CBUFFER_* environment variables, optionally
loaded from a .env file, validated, and exposed as a ``BufferConfig``.
"""

import logging
import os
from pathlib import Path
from typing import Dict, Optional, Any

from dotenv import load_dotenv

from ..types.models import BufferConfig
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_ENV_FILE = Path(__file__).parent.parent.parent / 'config' / '.env'


class ConfigManager:
    """
    Configuration manager with validation and type conversion.

    All variables are optional. Values missing from the environment fall
    back to ``OPTIONAL_VARS``, then environment-specific defaults are
    applied to whatever was not set explicitly.
    """

    ENV_PREFIX = 'CBUFFER_'

    # Optional environment variables with their default values
    OPTIONAL_VARS = {
        'CBUFFER_CAPACITY': 50,
        'CBUFFER_LOG_LEVEL': 'INFO',
        'CBUFFER_LOG_DIR': None,
        'CBUFFER_MAX_LOG_ENTRIES': 1000,
        'CBUFFER_ENVIRONMENT': 'development',
        'CBUFFER_DEBUG_MODE': False
    }

    # Environment variable types for validation
    VAR_TYPES = {
        'CBUFFER_CAPACITY': int,
        'CBUFFER_LOG_LEVEL': str,
        'CBUFFER_LOG_DIR': str,
        'CBUFFER_MAX_LOG_ENTRIES': int,
        'CBUFFER_ENVIRONMENT': str,
        'CBUFFER_DEBUG_MODE': bool
    }

    def __init__(self, env_file_path: Optional[str] = None):
        """
        Initialize the configuration manager.

        Args:
            env_file_path: Optional path to .env file. If not provided,
                          config/.env under the project root is used when present.
        """
        self._config: Optional[BufferConfig] = None
        self._env_file_path = env_file_path
        self._load_environment(env_file_path)

    def _load_environment(self, env_file_path: Optional[str] = None, override: bool = False) -> None:
        """Load environment variables from a .env file if one exists."""
        env_path = Path(env_file_path) if env_file_path else DEFAULT_ENV_FILE

        if env_path.exists():
            load_dotenv(dotenv_path=env_path, override=override)
        elif env_file_path:
            logger.warning("Environment file not found at %s", env_path)

    @classmethod
    def _field_name(cls, env_var: str) -> str:
        return env_var[len(cls.ENV_PREFIX):].lower()

    def load_config(self) -> BufferConfig:
        """
        Load and validate configuration from environment variables.

        Returns:
            BufferConfig: Validated configuration object

        Raises:
            ConfigurationError: If any value is invalid
        """
        if self._config is not None:
            return self._config

        config_data = self._extract_config_values()

        try:
            config = BufferConfig(**config_data)
            self._apply_environment_specific_defaults(config)
            config.validate()
        except ValueError as e:
            raise ConfigurationError(
                f"Invalid configuration: {str(e)}",
                validation_errors=[str(e)],
                env_file_path=self._env_file_path
            )

        self._config = config
        return self._config

    def _extract_config_values(self) -> Dict[str, Any]:
        """
        Extract and convert configuration values from environment variables.

        Raises:
            ConfigurationError: If any values cannot be converted
        """
        config_data = {}
        invalid_values = {}

        for env_var, default_value in self.OPTIONAL_VARS.items():
            field_name = self._field_name(env_var)
            env_value = os.getenv(env_var)

            if env_value is None:
                config_data[field_name] = default_value
                continue

            try:
                var_type = self.VAR_TYPES.get(env_var)
                if var_type == int:
                    config_data[field_name] = int(env_value)
                elif var_type == bool:
                    config_data[field_name] = env_value.strip().lower() in ('true', 'yes', '1', 'y')
                elif env_var == 'CBUFFER_LOG_LEVEL':
                    config_data[field_name] = env_value.strip().upper()
                else:
                    config_data[field_name] = env_value
            except (ValueError, TypeError):
                invalid_values[env_var] = env_value

        if invalid_values:
            raise ConfigurationError(
                f"Invalid values for environment variables: {invalid_values}. "
                f"Please check the data types and formats.",
                invalid_values=invalid_values,
                env_file_path=self._env_file_path
            )

        return config_data

    def _apply_environment_specific_defaults(self, config: BufferConfig) -> None:
        """Apply environment defaults only where the variable was not set."""
        for key, value in config.get_environment_specific_defaults().items():
            env_var = self.ENV_PREFIX + key.upper()
            if os.getenv(env_var) is None:
                setattr(config, key, value)

    def get_config(self) -> BufferConfig:
        """
        Get the current configuration.

        Raises:
            ConfigurationError: If configuration hasn't been loaded yet
        """
        if self._config is None:
            raise ConfigurationError("Configuration not loaded. Call load_config() first.")

        return self._config

    def reload_config(self) -> BufferConfig:
        """
        Reload configuration, letting the .env file override current values.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        self._load_environment(self._env_file_path, override=True)
        self._config = None
        return self.load_config()

    def get_config_summary(self) -> Dict[str, Any]:
        """Get a summary of the current configuration."""
        if not self._config:
            return {'status': 'not_loaded'}

        config_dict = self._config.to_dict()
        return {
            'status': 'loaded',
            'environment': config_dict.get('environment', 'development'),
            'debug_mode': config_dict.get('debug_mode', False),
            'values': config_dict
        }

    @staticmethod
    def create_example_env_file(file_path: str = "config/.env.example") -> None:
        """
        Create an example .env file listing every supported variable.

        Args:
            file_path: Path where to create the example file
        """
        env_path = Path(file_path)
        env_path.parent.mkdir(parents=True, exist_ok=True)

        content = [
            "# cbuffer configuration",
            "# Copy this file to .env and uncomment the values you need",
            "",
            "# Buffer",
            "# CBUFFER_CAPACITY=50  # Slots in the backing storage, one is reserved",
            "",
            "# Environment",
            "# CBUFFER_ENVIRONMENT=development  # Options: development, testing, production",
            "# CBUFFER_DEBUG_MODE=false",
            "",
            "# Logging",
            "# CBUFFER_LOG_LEVEL=INFO  # Options: DEBUG, INFO, WARNING, ERROR, CRITICAL",
            "# CBUFFER_LOG_DIR=logs",
            "# CBUFFER_MAX_LOG_ENTRIES=1000",
            ""
        ]

        with open(env_path, 'w', encoding='utf-8') as f:
            f.write('\n'.join(content))


# Global configuration manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config() -> BufferConfig:
    """Load configuration using the global configuration manager."""
    return get_config_manager().load_config()


def get_config() -> BufferConfig:
    """Get the current configuration using the global configuration manager."""
    return get_config_manager().get_config()
