"""Handles loading configuration from YAML files."""

import yaml
import os
import logging
from typing import Any, Dict, Optional
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    'log_dir': 'logs',
    'log_file': 'beatscript.log',
    'batch_log_file': 'beatscript_batch.log',
    'output_format': 'json',
    'script_extensions': ['.md', '.txt'],
    'interpolate': True,
}

class ConfigLoader:
    """Loads configuration settings from a YAML file."""

    def load_config(self, config_path: str) -> dict:
        """
        Loads configuration from the specified YAML file path.

        Args:
            config_path: The path to the YAML configuration file.

        Returns:
            A dictionary containing the loaded configuration settings.

        Raises:
            FileNotFoundError: If the configuration file does not exist.
            ConfigurationError: If the file cannot be parsed as YAML or
                              if there are other reading errors.
        """
        logger.info(f"Attempting to load configuration from: {config_path}")
        if not os.path.exists(config_path):
            logger.error(f"Configuration file not found at path: {config_path}")
            raise FileNotFoundError(f"Configuration file not found: {config_path}")
        if not os.path.isfile(config_path):
            logger.error(f"Configuration path is not a file: {config_path}")
            raise ConfigurationError(f"Configuration path is not a file: {config_path}")

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"Error parsing YAML configuration file {config_path}: {e}", exc_info=True)
            raise ConfigurationError(f"Invalid YAML format in {config_path}: {e}") from e
        except IOError as e:
            logger.error(f"Error reading configuration file {config_path}: {e}", exc_info=True)
            raise ConfigurationError(f"Could not read configuration file {config_path}: {e}") from e

        if not isinstance(config, dict):
            # e.g. an empty file, or a bare string at the root
            logger.error(f"Configuration file {config_path} did not load as a dictionary (root object).")
            raise ConfigurationError(f"Invalid YAML structure in {config_path}. Root must be a mapping (dictionary).")
        logger.info(f"Configuration loaded successfully from {config_path}")
        return config

    def load_or_default(self, config_path: Optional[str]) -> dict:
        """
        Loads a config file on top of DEFAULT_CONFIG.

        A missing file is not an error here: the defaults are returned as-is.
        Malformed files still raise ConfigurationError.
        """
        config = dict(DEFAULT_CONFIG)
        if config_path and os.path.exists(config_path):
            config.update(self.load_config(config_path))
        else:
            logger.info(f"No configuration file at {config_path}. Using defaults.")
        return config
