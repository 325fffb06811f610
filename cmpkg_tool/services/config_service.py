"""Configuration management service"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

import yaml

from ..api.exceptions import ConfigError
from ..constants import ENV_CONFIG_PATH, ENV_JWT_SECRET, PROJECT_CONFIG_FILE
from ..models.config import ToolConfig

logger = logging.getLogger(__name__)


class ConfigService:
    """Service for loading tool configuration"""

    def __init__(self, working_dir: Optional[Path] = None):
        """Initialize config service

        Args:
            working_dir: Directory searched for .cmpkg-tool.yaml
        """
        self.working_dir = Path(working_dir) if working_dir else Path.cwd()

    def find_config(self) -> Optional[Path]:
        """Locate the configuration file

        Returns:
            Path from CMPKG_TOOL_CONFIG, else .cmpkg-tool.yaml in the working
            directory, else None
        """
        env_path = os.environ.get(ENV_CONFIG_PATH)
        if env_path:
            return Path(env_path)

        candidate = self.working_dir / PROJECT_CONFIG_FILE
        if candidate.is_file():
            return candidate
        return None

    def load(self, path: Optional[Union[str, Path]] = None) -> ToolConfig:
        """Load configuration

        Missing configuration yields the built-in defaults. The JWT secret
        can be overridden with MARKETPLACE_JWT_SECRET.

        Args:
            path: Explicit configuration file

        Returns:
            Loaded configuration

        Raises:
            ConfigError: If the file is missing, unreadable or malformed
        """
        config_path = Path(path) if path else self.find_config()

        if config_path is None:
            logger.debug("No configuration file, using defaults")
            config = ToolConfig()
        else:
            config = self._load_file(config_path)

        secret = os.environ.get(ENV_JWT_SECRET)
        if secret:
            config.jwt_secret = secret

        return config

    def _load_file(self, config_path: Path) -> ToolConfig:
        if not config_path.is_file():
            raise ConfigError(f"Configuration file not found: {config_path}")

        logger.debug(f"Loading configuration from {config_path}")

        with open(config_path, 'r', encoding='utf-8') as f:
            content = f.read()

        # Expand environment variables in the file
        content = os.path.expandvars(content)

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}")

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration root must be a mapping: {config_path}")

        try:
            return ToolConfig.from_dict(data)
        except (TypeError, ValueError, AttributeError) as e:
            raise ConfigError(f"Invalid configuration in {config_path}: {e}")
