"""YAML loading of storage descriptions.

A storage description names a storage type and its parameters, e.g.::

    type: xwiki
    xwikiUrl: http://localhost:8080
    space: Blog
    timeout: 10
    strictMetadata: false

The loaded mapping is passed unchanged to StorageRegistry.create().
"""

from typing import Any, Dict

import yaml

from src.xwiki_client.errors import ConfigError, FilesystemError


class StorageConfigLoader:
    """Handles loading and validating storage description files."""

    REQUIRED_FIELDS = {'type'}

    @classmethod
    def load(cls, config_path: str) -> Dict[str, Any]:
        """Load a storage description from a YAML file.

        Args:
            config_path: Path to the YAML file

        Returns:
            The description mapping

        Raises:
            FilesystemError: If file cannot be read
            ConfigError: If the file is not a valid description
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise FilesystemError(
                config_path,
                'read',
                'Configuration file not found'
            )
        except PermissionError:
            raise FilesystemError(
                config_path,
                'read',
                'Permission denied'
            )
        except OSError as e:
            raise FilesystemError(
                config_path,
                'read',
                str(e)
            )

        return cls.parse(content)

    @classmethod
    def parse(cls, content: str) -> Dict[str, Any]:
        """Parse and validate a storage description from YAML text.

        Raises:
            ConfigError: If the YAML is malformed or lacks a string 'type'
        """
        try:
            description = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(
                f"Invalid YAML syntax: {str(e)}"
            )

        if description is None:
            raise ConfigError("Configuration file is empty")

        if not isinstance(description, dict):
            raise ConfigError(
                f"Configuration must be a YAML dictionary, got {type(description).__name__}"
            )

        missing = cls.REQUIRED_FIELDS - set(description)
        if missing:
            raise ConfigError(
                f"Missing required field(s): {', '.join(sorted(missing))}"
            )

        if not isinstance(description['type'], str):
            raise ConfigError(
                f"must be a string, got {type(description['type']).__name__}",
                'type'
            )

        return description
