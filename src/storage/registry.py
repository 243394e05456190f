"""Registry of storage types keyed by their type tag.

Storage descriptions are mappings such as
``{"type": "xwiki", "xwikiUrl": "http://localhost:8080"}``; the registry
picks the factory registered for ``type`` and hands it the description.
The default registry is filled explicitly by build_default_registry().
"""

import logging
from typing import Any, Callable, Dict, List, Mapping

from src.xwiki_client.errors import ConfigError

from .base import Storage
from .xwiki_storage import XWikiStorage

logger = logging.getLogger(__name__)

StorageFactory = Callable[[Mapping[str, Any]], Storage]


class StorageRegistry:
    """Maps storage type tags to factories.

    Example:
        >>> registry = build_default_registry()
        >>> storage = registry.create({"type": "xwiki", "xwikiUrl": "http://localhost:8080"})
    """

    def __init__(self):
        self._factories: Dict[str, StorageFactory] = {}

    def add_storage(self, type_name: str, factory: StorageFactory) -> None:
        """Register a factory under a type tag.

        Raises:
            ConfigError: If the tag is empty or already registered
        """
        if not type_name:
            raise ConfigError("Storage type name cannot be empty", 'type')
        if type_name in self._factories:
            raise ConfigError(f"Storage type '{type_name}' is already registered", 'type')
        self._factories[type_name] = factory
        logger.debug(f"Registered storage type '{type_name}'")

    def types(self) -> List[str]:
        return sorted(self._factories)

    def create(self, description: Mapping[str, Any]) -> Storage:
        """Create a storage from its description.

        Args:
            description: Mapping with a "type" tag plus type-specific parameters

        Returns:
            Storage built by the registered factory

        Raises:
            ConfigError: If the type is missing, not a string or unknown, or if
                the factory rejects the description
        """
        type_name = description.get('type')
        if not isinstance(type_name, str) or not type_name:
            raise ConfigError("Storage description must name a type", 'type')

        factory = self._factories.get(type_name)
        if factory is None:
            raise ConfigError(
                f"Unknown storage type '{type_name}' (known: {', '.join(self.types()) or 'none'})",
                'type'
            )
        return factory(description)


def build_default_registry() -> StorageRegistry:
    """Create a registry holding every storage type shipped with this package."""
    registry = StorageRegistry()
    registry.add_storage(XWikiStorage.type_name, XWikiStorage.from_description)
    return registry
