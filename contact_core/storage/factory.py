"""
Storage factory for creating contact storage backend instances.

This module provides a factory function to instantiate the appropriate
contact storage backend based on configuration settings.
"""
import logging
from dataclasses import asdict, is_dataclass
from typing import Dict, Any, Optional, List

from contact_core.storage.interfaces.contact_storage_interface import ContactStorageInterface
from contact_core.config import get_config


class StorageFactory:
    """
    Factory class for creating contact storage backend instances.

    Backends are looked up by name; each name maps to a class and to the
    section of ``storage`` configuration that holds its settings.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self._backends = {}
        self._register_backends()

    def _register_backends(self):
        """Register available storage backends."""
        from contact_core.storage.backends.json_file import JsonFileContactStorage
        self._backends['json_file'] = JsonFileContactStorage

    def create_storage(self, backend_type: Optional[str] = None,
                       config_override: Optional[Dict[str, Any]] = None) -> ContactStorageInterface:
        """
        Create a contact storage backend instance.

        Args:
            backend_type: Type of backend to create ('json_file').
                          If None, uses configuration setting.
            config_override: Optional configuration override for the backend.

        Returns:
            Configured storage backend instance

        Raises:
            ValueError: If the backend type is not supported
        """
        config = get_config()

        if backend_type is None:
            backend_type = config.config.storage.backend

        if backend_type not in self._backends:
            available_backends = list(self._backends.keys())
            raise ValueError(f"Unsupported backend type '{backend_type}'. "
                             f"Available backends: {available_backends}")

        backend_class = self._backends[backend_type]
        backend_config = self._get_backend_config(backend_type, config, config_override)

        if backend_type == 'json_file':
            storage = self._create_json_file_storage(backend_class, backend_config)
        else:
            storage = backend_class(**backend_config)

        self.logger.info(f"Created {backend_type} contact storage")
        return storage

    def _get_backend_config(self, backend_type: str, config: Any,
                            config_override: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """Get configuration for a specific backend."""
        backend_config = {}

        backend_specific_config = getattr(config.config.storage, backend_type, None)
        if is_dataclass(backend_specific_config):
            backend_config = asdict(backend_specific_config)

        if config_override:
            backend_config.update(config_override)

        return backend_config

    def _create_json_file_storage(self, backend_class, config: Dict[str, Any]):
        """Create JSON file storage instance with proper configuration."""
        return backend_class(
            path=config.get('path', './db/contacts.json'),
            indent=config.get('indent', 2)
        )

    def list_available_backends(self) -> List[str]:
        """
        List all available storage backends.

        Returns:
            List of backend type names
        """
        return list(self._backends.keys())

    def is_backend_available(self, backend_type: str) -> bool:
        """
        Check if a specific backend is available.

        Args:
            backend_type: Type of backend to check

        Returns:
            True if backend is available, False otherwise
        """
        return backend_type in self._backends


# Global factory instance
_storage_factory = StorageFactory()


def create_storage(backend_type: Optional[str] = None,
                   config_override: Optional[Dict[str, Any]] = None) -> ContactStorageInterface:
    """
    Create a contact storage backend instance using the global factory.

    Args:
        backend_type: Type of backend to create ('json_file').
                      If None, uses configuration setting.
        config_override: Optional configuration override for the backend.

    Returns:
        Configured storage backend instance
    """
    return _storage_factory.create_storage(backend_type, config_override)


def list_available_backends() -> List[str]:
    return _storage_factory.list_available_backends()


def is_backend_available(backend_type: str) -> bool:
    return _storage_factory.is_backend_available(backend_type)
