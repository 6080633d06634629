"""
Storage layer for the contact engine.

This module provides the abstract contact storage interface, its JSON file
implementation, and a factory that builds a store from configuration.
"""

from .interfaces.contact_storage_interface import ContactStorageInterface
from .factory import create_storage, list_available_backends, is_backend_available

__all__ = [
    "ContactStorageInterface",
    "create_storage",
    "list_available_backends",
    "is_backend_available",
]
