"""
Abstract interface for contact storage backends.

This module defines the contract that all contact storage implementations
must follow to ensure consistent behavior across different backends.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, List, Optional
from contact_core.model.contact import Contact


class ContactStorageInterface(ABC):
    """
    Abstract base class for contact storage backends.

    Records cross this interface as plain dictionaries with ``id``, ``name``,
    ``email`` and ``phone`` keys. "Not found" is reported as ``None``, never
    as an exception.
    """

    # Availability
    @abstractmethod
    async def test_connection(self) -> bool:
        """Test if the backing store can be read and parsed."""
        pass

    @abstractmethod
    async def is_available(self) -> bool:
        """Check if the storage backend is available."""
        pass

    # Raw Contact Operations
    @abstractmethod
    async def list_contacts(self) -> str:
        """
        Return the raw serialized contents of the store.

        Raises:
            OSError: If the store cannot be read
        """
        pass

    @abstractmethod
    async def get_contact_by_id(self, contact_id: str) -> Optional[Dict[str, Any]]:
        """
        Find the first record whose id equals ``contact_id``.

        Returns:
            The matching record, or None if there is no match
        """
        pass

    @abstractmethod
    async def add_contact(self, name: str, email: str, phone: str) -> Dict[str, Any]:
        """
        Append a new record with a freshly generated id.

        Returns:
            The record as written
        """
        pass

    @abstractmethod
    async def remove_contact(self, contact_id: str) -> Optional[Dict[str, Any]]:
        """
        Remove the record whose id equals ``contact_id``.

        Returns:
            The removed record, or None if there was no match
        """
        pass

    # Domain Model Operations
    @abstractmethod
    async def get_contact(self, contact_id: str) -> Optional[Contact]:
        """Retrieve a Contact by ID."""
        pass

    @abstractmethod
    async def get_all_contacts(self) -> List[Contact]:
        """Retrieve every Contact in store order."""
        pass

    @abstractmethod
    async def count_contacts(self) -> int:
        """Return the number of records in the store."""
        pass

    # Synchronous versions for callers without an event loop
    @abstractmethod
    def test_connection_sync(self) -> bool:
        pass

    @abstractmethod
    def list_contacts_sync(self) -> str:
        pass

    @abstractmethod
    def get_contact_by_id_sync(self, contact_id: str) -> Optional[Dict[str, Any]]:
        pass

    @abstractmethod
    def add_contact_sync(self, name: str, email: str, phone: str) -> Dict[str, Any]:
        pass

    @abstractmethod
    def remove_contact_sync(self, contact_id: str) -> Optional[Dict[str, Any]]:
        pass
