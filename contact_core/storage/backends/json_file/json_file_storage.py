"""
JSON file storage implementation for contact records.

This module provides a file-based implementation of the ContactStorageInterface.
The whole store is a single JSON array; every operation reads and parses the
entire file, and every mutation serializes and overwrites the entire file.
"""
import json
import asyncio
from pathlib import Path
from typing import Dict, Any, List, Optional, Union
from concurrent.futures import ThreadPoolExecutor

from contact_core.storage.interfaces.contact_storage_interface import ContactStorageInterface
from contact_core.model.contact import Contact, generate_contact_id
from contact_core.monitoring.structured_logger import get_logger, OperationLogger


class JsonFileContactStorage(ContactStorageInterface):
    """
    JSON file-based implementation of the ContactStorageInterface.

    The store file must already exist and hold a JSON array; this class never
    creates the file, its directory, or an initial empty array. Writes are
    plain overwrites with no locking, so overlapping mutations from separate
    callers race and the last write wins.
    """

    def __init__(self, path: Union[str, Path] = "./db/contacts.json", indent: int = 2):
        """
        Initialize JsonFileContactStorage with a store path and formatting options.

        Args:
            path: Path of the JSON file holding the contact array
            indent: Indentation used when the array is written back
        """
        self.path = Path(path)
        self.indent = indent
        self.logger = get_logger(__name__, "JsonFileContactStorage")

    # Availability
    async def test_connection(self) -> bool:
        """Test if the store file can be read and holds a JSON array."""
        try:
            await self._load_contacts()
            return True
        except (OSError, ValueError) as e:
            self.logger.error(
                "Contacts store connection test failed", error=e, path=str(self.path)
            )
            return False

    async def is_available(self) -> bool:
        """Check if the storage backend is available."""
        return await self.test_connection()

    # Raw Contact Operations
    async def list_contacts(self) -> str:
        """Return the store file contents exactly as read."""
        try:
            return await self._run_blocking(self.path.read_text, encoding="utf-8")
        except OSError as e:
            self.logger.error(
                f"Failed to read contacts file: {e.strerror or e}", error=e, path=str(self.path)
            )
            raise

    async def get_contact_by_id(self, contact_id: str) -> Optional[Dict[str, Any]]:
        """Retrieve a contact record by its ID."""
        contacts = await self._load_contacts()
        return self._find_contact(contacts, contact_id)

    async def add_contact(self, name: str, email: str, phone: str) -> Dict[str, Any]:
        """Append a new contact record and persist the whole store."""
        contacts = await self._load_contacts()

        record = Contact(name, email, phone, contact_id=generate_contact_id()).to_dict()

        await self._write_contacts([*contacts, record])

        self.logger.info("Added contact", contact_id=record["id"])
        return record

    async def remove_contact(self, contact_id: str) -> Optional[Dict[str, Any]]:
        """Remove a contact record and persist the whole store."""
        contacts = await self._load_contacts()

        record = self._find_contact(contacts, contact_id)
        if record is None:
            return None

        remaining = [c for c in contacts if not self._matches(c, contact_id)]
        await self._write_contacts(remaining)

        self.logger.info("Removed contact", contact_id=contact_id)
        return record

    # Domain Model Operations
    async def get_contact(self, contact_id: str) -> Optional[Contact]:
        """Retrieve a Contact by ID."""
        record = await self.get_contact_by_id(contact_id)
        if record is None:
            return None
        return Contact.from_dict(record)

    async def get_all_contacts(self) -> List[Contact]:
        """Retrieve every Contact in store order."""
        contacts = await self._load_contacts()
        return [Contact.from_dict(c) for c in contacts if isinstance(c, dict)]

    async def count_contacts(self) -> int:
        """Return the number of records in the store."""
        return len(await self._load_contacts())

    # Synchronous versions
    def test_connection_sync(self) -> bool:
        return self._run_async_in_sync_context(self.test_connection())

    def list_contacts_sync(self) -> str:
        return self._run_async_in_sync_context(self.list_contacts())

    def get_contact_by_id_sync(self, contact_id: str) -> Optional[Dict[str, Any]]:
        return self._run_async_in_sync_context(self.get_contact_by_id(contact_id))

    def add_contact_sync(self, name: str, email: str, phone: str) -> Dict[str, Any]:
        return self._run_async_in_sync_context(self.add_contact(name, email, phone))

    def remove_contact_sync(self, contact_id: str) -> Optional[Dict[str, Any]]:
        return self._run_async_in_sync_context(self.remove_contact(contact_id))

    # Private helper methods
    async def _load_contacts(self) -> List[Any]:
        """Read and parse the whole store."""
        contacts = json.loads(await self.list_contacts())
        if not isinstance(contacts, list):
            raise ValueError(
                f"Contacts file {self.path} must hold a JSON array, "
                f"found {type(contacts).__name__}"
            )
        return contacts

    async def _write_contacts(self, contacts: List[Any]):
        """Serialize the whole store and overwrite the file in place."""
        payload = json.dumps(contacts, indent=self.indent, ensure_ascii=False)
        with OperationLogger(
            self.logger, "write_contacts", path=str(self.path), record_count=len(contacts)
        ):
            await self._run_blocking(self.path.write_text, payload, encoding="utf-8")

    @staticmethod
    def _matches(record: Any, contact_id: str) -> bool:
        return isinstance(record, dict) and record.get("id") == contact_id

    def _find_contact(self, contacts: List[Any], contact_id: str) -> Optional[Dict[str, Any]]:
        """Linear scan for the first record with a matching id."""
        for record in contacts:
            if self._matches(record, contact_id):
                return record
        return None

    async def _run_blocking(self, func, *args, **kwargs):
        """Run a blocking file call on the loop's default executor."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, lambda: func(*args, **kwargs))

    def _run_async_in_sync_context(self, coroutine):
        """Run a coroutine to completion on a private loop in a worker thread."""
        with ThreadPoolExecutor(max_workers=1) as executor:
            future = executor.submit(asyncio.run, coroutine)
            return future.result()
