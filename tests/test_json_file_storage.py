"""
Tests for the JSON file contact store.

Covers the four store operations, their error kinds, the on-disk format,
and the domain-model helpers built on top of them.
"""

import json
import pytest
from unittest.mock import patch

from contact_core.model.contact import Contact, ID_ALPHABET, DEFAULT_ID_SIZE
from contact_core.storage.backends.json_file import JsonFileContactStorage


def read_store(path):
    return json.loads(path.read_text(encoding="utf-8"))


class TestListContacts:
    """Test list_contacts."""

    @pytest.mark.asyncio
    async def test_returns_raw_text_unchanged(self, store, contacts_file):
        raw = contacts_file.read_text(encoding="utf-8")
        assert await store.list_contacts() == raw

    @pytest.mark.asyncio
    async def test_text_parses_to_records_on_disk(self, store, contacts_file):
        assert json.loads(await store.list_contacts()) == read_store(contacts_file)

    @pytest.mark.asyncio
    async def test_missing_file_raises_and_logs(self, tmp_path):
        store = JsonFileContactStorage(path=tmp_path / "missing.json")

        with patch.object(store.logger, "error") as mock_error:
            with pytest.raises(FileNotFoundError):
                await store.list_contacts()

        mock_error.assert_called_once()
        assert "Failed to read contacts file" in mock_error.call_args[0][0]
        assert isinstance(mock_error.call_args.kwargs["error"], FileNotFoundError)

    @pytest.mark.asyncio
    async def test_missing_file_is_not_created(self, tmp_path):
        path = tmp_path / "nested" / "contacts.json"
        store = JsonFileContactStorage(path=path)

        with pytest.raises(FileNotFoundError):
            await store.list_contacts()

        assert not path.exists()
        assert not path.parent.exists()


class TestGetContactById:
    """Test get_contact_by_id."""

    @pytest.mark.asyncio
    async def test_returns_matching_record(self, store):
        record = await store.get_contact_by_id("a1")
        assert record == {"id": "a1", "name": "Ann", "email": "a@x.com", "phone": "1"}

    @pytest.mark.asyncio
    async def test_absent_id_returns_none(self, store):
        assert await store.get_contact_by_id("nope") is None

    @pytest.mark.asyncio
    async def test_returns_first_match_for_duplicate_ids(self, tmp_path):
        path = tmp_path / "contacts.json"
        path.write_text(json.dumps([
            {"id": "dup", "name": "First", "email": "", "phone": ""},
            {"id": "dup", "name": "Second", "email": "", "phone": ""},
        ]), encoding="utf-8")
        store = JsonFileContactStorage(path=path)

        record = await store.get_contact_by_id("dup")
        assert record["name"] == "First"

    @pytest.mark.asyncio
    async def test_skips_non_object_entries(self, tmp_path):
        path = tmp_path / "contacts.json"
        path.write_text(json.dumps(["a1", None, {"id": "a1", "name": "Ann"}]), encoding="utf-8")
        store = JsonFileContactStorage(path=path)

        assert await store.get_contact_by_id("a1") == {"id": "a1", "name": "Ann"}

    @pytest.mark.asyncio
    async def test_malformed_json_raises_parse_error(self, tmp_path):
        path = tmp_path / "contacts.json"
        path.write_text("[{not json", encoding="utf-8")
        store = JsonFileContactStorage(path=path)

        with pytest.raises(json.JSONDecodeError):
            await store.get_contact_by_id("a1")

    @pytest.mark.asyncio
    async def test_non_array_json_raises_value_error(self, tmp_path):
        path = tmp_path / "contacts.json"
        path.write_text('{"id": "a1"}', encoding="utf-8")
        store = JsonFileContactStorage(path=path)

        with pytest.raises(ValueError, match="JSON array"):
            await store.get_contact_by_id("a1")

    @pytest.mark.asyncio
    async def test_missing_file_raises_io_error(self, tmp_path):
        store = JsonFileContactStorage(path=tmp_path / "missing.json")

        with pytest.raises(FileNotFoundError):
            await store.get_contact_by_id("a1")


class TestAddContact:
    """Test add_contact."""

    @pytest.mark.asyncio
    async def test_returns_new_record_with_generated_id(self, store):
        record = await store.add_contact("Bo", "b@x.com", "2")

        assert list(record.keys()) == ["id", "name", "email", "phone"]
        assert record["name"] == "Bo"
        assert record["email"] == "b@x.com"
        assert record["phone"] == "2"
        assert len(record["id"]) == DEFAULT_ID_SIZE
        assert all(ch in ID_ALPHABET for ch in record["id"])

    @pytest.mark.asyncio
    async def test_added_record_is_retrievable(self, store):
        record = await store.add_contact("Bo", "b@x.com", "2")

        fetched = await store.get_contact_by_id(record["id"])
        assert fetched == {"id": record["id"], "name": "Bo", "email": "b@x.com", "phone": "2"}

    @pytest.mark.asyncio
    async def test_appends_and_preserves_existing_records(self, store, contacts_file, seed_contacts):
        record = await store.add_contact("Bo", "b@x.com", "2")

        contacts = read_store(contacts_file)
        assert len(contacts) == len(seed_contacts) + 1
        assert contacts[:-1] == seed_contacts
        assert contacts[-1] == record

    @pytest.mark.asyncio
    async def test_ids_differ_between_adds(self, store):
        first = await store.add_contact("Bo", "b@x.com", "2")
        second = await store.add_contact("Bo", "b@x.com", "2")
        assert first["id"] != second["id"]

    @pytest.mark.asyncio
    async def test_accepts_any_field_values(self, store):
        record = await store.add_contact("", "not-an-email", "call me maybe")
        assert await store.get_contact_by_id(record["id"]) == record

    @pytest.mark.asyncio
    async def test_writes_two_space_indentation(self, store, contacts_file):
        await store.add_contact("Bo", "b@x.com", "2")

        text = contacts_file.read_text(encoding="utf-8")
        assert text == json.dumps(read_store(contacts_file), indent=2, ensure_ascii=False)
        assert text.startswith('[\n  {\n    "id"')
        assert not text.endswith("\n")

    @pytest.mark.asyncio
    async def test_writes_non_ascii_as_is(self, store, contacts_file):
        await store.add_contact("Zoë", "z@x.com", "3")
        assert "Zoë" in contacts_file.read_text(encoding="utf-8")

    @pytest.mark.asyncio
    async def test_custom_indent(self, contacts_file):
        store = JsonFileContactStorage(path=contacts_file, indent=4)
        await store.add_contact("Bo", "b@x.com", "2")

        assert contacts_file.read_text(encoding="utf-8").startswith('[\n    {\n        "id"')

    @pytest.mark.asyncio
    async def test_adds_to_empty_store(self, tmp_path):
        path = tmp_path / "contacts.json"
        path.write_text("[]", encoding="utf-8")
        store = JsonFileContactStorage(path=path)

        record = await store.add_contact("Bo", "b@x.com", "2")
        assert read_store(path) == [record]

    @pytest.mark.asyncio
    async def test_missing_file_raises_without_creating_it(self, tmp_path):
        path = tmp_path / "contacts.json"
        store = JsonFileContactStorage(path=path)

        with pytest.raises(FileNotFoundError):
            await store.add_contact("Bo", "b@x.com", "2")
        assert not path.exists()

    @pytest.mark.asyncio
    async def test_malformed_json_is_left_untouched(self, tmp_path):
        path = tmp_path / "contacts.json"
        path.write_text("not json", encoding="utf-8")
        store = JsonFileContactStorage(path=path)

        with pytest.raises(json.JSONDecodeError):
            await store.add_contact("Bo", "b@x.com", "2")
        assert path.read_text(encoding="utf-8") == "not json"


class TestRemoveContact:
    """Test remove_contact."""

    @pytest.mark.asyncio
    async def test_removes_and_returns_record(self, store, contacts_file):
        removed = await store.remove_contact("a1")

        assert removed == {"id": "a1", "name": "Ann", "email": "a@x.com", "phone": "1"}
        assert read_store(contacts_file) == []
        assert await store.get_contact_by_id("a1") is None

    @pytest.mark.asyncio
    async def test_absent_id_returns_none_and_leaves_file_alone(self, store, contacts_file):
        before = contacts_file.read_text(encoding="utf-8")

        with patch.object(store, "_write_contacts") as mock_write:
            assert await store.remove_contact("nope") is None

        mock_write.assert_not_called()
        assert contacts_file.read_text(encoding="utf-8") == before

    @pytest.mark.asyncio
    async def test_preserves_order_of_remaining_records(self, store, contacts_file):
        bo = await store.add_contact("Bo", "b@x.com", "2")
        cy = await store.add_contact("Cy", "c@x.com", "3")

        await store.remove_contact(bo["id"])

        assert [c["id"] for c in read_store(contacts_file)] == ["a1", cy["id"]]

    @pytest.mark.asyncio
    async def test_removes_every_record_sharing_the_id(self, tmp_path):
        path = tmp_path / "contacts.json"
        path.write_text(json.dumps([
            {"id": "dup", "name": "First", "email": "", "phone": ""},
            {"id": "keep", "name": "Keep", "email": "", "phone": ""},
            {"id": "dup", "name": "Second", "email": "", "phone": ""},
        ]), encoding="utf-8")
        store = JsonFileContactStorage(path=path)

        removed = await store.remove_contact("dup")

        assert removed["name"] == "First"
        assert [c["id"] for c in read_store(path)] == ["keep"]

    @pytest.mark.asyncio
    async def test_write_failure_propagates(self, store):
        with patch.object(
            store, "_run_blocking", side_effect=[store.path.read_text(), PermissionError("denied")]
        ):
            with pytest.raises(PermissionError):
                await store.remove_contact("a1")


class TestStoreScenario:
    """End-to-end add then remove against a seeded store."""

    @pytest.mark.asyncio
    async def test_add_then_remove(self, store, contacts_file):
        bo = await store.add_contact("Bo", "b@x.com", "2")
        assert bo["name"] == "Bo"
        assert await store.count_contacts() == 2

        removed = await store.remove_contact("a1")
        assert removed["id"] == "a1"

        contacts = read_store(contacts_file)
        assert contacts == [bo]


class TestDomainModelOperations:
    """Test the Contact-returning helpers."""

    @pytest.mark.asyncio
    async def test_get_contact(self, store):
        contact = await store.get_contact("a1")
        assert contact == Contact("Ann", "a@x.com", "1", contact_id="a1")

    @pytest.mark.asyncio
    async def test_get_contact_absent(self, store):
        assert await store.get_contact("nope") is None

    @pytest.mark.asyncio
    async def test_get_all_contacts_in_order(self, store):
        bo = await store.add_contact("Bo", "b@x.com", "2")

        contacts = await store.get_all_contacts()
        assert [c.contact_id for c in contacts] == ["a1", bo["id"]]
        assert all(isinstance(c, Contact) for c in contacts)

    @pytest.mark.asyncio
    async def test_count_contacts(self, store, seed_contacts):
        assert await store.count_contacts() == len(seed_contacts)


class TestAvailability:
    """Test test_connection and is_available."""

    @pytest.mark.asyncio
    async def test_valid_store_is_available(self, store):
        assert await store.test_connection() is True
        assert await store.is_available() is True

    @pytest.mark.asyncio
    async def test_missing_store_is_unavailable(self, tmp_path):
        path = tmp_path / "contacts.json"
        store = JsonFileContactStorage(path=path)

        assert await store.is_available() is False
        assert not path.exists()

    @pytest.mark.asyncio
    async def test_malformed_store_is_unavailable(self, tmp_path):
        path = tmp_path / "contacts.json"
        path.write_text("{}", encoding="utf-8")
        store = JsonFileContactStorage(path=path)

        with patch.object(store.logger, "error") as mock_error:
            assert await store.test_connection() is False
        mock_error.assert_called_once()
