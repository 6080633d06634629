"""
Shared fixtures for the contact engine tests.
"""

import json
import pytest

import contact_core.config.config_manager as config_module
from contact_core.config.config_manager import ConfigManager
from contact_core.storage.backends.json_file import JsonFileContactStorage


SEED_CONTACTS = [
    {"id": "a1", "name": "Ann", "email": "a@x.com", "phone": "1"},
]


@pytest.fixture
def seed_contacts():
    """A fresh copy of the records every seeded store starts with."""
    return [dict(record) for record in SEED_CONTACTS]


@pytest.fixture
def contacts_file(tmp_path, seed_contacts):
    """A pre-existing store file holding the seed records."""
    path = tmp_path / "db" / "contacts.json"
    path.parent.mkdir()
    path.write_text(json.dumps(seed_contacts, indent=2), encoding="utf-8")
    return path


@pytest.fixture
def store(contacts_file):
    """A JSON file contact store over the seeded file."""
    return JsonFileContactStorage(path=contacts_file)


@pytest.fixture
def fresh_config(monkeypatch):
    """Reset the configuration singleton and clear related environment variables."""
    for var in (
        "ENVIRONMENT",
        "DEBUG",
        "CONTACTS_STORAGE_BACKEND",
        "CONTACTS_PATH",
        "CONTACTS_INDENT",
        "LOG_LEVEL",
        "LOG_FORMAT",
        "LOG_JSON",
    ):
        monkeypatch.delenv(var, raising=False)

    ConfigManager._instance = None
    config_module._config_manager = None
    yield
    ConfigManager._instance = None
    config_module._config_manager = None
