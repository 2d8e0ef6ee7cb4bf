"""
Shared fixtures: a throwaway data directory and a client wired to it.
"""

import json

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.storage import JsonFileStore, get_store


@pytest.fixture
def data_dir(tmp_path):
    """Data directory with both resource files present and empty"""
    (tmp_path / "store_times.json").write_text("[]")
    (tmp_path / "store_overwrite.json").write_text("[]")
    return tmp_path


@pytest.fixture
def store(data_dir):
    return JsonFileStore(str(data_dir))


@pytest.fixture
def client(store):
    """TestClient whose handlers read and write the temporary data directory"""
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def read_file(data_dir):
    """Reads a resource file straight from disk, bypassing the API"""
    def _read(file_name):
        return json.loads((data_dir / file_name).read_text())
    return _read
