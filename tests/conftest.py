import pytest
from fastapi.testclient import TestClient

from string_analyzer.crud.store import RecordStore
from string_analyzer.main import create_app


@pytest.fixture
def store():
    return RecordStore()


@pytest.fixture
def client(store):
    with TestClient(create_app(store)) as test_client:
        yield test_client
