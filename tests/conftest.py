"""
Student Records API — Test Configuration (conftest.py)
========================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── fake_store: In-memory StudentStore (no MongoDB needed)
    ├── failing_store: StudentStore whose every call raises StorageError
    ├── mock_collection: AsyncMock standing in for a pymongo AsyncCollection
    ├── test_client: HTTPX AsyncClient over the app, backed by fake_store
    └── failing_client: HTTPX AsyncClient over the app, backed by failing_store
"""

import os

# Override settings for testing BEFORE any app imports
os.environ["MONGODB_URL"] = "mongodb://localhost:27017"
os.environ["MONGODB_DATABASE"] = "student_records_test"
os.environ["STUDENTS_PREFIX"] = "/students"
os.environ["LOG_LEVEL"] = "WARNING"

import copy
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import AsyncClient, ASGITransport

from app.exceptions import StorageError
from app.services.student_store import StudentRecord, StudentStore


# ══════════════════════════════════════════════════════════════════════════
# Test Doubles
# ══════════════════════════════════════════════════════════════════════════


class FakeStudentStore(StudentStore):
    """
    Dict-backed StudentStore.

    Ids are fresh ObjectId strings, so they look exactly like the ones
    MongoStudentStore hands out. `calls` records every operation for tests
    that check the one-call-per-handler rule.
    """

    def __init__(self):
        self.records: Dict[str, StudentRecord] = {}
        self.calls: List[str] = []

    async def list_students(self) -> List[StudentRecord]:
        self.calls.append("list")
        return [copy.deepcopy(r) for r in self.records.values()]

    async def get_student(self, student_id: str) -> Optional[StudentRecord]:
        self.calls.append("get")
        record = self.records.get(student_id)
        return copy.deepcopy(record) if record else None

    async def insert_student(self, fields: Dict[str, Any]) -> StudentRecord:
        self.calls.append("insert")
        student_id = str(ObjectId())
        self.records[student_id] = {"id": student_id, **fields}
        return copy.deepcopy(self.records[student_id])

    async def update_student(
        self, student_id: str, fields: Dict[str, Any]
    ) -> Optional[StudentRecord]:
        self.calls.append("update")
        record = self.records.get(student_id)
        if record is None:
            return None
        record.update({k: v for k, v in fields.items() if k != "id"})
        return copy.deepcopy(record)

    async def delete_student(self, student_id: str) -> Optional[StudentRecord]:
        self.calls.append("delete")
        return self.records.pop(student_id, None)

    async def ping(self) -> bool:
        return True


class FailingStudentStore(StudentStore):
    """Every storage call fails as if MongoDB were unreachable."""

    message = "connection refused: localhost:27017"

    async def _fail(self, operation: str):
        raise StorageError(self.message, operation=operation)

    async def list_students(self):
        await self._fail("list")

    async def get_student(self, student_id):
        await self._fail("get")

    async def insert_student(self, fields):
        await self._fail("insert")

    async def update_student(self, student_id, fields):
        await self._fail("update")

    async def delete_student(self, student_id):
        await self._fail("delete")

    async def ping(self) -> bool:
        return False


# ══════════════════════════════════════════════════════════════════════════
# Fixtures
# ══════════════════════════════════════════════════════════════════════════


@pytest.fixture
def fake_store():
    return FakeStudentStore()


@pytest.fixture
def failing_store():
    return FailingStudentStore()


@pytest.fixture
def mock_collection():
    """
    A MagicMock shaped like pymongo's AsyncCollection.

    Usage:
        mock_collection.find_one.return_value = {"_id": oid, ...}
        store = MongoStudentStore(mock_collection)
    """
    collection = MagicMock()
    collection.find_one = AsyncMock(return_value=None)
    collection.insert_one = AsyncMock()
    collection.find_one_and_update = AsyncMock(return_value=None)
    collection.find_one_and_delete = AsyncMock(return_value=None)
    cursor = MagicMock()
    cursor.to_list = AsyncMock(return_value=[])
    collection.find = MagicMock(return_value=cursor)
    collection.database.command = AsyncMock(return_value={"ok": 1.0})
    return collection


@pytest.fixture
def sample_student():
    return {"name": "Alice", "age": 20, "course": "CS"}


async def _client_for(store: StudentStore):
    from app.main import create_app

    app = create_app(store=store)
    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest_asyncio.fixture
async def test_client(fake_store):
    """
    HTTPX AsyncClient talking to a fresh app backed by fake_store.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/students")
            assert response.status_code == 200
    """
    async with await _client_for(fake_store) as client:
        yield client


@pytest_asyncio.fixture
async def failing_client(failing_store):
    async with await _client_for(failing_store) as client:
        yield client
