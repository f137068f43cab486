"""
Student Records API — Student Endpoint Tests
==============================================

What:  End-to-end HTTP tests for /students through the full middleware and
       exception-handler stack, backed by the in-memory store.
"""

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import AsyncClient, ASGITransport

from app.main import create_app
from app.services.mongo_store import MongoStudentStore
from tests.conftest import FakeStudentStore


async def _create(client, **fields):
    body = {"name": "Alice", "age": 20, "course": "CS"}
    body.update(fields)
    response = await client.post("/students", json=body)
    assert response.status_code == 201
    return response.json()


class TestCreateStudent:

    @pytest.mark.asyncio
    async def test_create_returns_201_with_id(self, test_client):
        response = await test_client.post(
            "/students", json={"name": "Alice", "age": 20, "course": "CS"}
        )

        assert response.status_code == 201
        body = response.json()
        assert body["id"]
        assert body["name"] == "Alice"
        assert body["age"] == 20
        assert body["course"] == "CS"

    @pytest.mark.asyncio
    async def test_trailing_slash_also_accepted(self, test_client):
        response = await test_client.post(
            "/students/", json={"name": "Alice", "age": 20, "course": "CS"}
        )
        assert response.status_code == 201

    @pytest.mark.asyncio
    async def test_missing_field_returns_400_and_persists_nothing(self, test_client, fake_store):
        response = await test_client.post("/students", json={"name": "Alice", "age": 20})

        assert response.status_code == 400
        assert "course" in response.json()["message"]
        assert fake_store.records == {}

    @pytest.mark.asyncio
    async def test_wrong_type_returns_400(self, test_client):
        response = await test_client.post(
            "/students", json={"name": "Alice", "age": "twenty", "course": "CS"}
        )

        assert response.status_code == 400
        assert "age" in response.json()["message"]

    @pytest.mark.asyncio
    async def test_malformed_json_returns_400(self, test_client):
        response = await test_client.post(
            "/students",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert "message" in response.json()

    @pytest.mark.asyncio
    async def test_storage_fault_returns_500_with_message(self, failing_client, failing_store):
        response = await failing_client.post(
            "/students", json={"name": "Alice", "age": 20, "course": "CS"}
        )

        assert response.status_code == 500
        assert response.json() == {"message": failing_store.message}


class TestReadStudents:

    @pytest.mark.asyncio
    async def test_list_empty(self, test_client):
        response = await test_client.get("/students")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_list_returns_created(self, test_client):
        a = await _create(test_client)
        b = await _create(test_client, name="Bob")

        response = await test_client.get("/students/")

        assert response.status_code == 200
        assert sorted(s["id"] for s in response.json()) == sorted([a["id"], b["id"]])

    @pytest.mark.asyncio
    async def test_get_after_create_is_field_equal(self, test_client):
        created = await _create(test_client)

        response = await test_client.get(f"/students/{created['id']}")

        assert response.status_code == 200
        assert response.json() == created

    @pytest.mark.asyncio
    async def test_get_unknown_id_returns_404(self, test_client):
        response = await test_client.get(f"/students/{ObjectId()}")

        assert response.status_code == 404
        assert response.json() == {"message": "Student not found"}

    @pytest.mark.asyncio
    async def test_list_storage_fault_returns_500(self, failing_client):
        response = await failing_client.get("/students")

        assert response.status_code == 500
        assert "message" in response.json()

    @pytest.mark.asyncio
    async def test_get_storage_fault_returns_500(self, failing_client):
        response = await failing_client.get(f"/students/{ObjectId()}")
        assert response.status_code == 500


class TestUpdateStudent:

    @pytest.mark.asyncio
    async def test_partial_update(self, test_client):
        created = await _create(test_client)

        response = await test_client.put(f"/students/{created['id']}", json={"age": 21})

        assert response.status_code == 200
        body = response.json()
        assert body == {**created, "age": 21}

    @pytest.mark.asyncio
    async def test_full_update_keeps_id(self, test_client):
        created = await _create(test_client)

        response = await test_client.put(
            f"/students/{created['id']}",
            json={"id": str(ObjectId()), "name": "Bob", "age": 30, "course": "Math"},
        )

        assert response.status_code == 200
        assert response.json() == {"id": created["id"], "name": "Bob", "age": 30, "course": "Math"}

    @pytest.mark.asyncio
    async def test_update_is_persisted(self, test_client):
        created = await _create(test_client)
        await test_client.put(f"/students/{created['id']}", json={"course": "Physics"})

        response = await test_client.get(f"/students/{created['id']}")

        assert response.json()["course"] == "Physics"
        assert response.json()["name"] == "Alice"

    @pytest.mark.asyncio
    async def test_update_unknown_id_returns_404(self, test_client):
        response = await test_client.put(f"/students/{ObjectId()}", json={"age": 21})

        assert response.status_code == 404
        assert response.json() == {"message": "Student not found"}

    @pytest.mark.asyncio
    async def test_invalid_update_returns_400(self, test_client):
        created = await _create(test_client)

        response = await test_client.put(f"/students/{created['id']}", json={"age": None})

        assert response.status_code == 400

        unchanged = await test_client.get(f"/students/{created['id']}")
        assert unchanged.json()["age"] == 20


class TestDeleteStudent:

    @pytest.mark.asyncio
    async def test_delete_then_get_returns_404(self, test_client):
        created = await _create(test_client)

        response = await test_client.delete(f"/students/{created['id']}")

        assert response.status_code == 200
        assert response.json() == {"message": "Student deleted", "student": created}

        response = await test_client.get(f"/students/{created['id']}")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_unknown_id_returns_404(self, test_client):
        response = await test_client.delete(f"/students/{ObjectId()}")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_storage_fault_returns_500(self, failing_client):
        response = await failing_client.delete(f"/students/{ObjectId()}")

        assert response.status_code == 500


class TestResponseHeaders:

    @pytest.mark.asyncio
    async def test_request_id_generated(self, test_client):
        response = await test_client.get("/students")

        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, test_client):
        response = await test_client.get(
            f"/students/{ObjectId()}", headers={"X-Request-ID": "trace-123"}
        )

        assert response.status_code == 404
        assert response.headers["X-Request-ID"] == "trace-123"


class TestOversizedAge:

    @pytest.mark.asyncio
    async def test_create_with_oversized_age_returns_400(self, test_client, fake_store):
        response = await test_client.post(
            "/students", json={"name": "Alice", "age": 10**30, "course": "CS"}
        )

        assert response.status_code == 400
        assert "age" in response.json()["message"]
        assert fake_store.calls == []

    @pytest.mark.asyncio
    async def test_update_with_oversized_age_returns_400(self, test_client):
        created = await _create(test_client)

        response = await test_client.put(f"/students/{created['id']}", json={"age": 10**30})

        assert response.status_code == 400


class TestMalformedIdsOnMongoStore:
    """Ids MongoDB could never have issued answer 404 on every verb."""

    @pytest_asyncio.fixture
    async def mongo_client(self, mock_collection):
        app = create_app(store=MongoStudentStore(mock_collection))
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            yield client

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["GET", "PUT", "DELETE"])
    async def test_malformed_id_not_found(self, mongo_client, mock_collection, method):
        kwargs = {"json": {"age": 21}} if method == "PUT" else {}

        response = await mongo_client.request(method, "/students/nope", **kwargs)

        assert response.status_code == 404
        assert response.json() == {"message": "Student not found"}
        mock_collection.find_one.assert_not_awaited()
        mock_collection.find_one_and_update.assert_not_awaited()
        mock_collection.find_one_and_delete.assert_not_awaited()


class TestUnexpectedErrors:

    class _BrokenStore(FakeStudentStore):
        async def list_students(self):
            raise RuntimeError("store exploded")

    @pytest.mark.asyncio
    async def test_unexpected_error_keeps_request_id(self):
        app = create_app(store=self._BrokenStore())
        transport = ASGITransport(app=app, raise_app_exceptions=False)

        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/students", headers={"X-Request-ID": "trace-500"})

        assert response.status_code == 500
        assert response.json() == {"message": "store exploded"}
        assert response.headers["X-Request-ID"] == "trace-500"

    @pytest.mark.asyncio
    async def test_unusable_client_request_id_replaced(self, test_client):
        response = await test_client.get("/students", headers={"X-Request-ID": "bad id\twith spaces"})

        assert response.headers["X-Request-ID"] != "bad id\twith spaces"
        assert len(response.headers["X-Request-ID"]) == 8
