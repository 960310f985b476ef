"""
Task Tracker Test Suite — HTTP Server
======================================
End-to-end tests for the /tasks resource through FastAPI's TestClient.

Usage:
    python -m pytest tests/test_server.py -v
"""
import sys
import os
import tempfile
import unittest
from datetime import datetime

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fastapi.testclient import TestClient

from tasktracker.config import ServiceConfig
from tasktracker.handler import TaskHandler
from tasktracker.server import build_handler, create_app
from tasktracker.stores.memory_store import MemoryTaskStore
from tasktracker.stores.sqlite_store import SQLiteTaskStore


def make_client(**kwargs) -> TestClient:
    app = create_app(ServiceConfig(store="memory"), **kwargs)
    return TestClient(app)


# ─────────────────────────────────────────────
#  POST /tasks
# ─────────────────────────────────────────────

class TestPostTasks(unittest.TestCase):

    def setUp(self):
        self.client = make_client()

    def test_create_from_query(self):
        response = self.client.post("/tasks", params={"description": "Buy milk"})
        self.assertEqual(response.status_code, 201)
        self.assertTrue(response.headers["content-type"].startswith("application/json"))
        data = response.json()
        self.assertEqual(data["id"], 1)
        self.assertEqual(data["description"], "Buy milk")
        datetime.fromisoformat(data["createdAt"])

    def test_create_from_form(self):
        response = self.client.post("/tasks", data={"description": "Water plants"})
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["description"], "Water plants")

    def test_query_takes_precedence_over_form(self):
        response = self.client.post(
            "/tasks", params={"description": "From query"}, data={"description": "From form"},
        )
        self.assertEqual(response.json()["description"], "From query")

    def test_repeated_query_parameter_uses_first_value(self):
        response = self.client.post("/tasks?description=Buy%20milk&description=")
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["description"], "Buy milk")

    def test_repeated_form_field_uses_first_value(self):
        response = self.client.post(
            "/tasks",
            content="description=Water%20plants&description=ab",
            headers={"content-type": "application/x-www-form-urlencoded"},
        )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["description"], "Water plants")

    def test_validation_failure(self):
        response = self.client.post("/tasks", params={"description": "ab"})
        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.headers["content-type"], "application/json; charset=UTF-8")
        self.assertEqual(response.json(), {
            "code": 422, "error": "description: size must be between 3 and 120",
        })

    def test_missing_description(self):
        response = self.client.post("/tasks")
        self.assertEqual(response.status_code, 422)

    def test_duplicate(self):
        self.client.post("/tasks", params={"description": "Buy milk"})
        response = self.client.post("/tasks", params={"description": "Buy milk"})
        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.json()["error"], "description: must be unique")


# ─────────────────────────────────────────────
#  GET / PUT / DELETE /tasks
# ─────────────────────────────────────────────

class TestReadUpdateDelete(unittest.TestCase):

    def setUp(self):
        self.client = make_client()
        self.created = self.client.post("/tasks", params={"description": "Buy milk"}).json()

    def test_get_existing(self):
        response = self.client.get("/tasks", params={"id": self.created["id"]})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), self.created)

    def test_get_unknown(self):
        response = self.client.get("/tasks", params={"id": 404404})
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.text, '{"code":404,"error":"ID not found"}')

    def test_get_malformed_id_is_server_error(self):
        client = TestClient(create_app(ServiceConfig()), raise_server_exceptions=False)
        response = client.get("/tasks", params={"id": "abc"})
        self.assertEqual(response.status_code, 500)

    def test_get_padded_id_is_server_error(self):
        client = TestClient(create_app(ServiceConfig()), raise_server_exceptions=False)
        client.post("/tasks", params={"description": "Buy milk"})
        response = client.get("/tasks", params={"id": " 1 "})
        self.assertEqual(response.status_code, 500)

    def test_put_returns_unchanged(self):
        response = self.client.put(
            "/tasks", params={"id": self.created["id"], "description": "Changed"},
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), self.created)
        again = self.client.get("/tasks", params={"id": self.created["id"]})
        self.assertEqual(again.json()["description"], "Buy milk")

    def test_put_unknown(self):
        response = self.client.put("/tasks", params={"id": 77})
        self.assertEqual(response.status_code, 404)

    def test_delete_is_a_no_op(self):
        response = self.client.delete("/tasks", params={"id": self.created["id"]})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.text, "DELETE OK")
        self.assertTrue(response.headers["content-type"].startswith("text/plain"))
        still_there = self.client.get("/tasks", params={"id": self.created["id"]})
        self.assertEqual(still_there.status_code, 200)


# ─────────────────────────────────────────────
#  App wiring
# ─────────────────────────────────────────────

class TestAppWiring(unittest.TestCase):

    def test_health(self):
        client = make_client()
        client.post("/tasks", params={"description": "Buy milk"})
        self.assertEqual(client.get("/health").json(), {
            "status": "ok", "store": "memory", "tasks": 1,
        })

    def test_injected_handler_is_used(self):
        store = MemoryTaskStore()
        client = make_client(handler=TaskHandler(store))
        client.post("/tasks", params={"description": "Buy milk"})
        self.assertEqual(store.count(), 1)

    def test_sqlite_backed_app(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            config = ServiceConfig(store="sqlite", db_path=os.path.join(tmpdir, "tasks.db"))
            handler = build_handler(config)
            self.assertIsInstance(handler.store, SQLiteTaskStore)

            client = TestClient(create_app(config, handler=handler))
            created = client.post("/tasks", params={"description": "Buy milk"}).json()
            fetched = client.get("/tasks", params={"id": created["id"]}).json()
            self.assertEqual(fetched, created)

    def test_build_handler_uses_config_limits(self):
        handler = build_handler(ServiceConfig(min_length=5, max_length=10))
        self.assertEqual(handler.validator.min_length, 5)
        self.assertEqual(handler.validator.max_length, 10)
        self.assertIs(handler.validator.store, handler.store)

    def test_unknown_store_fails_fast(self):
        with self.assertRaises(ValueError):
            create_app(ServiceConfig(store="nope"))


if __name__ == "__main__":
    unittest.main()
