"""Tests for health and root endpoints."""

import unittest
from unittest.mock import patch, MagicMock
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from fastapi.testclient import TestClient
from api.main import app, SERVICE_NAME, VERSION
from api.dependencies import get_event_publisher
from adapter.fake.event_publisher import FakeEventPublisher


class TestHealthRoute(unittest.TestCase):

    def setUp(self):
        self.publisher = FakeEventPublisher()
        app.dependency_overrides[get_event_publisher] = lambda: self.publisher
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()

    @patch('api.routes.health.get_mongodb_client')
    def test_all_dependencies_healthy(self, mock_get_client):
        mock_get_client.return_value = MagicMock()

        response = self.client.get("/health")

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["status"], "healthy")
        self.assertEqual(data["services"]["mongodb"]["status"], "healthy")
        self.assertEqual(data["services"]["redis"]["status"], "healthy")
        self.assertTrue(data["timestamp"].endswith("Z"))

    @patch('api.routes.health.get_mongodb_client')
    def test_mongodb_unavailable_is_degraded(self, mock_get_client):
        mock_get_client.return_value = None

        response = self.client.get("/health")

        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json()["status"], "degraded")
        self.assertEqual(response.json()["services"]["mongodb"]["status"], "unhealthy")

    @patch('api.routes.health.get_mongodb_client')
    def test_event_bus_unavailable_is_degraded(self, mock_get_client):
        mock_get_client.return_value = MagicMock()
        self.publisher.fail = True

        response = self.client.get("/health")

        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json()["services"]["redis"]["status"], "unhealthy")

    @patch('api.routes.health.get_mongodb_client')
    def test_ping_error_is_reported(self, mock_get_client):
        mock_client = MagicMock()
        mock_client.admin.command.side_effect = Exception("timed out")
        mock_get_client.return_value = mock_client

        response = self.client.get("/health")

        self.assertEqual(response.status_code, 503)
        self.assertIn("timed out", response.json()["services"]["mongodb"]["message"])


class TestRootRoute(unittest.TestCase):

    def test_root(self):
        response = TestClient(app).get("/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {
            "service": SERVICE_NAME,
            "version": VERSION,
            "status": "running",
        })


class TestDatabaseUnavailable(unittest.TestCase):

    @patch('adapter.mongodb.connection.get_mongodb_client')
    def test_search_returns_503_without_database(self, mock_get_client):
        mock_get_client.return_value = None

        response = TestClient(app).get("/users/search")

        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json()["detail"], "Database unavailable")


if __name__ == '__main__':
    unittest.main()
