"""Tests for the app factory."""

from fastapi.testclient import TestClient

from roomkeeper.api.factory import create_app
from roomkeeper.observability.correlation import CORRELATION_ID_HEADER


class TestCreateApp:
    def test_health_available(self):
        client = TestClient(create_app())
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_docs_disabled(self):
        client = TestClient(create_app())
        assert client.get("/docs").status_code == 404

    def test_correlation_id_echoed(self):
        client = TestClient(create_app())
        response = client.get("/health", headers={CORRELATION_ID_HEADER: "cid-123"})
        assert response.headers[CORRELATION_ID_HEADER] == "cid-123"

    def test_correlation_id_generated(self):
        client = TestClient(create_app())
        response = client.get("/health")
        assert len(response.headers[CORRELATION_ID_HEADER]) == 36

    def test_asgi_entry_point(self):
        from roomkeeper.api.app import app

        assert app.title == "Roomkeeper"
