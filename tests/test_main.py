"""
Tests for application-level endpoints and error rendering.
"""

from fastapi import status
from fastapi.testclient import TestClient

from bookcatalog import __version__


class TestServiceEndpoints:
    def test_health(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "connected"
        assert data["version"] == __version__

    def test_root(self, client: TestClient):
        response = client.get("/")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["docs"] == "/docs"


class TestErrorRendering:
    def test_malformed_json_is_400(self, client: TestClient):
        response = client.post(
            "/users/register",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Validation failed"

    def test_unknown_route_is_404(self, client: TestClient):
        response = client.get("/no-such-route")

        assert response.status_code == status.HTTP_404_NOT_FOUND
