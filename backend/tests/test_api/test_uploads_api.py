"""
Tests for image uploads and the status endpoints
"""
from unittest.mock import MagicMock, patch


class TestImageUpload:
    def test_upload_returns_url_and_public_id(self, client, artist):
        storage = MagicMock()
        bucket = storage.storage.from_.return_value
        bucket.get_public_url.return_value = "https://cdn.artverse.io/obj.png"

        with patch("artverse.services.storage_service.get_storage_client", return_value=storage):
            response = client.post(
                "/api/uploads/images",
                files={"file": ("sketch.PNG", b"\x89PNG...", "image/png")},
                headers=artist["headers"],
            )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["url"] == "https://cdn.artverse.io/obj.png"
        assert data["public_id"].startswith(f"{artist['id']}/")
        assert data["public_id"].endswith(".png")
        bucket.upload.assert_called_once()

    def test_non_image_rejected(self, client, artist):
        response = client.post(
            "/api/uploads/images",
            files={"file": ("notes.txt", b"hello", "text/plain")},
            headers=artist["headers"],
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Only image uploads are allowed"

    def test_storage_not_configured(self, client, artist):
        response = client.post(
            "/api/uploads/images",
            files={"file": ("a.jpg", b"jpeg-bytes", "image/jpeg")},
            headers=artist["headers"],
        )

        assert response.status_code == 503
        assert response.json()["error"] == "Image storage is not configured"

    def test_buyers_cannot_upload(self, client, buyer):
        response = client.post(
            "/api/uploads/images",
            files={"file": ("a.jpg", b"jpeg-bytes", "image/jpeg")},
            headers=buyer["headers"],
        )

        assert response.status_code == 403


class TestStatusEndpoints:
    def test_root(self, client):
        response = client.get("/")

        assert response.json()["status"] == "online"

    def test_health_reports_database(self, client):
        response = client.get("/health")

        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"]["status"] == "connected"
