"""
Integration tests for the full entry lifecycle on local storage.
"""

from unittest.mock import patch

from fastapi.testclient import TestClient

from scrapbook.api import create_app
from scrapbook.config import StorageSettings
from scrapbook.models import Photo, ScrapbookEntry
from scrapbook.services import EntriesService, configure_entries_service


class TestEntryLifecycle:
    """Create, read and delete entries through the service and the API."""

    def test_service_lifecycle(self, temp_dir):
        """Test that a created entry reads back unchanged and deletes with its photo."""
        service = EntriesService.from_settings(
            StorageSettings(entries_dir=temp_dir / "entries", uploads_dir=temp_dir / "uploads")
        )
        entry = ScrapbookEntry.create_new(
            date="2026-01-29",
            title="Snow day",
            photos=[Photo(id="p1", url="/uploads/a.jpg")],
        )

        service.create_entry(entry)
        assert service.get_entry("2026-01-29") == entry

        with patch.object(service.adapter, "delete_photo") as mock_delete_photo:
            service.delete_entry("2026-01-29")

        assert service.get_entry("2026-01-29") is None
        mock_delete_photo.assert_called_once_with("/uploads/a.jpg")

    def test_api_lifecycle(self, temp_dir, auth_service, admin_headers, sample_image_data):
        """Test upload, create, serve, list and delete over HTTP."""
        settings = StorageSettings(entries_dir=temp_dir / "entries", uploads_dir=temp_dir / "uploads")
        app = create_app(entries_service=configure_entries_service(settings), auth_service=auth_service)

        with TestClient(app) as client:
            upload = client.post(
                "/api/upload", files={"file": ("beach.png", sample_image_data, "image/png")}, headers=admin_headers
            )
            assert upload.status_code == 200
            photo_url = upload.json()["url"]

            served = client.get(photo_url)
            assert served.status_code == 200
            assert served.content == sample_image_data

            created = client.post(
                "/api/entries/create",
                json={"date": "2026-01-29", "title": "Beach", "photos": [upload.json()]},
                headers=admin_headers,
            )
            assert created.status_code == 200

            listed = client.get("/api/entries").json()
            assert [entry["date"] for entry in listed] == ["2026-01-29"]
            assert listed[0]["photos"][0]["url"] == photo_url

            deleted = client.delete("/api/entries/delete?date=2026-01-29", headers=admin_headers)
            assert deleted.status_code == 200

            assert client.get("/api/entries/2026-01-29").status_code == 404
            assert list((temp_dir / "uploads").iterdir()) == []
