"""
Unit tests for the admin page actions.
"""

from datetime import date
from unittest.mock import MagicMock

import pytest

from scrapbook.errors import StorageError, ValidationError
from scrapbook.services import EntriesService, ImageProcessor, PhotoUploadService
from scrapbook.ui.handlers import create_entry_from_form, delete_entry_with_feedback, upload_form_photos


class FakeUploadedFile:
    """Stand-in for Streamlit's UploadedFile."""

    def __init__(self, name: str, data: bytes, type: str = "image/png") -> None:
        self.name = name
        self._data = data
        self.type = type

    def getvalue(self) -> bytes:
        return self._data


@pytest.fixture
def upload_service(memory_adapter):
    return PhotoUploadService(memory_adapter, ImageProcessor(max_file_size=1024 * 1024))


class TestUploadFormPhotos:
    """Test cases for upload_form_photos."""

    def test_uploads_in_order_with_captions(self, upload_service, memory_adapter, sample_image_data):
        """Test that photos keep form order and pick up their captions."""
        files = [FakeUploadedFile("a.png", sample_image_data), FakeUploadedFile("b.png", sample_image_data)]

        photos = upload_form_photos(upload_service, files, ["  First  ", ""])

        assert [photo.caption for photo in photos] == ["First", None]
        assert [photo.url for photo in photos] == list(memory_adapter.photos)

    def test_failed_upload_removes_earlier_photos(self, upload_service, memory_adapter, sample_image_data):
        """Test that a failing upload leaves no orphaned photos behind."""
        files = [FakeUploadedFile("a.png", sample_image_data), FakeUploadedFile("notes.txt", b"text", "text/plain")]

        with pytest.raises(ValidationError):
            upload_form_photos(upload_service, files, [])

        assert memory_adapter.photos == {}
        assert len(memory_adapter.deleted_photo_urls) == 1


class TestCreateEntryFromForm:
    """Test cases for create_entry_from_form."""

    def test_creates_entry(self, upload_service, memory_adapter, sample_image_data):
        """Test saving a complete form."""
        entries_service = EntriesService(memory_adapter)

        entry = create_entry_from_form(
            entries_service,
            upload_service,
            date(2026, 1, 29),
            " Snow day ",
            "Sledding",
            [FakeUploadedFile("a.png", sample_image_data)],
            ["Hill"],
        )

        stored = entries_service.get_entry("2026-01-29")
        assert stored == entry
        assert stored.title == "Snow day"
        assert stored.photos[0].caption == "Hill"
        assert stored.photos[0].url in memory_adapter.photos

    def test_rejects_form_before_uploading(self, upload_service, memory_adapter, sample_image_data):
        """Test that an invalid form stores nothing."""
        with pytest.raises(ValidationError):
            create_entry_from_form(
                EntriesService(memory_adapter),
                upload_service,
                date(2026, 1, 29),
                "",
                "",
                [FakeUploadedFile("a.png", sample_image_data)],
                [],
            )

        assert memory_adapter.photos == {}

    def test_requires_photos(self, upload_service, memory_adapter):
        """Test that an entry needs at least one photo."""
        with pytest.raises(ValidationError):
            create_entry_from_form(EntriesService(memory_adapter), upload_service, date(2026, 1, 29), "t", "", [], [])

    def test_failed_save_removes_uploaded_photos(self, upload_service, memory_adapter, sample_image_data):
        """Test that photos are cleaned up when the entry cannot be saved."""
        entries_service = MagicMock()
        entries_service.create_entry.side_effect = StorageError("disk full")

        with pytest.raises(StorageError):
            create_entry_from_form(
                entries_service,
                upload_service,
                date(2026, 1, 29),
                "Snow day",
                "",
                [FakeUploadedFile("a.png", sample_image_data)],
                [],
            )

        assert memory_adapter.photos == {}

    def test_unexpected_save_error_removes_uploaded_photos(self, upload_service, memory_adapter, sample_image_data):
        """Test that cleanup also runs for errors outside the application hierarchy."""
        entries_service = MagicMock()
        entries_service.create_entry.side_effect = ConnectionResetError("connection reset by peer")

        with pytest.raises(ConnectionResetError):
            create_entry_from_form(
                entries_service,
                upload_service,
                date(2026, 1, 29),
                "Snow day",
                "",
                [FakeUploadedFile("a.png", sample_image_data), FakeUploadedFile("b.png", sample_image_data)],
                [],
            )

        assert memory_adapter.photos == {}
        assert len(memory_adapter.deleted_photo_urls) == 2

    def test_unexpected_upload_error_removes_earlier_photos(self, upload_service, memory_adapter, sample_image_data):
        """Test that an unexpected upload failure leaves no orphaned photos."""
        original_upload = memory_adapter.upload_photo
        calls = []

        def flaky_upload(data, filename, content_type):
            calls.append(filename)
            if len(calls) > 1:
                raise ConnectionResetError("connection reset by peer")
            return original_upload(data, filename, content_type)

        memory_adapter.upload_photo = flaky_upload
        files = [FakeUploadedFile("a.png", sample_image_data), FakeUploadedFile("b.png", sample_image_data)]

        with pytest.raises(ConnectionResetError):
            upload_form_photos(upload_service, files, [])

        assert memory_adapter.photos == {}


class TestDeleteEntryWithFeedback:
    """Test cases for delete_entry_with_feedback."""

    def test_success(self, memory_adapter, sample_entry):
        """Test deleting an existing entry."""
        entries_service = EntriesService(memory_adapter)
        entries_service.create_entry(sample_entry)

        assert delete_entry_with_feedback(entries_service, "2026-01-29") is True
        assert entries_service.get_entry("2026-01-29") is None

    def test_failure(self):
        """Test that failures are reported instead of raised."""
        entries_service = MagicMock()
        entries_service.delete_entry.side_effect = StorageError("disk gone")

        assert delete_entry_with_feedback(entries_service, "2026-01-29") is False
