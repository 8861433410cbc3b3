"""
Pytest configuration and fixtures for scrapbook tests.
"""

import io
from collections.abc import Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from scrapbook.api import create_app
from scrapbook.config import get_config
from scrapbook.errors import StorageError
from scrapbook.models import Photo, ScrapbookEntry, sort_entries_newest_first
from scrapbook.services import (
    EntriesService,
    ImageProcessor,
    PasswordAuthService,
    PhotoUploadService,
    reset_auth_service,
    reset_entries_service,
)
from scrapbook.storage import LocalStorageAdapter, delete_photos_best_effort

TEST_PASSWORD = "correct horse battery staple"
TEST_SECRET = "test-session-secret-that-is-long-enough-for-hs256"


@pytest.fixture(autouse=True)
def setup_test_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Isolate every test from the developer's environment and global services."""
    for key in ("STORAGE_ADAPTER", "GCS_BUCKET", "ADMIN_PASSWORD", "SESSION_SECRET", "GOOGLE_CLOUD_PROJECT"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("ENVIRONMENT", "development")
    monkeypatch.setenv("TESTING", "true")

    get_config().clear_cache()
    reset_entries_service()
    reset_auth_service()
    yield
    get_config().clear_cache()
    reset_entries_service()
    reset_auth_service()


class InMemoryStorageAdapter:
    """Storage adapter keeping everything in dictionaries, for service and API tests."""

    name = "memory"

    def __init__(self, failing_photo_urls: set[str] | None = None) -> None:
        self.entries: dict[str, dict] = {}
        self.photos: dict[str, bytes] = {}
        self.deleted_photo_urls: list[str] = []
        self.failing_photo_urls = failing_photo_urls or set()

    def list_entries(self) -> list[ScrapbookEntry]:
        return sort_entries_newest_first(ScrapbookEntry.from_dict(data) for data in self.entries.values())

    def get_entry(self, date: str) -> ScrapbookEntry | None:
        data = self.entries.get(date)
        return ScrapbookEntry.from_dict(data) if data else None

    def create_entry(self, entry: ScrapbookEntry) -> None:
        self.entries[entry.date] = entry.to_dict()

    def delete_entry(self, date: str) -> None:
        entry = self.get_entry(date)
        if entry is not None:
            delete_photos_best_effort(self.delete_photo, entry.photos)
        self.entries.pop(date, None)

    def upload_photo(self, data: bytes, filename: str, content_type: str) -> str:
        url = f"/uploads/{filename}"
        self.photos[url] = data
        return url

    def delete_photo(self, url: str) -> None:
        self.deleted_photo_urls.append(url)
        if url in self.failing_photo_urls:
            raise StorageError(f"Cannot delete {url}", code="photo_delete_failed")
        self.photos.pop(url, None)


def make_png_bytes(size: tuple[int, int] = (4, 3), color: str = "red") -> bytes:
    """Create a small PNG image in memory."""
    buffer = io.BytesIO()
    Image.new("RGB", size, color=color).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    """Provide a temporary directory for tests."""
    return tmp_path


@pytest.fixture
def sample_image_data() -> bytes:
    """Provide a small PNG image."""
    return make_png_bytes()


@pytest.fixture
def sample_entry() -> ScrapbookEntry:
    """Provide an entry with two photos."""
    return ScrapbookEntry(
        id="entry-1",
        date="2026-01-29",
        title="Snow day",
        description="Sledding in the park",
        photos=[
            Photo(id="p1", url="/uploads/a.jpg", caption="Hill"),
            Photo(id="p2", url="/uploads/b.jpg"),
        ],
        created_at="2026-01-29T10:00:00Z",
        updated_at="2026-01-29T10:00:00Z",
    )


@pytest.fixture
def local_adapter(temp_dir: Path) -> LocalStorageAdapter:
    """Local adapter rooted in a temporary directory."""
    return LocalStorageAdapter(temp_dir / "entries", temp_dir / "uploads")


@pytest.fixture
def memory_adapter() -> InMemoryStorageAdapter:
    """In-memory storage adapter."""
    return InMemoryStorageAdapter()


@pytest.fixture
def auth_service() -> PasswordAuthService:
    """Password gate with a known password."""
    return PasswordAuthService(password=TEST_PASSWORD, secret=TEST_SECRET, ttl_hours=1)


@pytest.fixture
def admin_token(auth_service: PasswordAuthService) -> str:
    """A valid admin session token."""
    return auth_service.issue_session_token()


@pytest.fixture
def admin_headers(admin_token: str) -> dict[str, str]:
    """Headers carrying a valid admin session."""
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def entries_service(memory_adapter: InMemoryStorageAdapter) -> EntriesService:
    """Entries service over the in-memory adapter."""
    return EntriesService(memory_adapter)


@pytest.fixture
def photo_upload_service(memory_adapter: InMemoryStorageAdapter) -> PhotoUploadService:
    """Upload pipeline storing into the in-memory adapter."""
    return PhotoUploadService(memory_adapter, ImageProcessor(max_file_size=1024 * 1024))


@pytest.fixture
def client(
    entries_service: EntriesService,
    auth_service: PasswordAuthService,
    photo_upload_service: PhotoUploadService,
) -> Generator[TestClient, None, None]:
    """API test client wired to in-memory services."""
    app = create_app(
        entries_service=entries_service,
        auth_service=auth_service,
        photo_upload_service=photo_upload_service,
    )
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def png_factory():
    """Provide a function creating PNG bytes of a given size."""
    return make_png_bytes
