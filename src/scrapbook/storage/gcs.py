"""Google Cloud Storage adapter.

Entries live under the ``entries/`` prefix as ``entries/<date>.json`` and
photos at the top level of the bucket by filename. Objects are written
publicly readable, so a photo's public HTTPS URL is its durable address and
deletion maps that URL back to the object name.
"""

import json
from urllib.parse import quote, unquote

from google.cloud import storage  # type: ignore[attr-defined]
from google.cloud.exceptions import GoogleCloudError, NotFound

from ..errors import StorageError
from ..logging_config import get_logger
from ..models import ScrapbookEntry, sort_entries_newest_first
from .base import delete_entry_photos

logger = get_logger(__name__)

ENTRY_PREFIX = "entries/"
PUBLIC_HOST = "https://storage.googleapis.com"


class GCSStorageAdapter:
    """Stores entries and photos as objects in a Google Cloud Storage bucket."""

    name = "gcs"

    def __init__(
        self,
        bucket_name: str | None,
        project_id: str | None = None,
        public_acl: bool = True,
        client: storage.Client | None = None,
    ) -> None:
        """
        Initialize the GCS adapter.

        Args:
            bucket_name: Bucket holding entries and photos (GCS_BUCKET)
            project_id: GCP project ID (GOOGLE_CLOUD_PROJECT)
            public_acl: Upload objects with the publicRead ACL; disable for
                buckets using uniform bucket-level access
            client: Preconfigured storage client

        Raises:
            StorageError: If the bucket name is missing or the client cannot be created
        """
        if not bucket_name:
            raise StorageError("GCS_BUCKET environment variable is required", code="gcs_bucket_missing")

        self.bucket_name = bucket_name
        self.project_id = project_id
        self.predefined_acl = "publicRead" if public_acl else None

        try:
            self.client = client or storage.Client(project=project_id)
            self.bucket = self.client.bucket(bucket_name)
        except Exception as e:
            raise StorageError(
                f"Failed to initialize GCS client: {e}",
                code="gcs_client_init_failed",
                original_exception=e,
            ) from e

        logger.info(
            "gcs_storage_initialized",
            bucket=bucket_name,
            project_id=project_id,
            public_acl=public_acl,
        )

    @staticmethod
    def _entry_pathname(date: str) -> str:
        return f"{ENTRY_PREFIX}{date}.json"

    @property
    def public_base_url(self) -> str:
        return f"{PUBLIC_HOST}/{self.bucket_name}/"

    def pathname_from_url(self, url: str) -> str:
        """
        Map a photo URL back to its object name in this bucket.

        Accepts both the public HTTPS form and ``gs://bucket/name``.

        Raises:
            StorageError: If the URL does not address an object in this bucket
        """
        for base in (self.public_base_url, f"gs://{self.bucket_name}/"):
            if url.startswith(base):
                pathname = unquote(url[len(base) :].split("?", 1)[0])
                if pathname:
                    return pathname

        raise StorageError(
            f"URL is not an object in bucket '{self.bucket_name}': {url}",
            code="foreign_photo_url",
            details={"url": url, "bucket": self.bucket_name},
        )

    def _read_entry(self, blob: storage.Blob) -> ScrapbookEntry:
        return ScrapbookEntry.from_dict(json.loads(blob.download_as_bytes()))

    def list_entries(self) -> list[ScrapbookEntry]:
        try:
            blobs = self.client.list_blobs(self.bucket_name, prefix=ENTRY_PREFIX)
            entries = [self._read_entry(blob) for blob in blobs if blob.name.endswith(".json")]
            return sort_entries_newest_first(entries)
        except Exception as e:
            logger.error("list_entries_failed", bucket=self.bucket_name, error=str(e))
            return []

    def get_entry(self, date: str) -> ScrapbookEntry | None:
        pathname = self._entry_pathname(date)
        try:
            blob = self.bucket.get_blob(pathname)
            if blob is None:
                logger.debug("entry_not_found", date=date, pathname=pathname)
                return None
            return self._read_entry(blob)
        except Exception as e:
            logger.error("get_entry_failed", date=date, pathname=pathname, error=str(e))
            return None

    def create_entry(self, entry: ScrapbookEntry) -> None:
        pathname = self._entry_pathname(entry.date)
        content = json.dumps(entry.to_dict(), indent=2, ensure_ascii=False)
        details = {"date": entry.date, "pathname": pathname}
        try:
            blob = self.bucket.blob(pathname)
            blob.upload_from_string(
                content.encode("utf-8"),
                content_type="application/json",
                predefined_acl=self.predefined_acl,
            )
        except GoogleCloudError as e:
            raise StorageError(
                f"Failed to write entry '{entry.date}': {e}",
                code="entry_write_failed",
                details=details,
                original_exception=e,
            ) from e
        except Exception as e:
            raise StorageError(
                f"Unexpected error writing entry '{entry.date}': {e}",
                code="entry_write_failed",
                details=details,
                original_exception=e,
            ) from e

        logger.info("entry_created", date=entry.date, pathname=pathname, photos=len(entry.photos))

    def delete_entry(self, date: str) -> None:
        entry = self.get_entry(date)
        failures = delete_entry_photos(self, entry)

        pathname = self._entry_pathname(date)
        details = {"date": date, "pathname": pathname}
        try:
            self.bucket.blob(pathname).delete()
        except GoogleCloudError as e:
            raise StorageError(
                f"Failed to delete entry '{date}': {e}",
                code="entry_delete_failed",
                details=details,
                original_exception=e,
            ) from e
        except Exception as e:
            raise StorageError(
                f"Unexpected error deleting entry '{date}': {e}",
                code="entry_delete_failed",
                details=details,
                original_exception=e,
            ) from e

        logger.info("entry_deleted", date=date, pathname=pathname, photo_failures=len(failures))

    def upload_photo(self, data: bytes, filename: str, content_type: str) -> str:
        details = {"filename": filename, "content_type": content_type}
        try:
            blob = self.bucket.blob(filename)
            blob.upload_from_string(data, content_type=content_type, predefined_acl=self.predefined_acl)
        except GoogleCloudError as e:
            raise StorageError(
                f"Failed to upload photo '{filename}': {e}",
                code="photo_upload_failed",
                details=details,
                original_exception=e,
            ) from e
        except Exception as e:
            raise StorageError(
                f"Unexpected error uploading photo '{filename}': {e}",
                code="photo_upload_failed",
                details=details,
                original_exception=e,
            ) from e

        url = f"{self.public_base_url}{quote(filename)}"
        logger.info("photo_uploaded", filename=filename, size=len(data), content_type=content_type, url=url)
        return url

    def delete_photo(self, url: str) -> None:
        pathname = self.pathname_from_url(url)
        details = {"url": url, "pathname": pathname}
        try:
            self.bucket.blob(pathname).delete()
        except NotFound as e:
            raise StorageError(
                f"Photo not found: {url}",
                code="photo_not_found",
                details=details,
                original_exception=e,
            ) from e
        except GoogleCloudError as e:
            raise StorageError(
                f"Failed to delete photo '{url}': {e}",
                code="photo_delete_failed",
                details=details,
                original_exception=e,
            ) from e
        except Exception as e:
            raise StorageError(
                f"Unexpected error deleting photo '{url}': {e}",
                code="photo_delete_failed",
                details=details,
                original_exception=e,
            ) from e

        logger.info("photo_deleted", url=url, pathname=pathname)
