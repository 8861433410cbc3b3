"""Photo upload pipeline shared by the HTTP API and the Streamlit admin pages."""

import uuid
from dataclasses import dataclass

from ..logging_config import get_logger
from ..models import PLACEHOLDER_HEIGHT, PLACEHOLDER_WIDTH
from ..storage import StorageAdapter
from .entries import get_entries_service
from .image_processor import ImageProcessor, get_image_processor

logger = get_logger(__name__)


@dataclass(frozen=True)
class UploadResult:
    """Where an uploaded photo ended up, plus its (placeholder) dimensions."""

    url: str
    width: int = PLACEHOLDER_WIDTH
    height: int = PLACEHOLDER_HEIGHT

    def to_dict(self) -> dict:
        return {"url": self.url, "width": self.width, "height": self.height}


class PhotoUploadService:
    """Validates, converts and stores uploaded photos under generated names."""

    def __init__(self, adapter: StorageAdapter, image_processor: ImageProcessor | None = None) -> None:
        self.adapter = adapter
        self.image_processor = image_processor or get_image_processor()

    def upload(self, data: bytes, filename: str, content_type: str | None = None) -> UploadResult:
        """
        Store one uploaded photo.

        HEIC/HEIF files are converted to JPEG first. The stored name is a
        fresh UUID with the final extension, so uploads never collide.

        Args:
            data: Raw file bytes
            filename: Name the client uploaded the file under
            content_type: Declared MIME type

        Returns:
            UploadResult: URL of the stored photo

        Raises:
            ValidationError: If the file is empty, too large or not an image
            ImageProcessingError: If HEIC conversion fails
            StorageError: If the adapter cannot store the file
        """
        processor = self.image_processor
        processor.validate_upload(data, filename)

        extension = processor.get_extension(filename).lstrip(".")
        final_type = processor.content_type_for(filename, content_type)

        if processor.is_heic(filename, content_type):
            logger.info("heic_conversion_started", filename=filename, size=len(data))
            data = processor.convert_heic_to_jpeg(data)
            extension = "jpg"
            final_type = "image/jpeg"

        stored_name = f"{uuid.uuid4()}.{extension}" if extension else str(uuid.uuid4())
        url = self.adapter.upload_photo(data, stored_name, final_type)

        logger.info("photo_upload_completed", original_filename=filename, stored_name=stored_name, url=url)
        return UploadResult(url=url)


def get_photo_upload_service() -> PhotoUploadService:
    """Photo upload service bound to the process-wide storage adapter."""
    return PhotoUploadService(get_entries_service().adapter)
