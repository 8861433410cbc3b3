"""Image handling for photo uploads.

Photos are stored as uploaded, except HEIC/HEIF files from phones, which
browsers cannot display and are therefore converted to JPEG first. No other
image inspection happens; dimensions reported to clients are placeholders.
"""

import io
from datetime import datetime
from pathlib import Path

from PIL import Image, ImageOps

from ..config import get_env, get_max_file_size
from ..errors import ImageProcessingError, ValidationError
from ..logging_config import get_logger, log_performance

try:
    from pillow_heif import register_heif_opener  # type: ignore[import-untyped]

    register_heif_opener()
    HEIF_AVAILABLE = True
except ImportError:
    HEIF_AVAILABLE = False

logger = get_logger(__name__)

HEIC_EXTENSIONS = {".heic", ".heif"}
HEIC_CONTENT_TYPES = {"image/heic", "image/heif", "image/heic-sequence", "image/heif-sequence"}

CONTENT_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".heic": "image/heic",
    ".heif": "image/heif",
}


class ImageProcessor:
    """Validates uploaded images and converts HEIC photos to JPEG."""

    SUPPORTED_FORMATS = set(CONTENT_TYPES)

    def __init__(self, max_file_size: int | None = None, jpeg_quality: int | None = None) -> None:
        self.max_file_size = max_file_size or get_max_file_size()
        self.jpeg_quality = jpeg_quality or int(get_env("HEIC_JPEG_QUALITY", 90, int))

        if not HEIF_AVAILABLE:
            logger.warning(
                "heif_support_unavailable",
                message="Install pillow-heif for HEIC support",
                supported_formats=sorted(self.SUPPORTED_FORMATS - HEIC_EXTENSIONS),
            )

    @staticmethod
    def get_extension(filename: str) -> str:
        """Lower-case extension including the dot, or '' when there is none."""
        return Path(filename).suffix.lower()

    def is_supported_format(self, filename: str) -> bool:
        """
        Check if the image format is supported.

        HEIC/HEIF counts as supported only when pillow-heif is installed.
        """
        extension = self.get_extension(filename)
        if extension in HEIC_EXTENSIONS:
            return HEIF_AVAILABLE
        return extension in self.SUPPORTED_FORMATS

    def is_heic(self, filename: str, content_type: str | None = None) -> bool:
        """Check whether an upload is HEIC/HEIF by extension or declared type."""
        if self.get_extension(filename) in HEIC_EXTENSIONS:
            return True
        return (content_type or "").lower() in HEIC_CONTENT_TYPES

    def content_type_for(self, filename: str, declared: str | None = None) -> str:
        """Content type to store a file with, preferring the declared type."""
        if declared and declared != "application/octet-stream":
            return declared
        return CONTENT_TYPES.get(self.get_extension(filename), "application/octet-stream")

    def validate_upload(self, image_data: bytes, filename: str) -> None:
        """
        Validate that an upload is non-empty, small enough and of a known format.

        Raises:
            ValidationError: If any check fails
        """
        if not image_data:
            raise ValidationError(
                f"File '{filename}' is empty",
                code="empty_file",
                user_message="No file provided",
                details={"filename": filename},
            )

        if len(image_data) > self.max_file_size:
            max_size_mb = self.max_file_size / (1024 * 1024)
            raise ValidationError(
                f"File '{filename}' is too large ({len(image_data)} bytes). Maximum size: {max_size_mb:.0f}MB",
                code="file_too_large",
                user_message=f"File is too large. Maximum size: {max_size_mb:.0f}MB",
                details={"filename": filename, "file_size": len(image_data), "max_size": self.max_file_size},
            )

        if not self.is_supported_format(filename):
            raise ValidationError(
                f"Unsupported image format: '{filename}'",
                code="unsupported_format",
                user_message="Unsupported image format",
                details={"filename": filename, "supported_formats": sorted(self.SUPPORTED_FORMATS)},
            )

        logger.debug("upload_valid", filename=filename, file_size=len(image_data))

    def convert_heic_to_jpeg(self, image_data: bytes) -> bytes:
        """
        Convert a HEIC/HEIF image to JPEG, keeping its dimensions.

        Args:
            image_data: Raw HEIC data

        Returns:
            bytes: JPEG data

        Raises:
            ImageProcessingError: If conversion fails
        """
        start_time = datetime.now()

        try:
            with Image.open(io.BytesIO(image_data)) as image:
                image = ImageOps.exif_transpose(image)
                original_size = image.size
                original_format = image.format

                if image.mode not in ("RGB", "L"):
                    image = image.convert("RGB")

                jpeg_buffer = io.BytesIO()
                image.save(jpeg_buffer, format="JPEG", quality=self.jpeg_quality, optimize=True)
                jpeg_data = jpeg_buffer.getvalue()
        except Exception as e:
            raise ImageProcessingError(
                f"Failed to convert HEIC image to JPEG: {e}",
                code="heic_conversion_failed",
                user_message="Failed to convert HEIC image. Please try a different format.",
                details={"original_file_size": len(image_data), "quality": self.jpeg_quality},
                original_exception=e,
            ) from e

        duration = (datetime.now() - start_time).total_seconds()
        log_performance(
            "convert_heic_to_jpeg",
            duration,
            original_size=original_size,
            original_format=original_format,
            original_file_size=len(image_data),
            jpeg_file_size=len(jpeg_data),
        )
        return jpeg_data


_image_processor: ImageProcessor | None = None


def get_image_processor() -> ImageProcessor:
    """Get the global image processor instance."""
    global _image_processor
    if _image_processor is None:
        _image_processor = ImageProcessor()
    return _image_processor
