"""
Unit tests for image processing service.
"""

import io
from unittest.mock import patch

import pytest
from PIL import Image

from scrapbook.errors import ImageProcessingError, ValidationError
from scrapbook.services import ImageProcessor, get_image_processor
from scrapbook.services import image_processor as image_processor_module


class TestImageProcessor:
    """Test cases for ImageProcessor class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.processor = ImageProcessor(max_file_size=1024 * 1024)

    def create_test_image(self, format_type="PNG", size=(100, 100), mode="RGB") -> bytes:
        """Create a test image in memory."""
        image = Image.new(mode, size, color="red")
        buffer = io.BytesIO()
        image.save(buffer, format=format_type)
        return buffer.getvalue()

    @pytest.mark.parametrize("filename", ["a.jpg", "a.JPEG", "a.png", "a.gif", "a.webp"])
    def test_is_supported_format(self, filename):
        """Test supported format check for common web formats."""
        assert self.processor.is_supported_format(filename) is True

    def test_is_supported_format_heic(self):
        """Test that HEIC support follows pillow-heif availability."""
        assert self.processor.is_supported_format("a.heic") is image_processor_module.HEIF_AVAILABLE

    @pytest.mark.parametrize("filename", ["a.bmp", "a.txt", "noextension"])
    def test_is_supported_format_unsupported(self, filename):
        """Test unsupported format check."""
        assert self.processor.is_supported_format(filename) is False

    def test_is_heic(self):
        """Test HEIC detection by extension or declared type."""
        assert self.processor.is_heic("IMG_0001.HEIC") is True
        assert self.processor.is_heic("photo.heif") is True
        assert self.processor.is_heic("photo", "image/heic") is True
        assert self.processor.is_heic("photo.jpg", "image/jpeg") is False

    def test_content_type_for(self):
        """Test content type resolution."""
        assert self.processor.content_type_for("a.png", "image/png") == "image/png"
        assert self.processor.content_type_for("a.png", None) == "image/png"
        assert self.processor.content_type_for("a.jpg", "application/octet-stream") == "image/jpeg"
        assert self.processor.content_type_for("a.xyz") == "application/octet-stream"

    def test_validate_upload_success(self):
        """Test validation of a good upload."""
        self.processor.validate_upload(self.create_test_image(), "a.png")

    def test_validate_upload_empty(self):
        """Test validation of an empty file."""
        with pytest.raises(ValidationError) as exc_info:
            self.processor.validate_upload(b"", "a.png")

        assert exc_info.value.code == "empty_file"
        assert exc_info.value.user_message == "No file provided"

    def test_validate_upload_too_large(self):
        """Test validation of an oversized file."""
        processor = ImageProcessor(max_file_size=10)

        with pytest.raises(ValidationError) as exc_info:
            processor.validate_upload(b"x" * 11, "a.png")

        assert exc_info.value.code == "file_too_large"

    def test_validate_upload_unsupported(self):
        """Test validation of an unsupported format."""
        with pytest.raises(ValidationError) as exc_info:
            self.processor.validate_upload(b"data", "notes.txt")

        assert exc_info.value.code == "unsupported_format"

    def test_max_file_size_from_environment(self, monkeypatch):
        """Test that MAX_FILE_SIZE configures the limit."""
        monkeypatch.setenv("MAX_FILE_SIZE", "2048")

        assert ImageProcessor().max_file_size == 2048

    def test_settings_from_streamlit_secrets(self):
        """Test that limits set only in Streamlit secrets are honoured."""
        secrets = {"MAX_FILE_SIZE": "4096", "HEIC_JPEG_QUALITY": "75"}

        with patch("scrapbook.config.st") as mock_st:
            mock_st.secrets.get.side_effect = secrets.get
            processor = ImageProcessor()

        assert processor.max_file_size == 4096
        assert processor.jpeg_quality == 75

    def test_jpeg_quality_from_environment(self, monkeypatch):
        """Test that HEIC_JPEG_QUALITY configures the JPEG quality."""
        monkeypatch.setenv("HEIC_JPEG_QUALITY", "80")

        assert ImageProcessor().jpeg_quality == 80

    def test_convert_to_jpeg_keeps_dimensions(self):
        """Test conversion output using a PNG stand-in for HEIC input."""
        source = self.create_test_image("PNG", (64, 48), "RGBA")

        jpeg_data = self.processor.convert_heic_to_jpeg(source)

        with Image.open(io.BytesIO(jpeg_data)) as image:
            assert image.format == "JPEG"
            assert image.size == (64, 48)
            assert image.mode == "RGB"

    def test_convert_invalid_data(self):
        """Test conversion of data that is not an image."""
        with pytest.raises(ImageProcessingError) as exc_info:
            self.processor.convert_heic_to_jpeg(b"not an image")

        assert exc_info.value.code == "heic_conversion_failed"
        assert exc_info.value.user_message == "Failed to convert HEIC image. Please try a different format."

    def test_convert_save_failure(self):
        """Test conversion when JPEG encoding fails."""
        source = self.create_test_image()

        with patch("PIL.Image.Image.save", side_effect=OSError("encoder missing")) as mock_save:
            with pytest.raises(ImageProcessingError) as exc_info:
                self.processor.convert_heic_to_jpeg(source)

        mock_save.assert_called_once()
        assert exc_info.value.code == "heic_conversion_failed"

    def test_get_image_processor_singleton(self):
        """Test that the global processor is reused."""
        assert get_image_processor() is get_image_processor()
