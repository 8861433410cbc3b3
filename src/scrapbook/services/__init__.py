"""
Services module for the scrapbook application.

- EntriesService: facade over the selected storage adapter
- PhotoUploadService: validation, HEIC conversion and storage of photos
- ImageProcessor: image validation and HEIC to JPEG conversion
- PasswordAuthService: shared-password gate and session tokens
"""

from .auth import PasswordAuthService, get_auth_service, reset_auth_service
from .entries import EntriesService, configure_entries_service, get_entries_service, reset_entries_service
from .image_processor import ImageProcessor, get_image_processor
from .photos import PhotoUploadService, UploadResult, get_photo_upload_service

__all__ = [
    "EntriesService",
    "ImageProcessor",
    "PasswordAuthService",
    "PhotoUploadService",
    "UploadResult",
    "configure_entries_service",
    "get_auth_service",
    "get_entries_service",
    "get_image_processor",
    "get_photo_upload_service",
    "reset_auth_service",
    "reset_entries_service",
]
