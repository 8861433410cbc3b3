"""
scrapbook - Personal photo-journal web application

A web application for keeping a dated photo journal with features including:
- Dated entries with a title, description and ordered photos
- Timeline browsing, newest entries first
- Password-gated admin view for creating and deleting entries
- Pluggable storage: local filesystem or Google Cloud Storage
- HEIC to JPEG conversion on upload, plus a command converting older HEIC uploads
"""

__version__ = "0.1.0"
__author__ = "scrapbook"
__description__ = "Personal photo-journal web application"
