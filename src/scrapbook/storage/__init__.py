"""
Storage module for the scrapbook application.

- StorageAdapter: the contract every backend satisfies
- LocalStorageAdapter: JSON documents and photo files on local disk
- GCSStorageAdapter: objects in a Google Cloud Storage bucket
- create_storage_adapter: picks a backend from StorageSettings
"""

from .base import StorageAdapter, delete_photos_best_effort
from .factory import AdapterKind, create_storage_adapter, resolve_adapter_kind, select_adapter_kind
from .gcs import GCSStorageAdapter
from .local import LocalStorageAdapter

__all__ = [
    "AdapterKind",
    "GCSStorageAdapter",
    "LocalStorageAdapter",
    "StorageAdapter",
    "create_storage_adapter",
    "delete_photos_best_effort",
    "resolve_adapter_kind",
    "select_adapter_kind",
]
