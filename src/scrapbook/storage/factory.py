"""Storage adapter selection.

Selection order:

1. ``STORAGE_ADAPTER`` override: ``local`` forces the filesystem adapter;
   ``gcs`` (or the aliases ``blob`` and ``vercel``) forces the remote adapter
2. Otherwise auto-detect: a configured ``GCS_BUCKET`` selects the remote
   adapter, its absence selects the local adapter
"""

from collections.abc import Mapping
from enum import Enum

from ..config import GCS_BUCKET_ENV, STORAGE_ADAPTER_ENV, StorageSettings
from ..logging_config import get_logger
from .base import StorageAdapter
from .gcs import GCSStorageAdapter
from .local import LocalStorageAdapter

logger = get_logger(__name__)


class AdapterKind(str, Enum):
    """Available storage backends."""

    LOCAL = "local"
    GCS = "gcs"


_OVERRIDES = {
    "local": AdapterKind.LOCAL,
    "gcs": AdapterKind.GCS,
    "blob": AdapterKind.GCS,
    "vercel": AdapterKind.GCS,
}


def resolve_adapter_kind(override: str | None, remote_credential: str | None) -> AdapterKind:
    """
    Decide which backend to use from the override and the remote credential.

    Args:
        override: STORAGE_ADAPTER value, if set
        remote_credential: GCS_BUCKET value, if set

    Returns:
        AdapterKind: The selected backend
    """
    if override:
        kind = _OVERRIDES.get(override.strip().lower())
        if kind is not None:
            logger.debug("storage_adapter_forced", adapter=kind.value)
            return kind
        logger.warning("unknown_storage_adapter_override", value=override, allowed=sorted(_OVERRIDES))

    kind = AdapterKind.GCS if remote_credential else AdapterKind.LOCAL
    logger.debug("storage_adapter_auto_detected", adapter=kind.value)
    return kind


def select_adapter_kind(env: Mapping[str, str]) -> AdapterKind:
    """Select the backend from an environment mapping such as ``os.environ``."""
    return resolve_adapter_kind(env.get(STORAGE_ADAPTER_ENV), env.get(GCS_BUCKET_ENV))


def create_storage_adapter(settings: StorageSettings) -> StorageAdapter:
    """
    Build the storage adapter described by ``settings``.

    Args:
        settings: Storage settings captured at process start

    Returns:
        StorageAdapter: A local or GCS adapter

    Raises:
        StorageError: If the remote adapter is selected but cannot be initialized
    """
    kind = resolve_adapter_kind(settings.adapter_override, settings.gcs_bucket)
    forced = bool(settings.adapter_override and settings.adapter_override in _OVERRIDES)

    adapter: StorageAdapter
    if kind is AdapterKind.GCS:
        adapter = GCSStorageAdapter(
            bucket_name=settings.gcs_bucket,
            project_id=settings.gcs_project,
            public_acl=settings.gcs_public_acl,
        )
    else:
        adapter = LocalStorageAdapter(
            entries_dir=settings.entries_dir,
            uploads_dir=settings.uploads_dir,
            public_prefix=settings.public_uploads_prefix,
        )

    logger.info("storage_adapter_selected", adapter=adapter.name, forced=forced)
    return adapter
