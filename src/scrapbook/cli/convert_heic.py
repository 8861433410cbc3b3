"""Convert HEIC photos already in the local uploads directory to JPEG."""

from invoke import Collection, Context, Program, task

from .. import __version__
from ..config import StorageSettings, load_environment
from ..errors import StorageError
from ..logging_config import get_logger
from ..services.heic_migration import find_heic_uploads, migrate_heic_uploads
from ..storage import LocalStorageAdapter, create_storage_adapter

logger = get_logger(__name__)


@task
def convert_existing_heic(c: Context, delete: bool = False, env_file: str = ".env", dry_run: bool = False):
    """
    Convert existing HEIC uploads to JPEG and update the entries using them.

    Args:
        c (Context): Invoke context.
        delete (bool): Remove the HEIC originals after conversion. Default is False.
        env_file (str): Path to the environment file. Default is '.env'.
        dry_run (bool): If True, lists files to be converted without touching them. Default is False.
    """
    if not load_environment(env_file):
        logger.warning("env_file_not_found_using_environment", env_file=env_file)

    adapter = create_storage_adapter(StorageSettings.from_env())
    if not isinstance(adapter, LocalStorageAdapter):
        raise StorageError(
            f"HEIC conversion only works on local storage, not '{adapter.name}'",
            code="unsupported_adapter",
            details={"adapter": adapter.name},
        )

    if dry_run:
        paths = find_heic_uploads(adapter)
        print("\n--- Dry Run Mode: Files to be converted ---")
        for path in paths:
            print(f"- {path}")
        print("--- End of Dry Run ---")
        logger.info("heic_migration_dry_run", files=len(paths))
        return

    report = migrate_heic_uploads(adapter, delete_originals=delete)

    print(
        f"\nHEIC conversion complete. Converted: {len(report.converted)}, Failed: {len(report.failed)}, "
        f"Entries updated: {len(report.updated_entries)}, Originals deleted: {len(report.deleted)}"
    )
    if report.failed_entries:
        print(f"Entries that still reference HEIC files: {', '.join(report.failed_entries)}")


program = Program(namespace=Collection(convert_existing_heic), version=__version__)
