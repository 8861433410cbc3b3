"""FastAPI application for the scrapbook JSON API.

Run with ``scrapbook-api`` or ``uvicorn scrapbook.api.app:create_app --factory``.
"""

import uvicorn
from fastapi import FastAPI, Request
from fastapi.staticfiles import StaticFiles

from .. import __version__
from ..config import StorageSettings, get_env, load_environment
from ..errors import ErrorCategory, ScrapbookError
from ..logging_config import configure_structured_logging, get_logger
from ..services import (
    EntriesService,
    PasswordAuthService,
    PhotoUploadService,
    configure_entries_service,
    get_auth_service,
)
from ..storage import LocalStorageAdapter
from .dependencies import error_response
from .routes import auth, entries, upload

logger = get_logger(__name__)

_STATUS_BY_CATEGORY = {
    ErrorCategory.AUTHENTICATION: 401,
    ErrorCategory.VALIDATION: 400,
    ErrorCategory.STORAGE: 500,
    ErrorCategory.IMAGE_PROCESSING: 500,
    ErrorCategory.UNKNOWN: 500,
}


async def scrapbook_error_handler(request: Request, exc: ScrapbookError):
    status_code = _STATUS_BY_CATEGORY.get(exc.category, 500)
    logger.info("request_failed", path=request.url.path, status_code=status_code, code=exc.code)
    return error_response(status_code, exc.user_message)


def _mount_local_uploads(app: FastAPI, adapter: LocalStorageAdapter) -> None:
    adapter.uploads_dir.mkdir(parents=True, exist_ok=True)
    app.mount(adapter.public_prefix, StaticFiles(directory=adapter.uploads_dir, check_dir=False), name="uploads")
    logger.info("local_uploads_mounted", prefix=adapter.public_prefix, directory=str(adapter.uploads_dir))


def create_app(
    entries_service: EntriesService | None = None,
    auth_service: PasswordAuthService | None = None,
    photo_upload_service: PhotoUploadService | None = None,
    settings: StorageSettings | None = None,
) -> FastAPI:
    """
    Build the API application.

    Services default to ones built from configuration; storage is selected
    once here and shared by every request.
    """
    configure_structured_logging()

    entries_service = entries_service or configure_entries_service(settings)
    auth_service = auth_service or get_auth_service()
    photo_upload_service = photo_upload_service or PhotoUploadService(entries_service.adapter)

    app = FastAPI(title="scrapbook", version=__version__)
    app.state.entries_service = entries_service
    app.state.auth_service = auth_service
    app.state.photo_upload_service = photo_upload_service

    app.add_exception_handler(ScrapbookError, scrapbook_error_handler)

    app.include_router(auth.router)
    app.include_router(entries.router)
    app.include_router(upload.router)

    @app.get("/health", tags=["health"])
    def health():
        return {"status": "healthy", "storage": entries_service.adapter.name}

    if isinstance(entries_service.adapter, LocalStorageAdapter):
        _mount_local_uploads(app, entries_service.adapter)

    logger.info("api_app_created", storage=entries_service.adapter.name, login_enabled=auth_service.enabled)
    return app


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    load_environment()
    uvicorn.run(
        "scrapbook.api.app:create_app",
        factory=True,
        host=str(get_env("API_HOST", "127.0.0.1")),
        port=int(get_env("API_PORT", 8000, int)),
        log_config=None,
    )
