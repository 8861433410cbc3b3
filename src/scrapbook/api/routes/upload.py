"""Photo upload route."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.concurrency import run_in_threadpool

from ...errors import ImageProcessingError, ValidationError
from ...logging_config import get_logger, log_error
from ...services import PhotoUploadService
from ..dependencies import error_response, get_photo_upload_service, require_admin_session

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["upload"])


@router.post("/upload", dependencies=[Depends(require_admin_session)])
async def upload_photo(
    upload_service: Annotated[PhotoUploadService, Depends(get_photo_upload_service)],
    file: Annotated[UploadFile | None, File()] = None,
):
    """Store one photo (HEIC converted to JPEG) and return its URL and dimensions."""
    if file is None or not file.filename:
        return error_response(400, "No file provided")

    data = await file.read()
    if not data:
        return error_response(400, "No file provided")

    try:
        result = await run_in_threadpool(upload_service.upload, data, file.filename, file.content_type)
    except ValidationError as e:
        return error_response(400, e.user_message)
    except ImageProcessingError as e:
        return error_response(500, e.user_message)
    except Exception as e:
        log_error(e, {"operation": "upload_photo", "upload_filename": file.filename})
        return error_response(500, "Upload failed")

    return result.to_dict()
