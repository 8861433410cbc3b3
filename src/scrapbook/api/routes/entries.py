"""Entry routes: public reads plus session-gated create and delete."""

import json
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool

from ...logging_config import get_logger, log_error, log_user_action
from ...models import validate_entry_date
from ...services import EntriesService
from ...services.validation import MISSING_FIELDS_MESSAGE, entry_from_payload
from ..dependencies import error_response, get_entries_service, require_admin_session

logger = get_logger(__name__)

router = APIRouter(prefix="/api/entries", tags=["entries"])


async def _date_from_request(request: Request) -> str | None:
    date = request.query_params.get("date")
    if date:
        return date

    body = await request.body()
    if not body:
        return None
    try:
        payload = json.loads(body)
    except json.JSONDecodeError:
        return None
    if isinstance(payload, dict) and isinstance(payload.get("date"), str):
        return payload["date"] or None
    return None


@router.get("")
def list_entries(service: Annotated[EntriesService, Depends(get_entries_service)]):
    """All entries, newest first."""
    return [entry.to_dict() for entry in service.list_entries()]


@router.post("/create", dependencies=[Depends(require_admin_session)])
async def create_entry(request: Request, service: Annotated[EntriesService, Depends(get_entries_service)]):
    """Create or overwrite the entry for a date."""
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return error_response(400, MISSING_FIELDS_MESSAGE)

    entry = entry_from_payload(payload)

    try:
        await run_in_threadpool(service.create_entry, entry)
    except Exception as e:
        log_error(e, {"operation": "create_entry", "date": entry.date})
        return error_response(500, "Failed to create entry")

    log_user_action("entry_created", date=entry.date, photos=len(entry.photos))
    return {"success": True, "entry": entry.to_dict()}


@router.delete("/delete", dependencies=[Depends(require_admin_session)])
async def delete_entry(request: Request, service: Annotated[EntriesService, Depends(get_entries_service)]):
    """Delete the entry for ``date`` (query parameter or JSON body) and its photos."""
    date = await _date_from_request(request)
    if not date:
        return error_response(400, "Missing date parameter")
    if not validate_entry_date(date):
        return error_response(400, "Date must be in YYYY-MM-DD format")

    try:
        await run_in_threadpool(service.delete_entry, date)
    except Exception as e:
        log_error(e, {"operation": "delete_entry", "date": date})
        return error_response(500, "Failed to delete entry")

    log_user_action("entry_deleted", date=date)
    return {"success": True, "message": "Entry deleted successfully"}


@router.get("/{date}")
def get_entry(date: str, service: Annotated[EntriesService, Depends(get_entries_service)]):
    """One entry by date."""
    entry = service.get_entry(date) if validate_entry_date(date) else None
    if entry is None:
        return error_response(404, "Entry not found")
    return entry.to_dict()
