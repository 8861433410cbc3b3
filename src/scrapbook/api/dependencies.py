"""FastAPI dependencies: services from app state and the admin session check."""

from fastapi import Request
from fastapi.responses import JSONResponse

from ..errors import AuthenticationError
from ..services import EntriesService, PasswordAuthService, PhotoUploadService

SESSION_COOKIE = "scrapbook_session"


def get_entries_service(request: Request) -> EntriesService:
    return request.app.state.entries_service


def get_photo_upload_service(request: Request) -> PhotoUploadService:
    return request.app.state.photo_upload_service


def get_auth_service(request: Request) -> PasswordAuthService:
    return request.app.state.auth_service


def get_session_token(request: Request) -> str | None:
    """Session token from the session cookie or an ``Authorization: Bearer`` header."""
    token = request.cookies.get(SESSION_COOKIE)
    if token:
        return token

    authorization = request.headers.get("authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials.strip()
    return None


def require_admin_session(request: Request) -> None:
    """
    Reject the request unless it carries a valid admin session.

    Raises:
        AuthenticationError: Rendered as HTTP 401 by the app's error handler
    """
    auth_service = get_auth_service(request)
    token = get_session_token(request)
    if not auth_service.verify_session(token):
        raise AuthenticationError(
            "Admin session required",
            code="session_required",
            details={"path": request.url.path, "has_token": bool(token)},
        )


def error_response(status_code: int, message: str) -> JSONResponse:
    """JSON error body with a generic message and no internal detail."""
    return JSONResponse({"error": message}, status_code=status_code)
