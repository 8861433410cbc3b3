"""Login and logout for the shared admin password."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ...config import is_development
from ...services import PasswordAuthService
from ..dependencies import SESSION_COOKIE, get_auth_service, get_session_token

router = APIRouter(prefix="/api/auth", tags=["auth"])


class LoginRequest(BaseModel):
    password: str


@router.post("/login")
def login(body: LoginRequest, auth_service: Annotated[PasswordAuthService, Depends(get_auth_service)]):
    """Exchange the admin password for a session cookie."""
    token = auth_service.login(body.password)

    response = JSONResponse({"success": True})
    response.set_cookie(
        SESSION_COOKIE,
        token,
        max_age=int(auth_service.ttl.total_seconds()),
        httponly=True,
        samesite="lax",
        secure=not is_development(),
    )
    return response


@router.post("/logout")
def logout():
    response = JSONResponse({"success": True})
    response.delete_cookie(SESSION_COOKIE)
    return response


@router.get("/session")
def session(request: Request, auth_service: Annotated[PasswordAuthService, Depends(get_auth_service)]):
    """Whether the caller currently holds a valid admin session."""
    return {"authenticated": auth_service.verify_session(get_session_token(request))}
