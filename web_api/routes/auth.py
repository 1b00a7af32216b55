"""
Authentication routes.

Endpoints:
- POST /api/auth/login - Resolve an email to a known user and set the session cookie
- POST /api/auth/logout - Clear session
- GET /api/auth/me - Decode the session cookie
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel

from core.users import ProgressStore
from web_api.auth import (
    SessionToken,
    clear_session_cookie,
    get_current_session,
    set_session_cookie,
)
from web_api.dependencies import get_progress_store

router = APIRouter(prefix="/api/auth", tags=["auth"])

logger = logging.getLogger(__name__)


class LoginRequest(BaseModel):
    email: str


@router.post("/login")
async def login(
    body: LoginRequest,
    response: Response,
    users: ProgressStore = Depends(get_progress_store),
):
    """
    Log in by email (case-insensitive).

    Only users already present in the user list can log in.
    """
    email = body.email.strip()
    if not email:
        raise HTTPException(400, "E-mail is required")

    user = users.find_user_by_email(email)
    if user is None:
        logger.info(f"Login rejected for unknown email {email}")
        raise HTTPException(404, "User not found")

    session = SessionToken(user_id=user.id, email=user.email, name=user.name)
    set_session_cookie(response, session)
    logger.info(f"User {user.id} logged in")

    return {"success": True, "user": user.to_dict()}


@router.post("/logout")
async def logout(response: Response):
    """Clear the session cookie."""
    clear_session_cookie(response)
    return {"success": True}


@router.get("/me")
async def get_me(session: SessionToken = Depends(get_current_session)):
    """
    Get current session info.

    Reads the cookie only; the user list is not consulted.
    """
    return session.to_dict()
