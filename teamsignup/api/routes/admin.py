"""Admin Session - shared-secret login, logout, and status.

Invariants:
    - Only a password match sets is_admin on the caller's session
    - Logout clears is_admin and leaves user_id untouched
"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from teamsignup.api.dependencies import commit_session, get_session_state
from teamsignup.config import Settings, get_settings
from teamsignup.infrastructure.database import get_db
from teamsignup.infrastructure.session_store import SessionState
from teamsignup.schemas.identity import (
    AdminLogin, AdminStatusResponse, SuccessResponse,
)
from teamsignup.services.project_admin import login_admin, logout_admin

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.post("/login", response_model=SuccessResponse)
async def admin_login(
    body: AdminLogin,
    response: Response,
    session: SessionState = Depends(get_session_state),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    mutation = login_admin(body.password, settings.admin_password)
    await commit_session(db, response, settings, session, mutation)
    return SuccessResponse()


@router.post("/logout", response_model=SuccessResponse)
async def admin_logout(
    response: Response,
    session: SessionState = Depends(get_session_state),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    if session.token:
        await commit_session(db, response, settings, session, logout_admin())
    return SuccessResponse()


@router.get("/status", response_model=AdminStatusResponse)
async def admin_status(session: SessionState = Depends(get_session_state)):
    return AdminStatusResponse(is_admin=session.is_admin)
