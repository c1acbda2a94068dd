"""Request Dependencies - store, session, and caller context for route handlers.

Invariants:
    - Routes never read cookies or headers directly; they receive a
      SessionState and a CallerContext from here
    - Session mutations returned by workflows are applied only through
      commit_session, which also (re)issues the cookie when the token changes
"""

from fastapi import Depends, Header, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from teamsignup.config import Settings, get_settings
from teamsignup.core.domain_types import CallerContext, SessionMutation
from teamsignup.infrastructure.database import get_db
from teamsignup.infrastructure.session_store import (
    SessionState, apply_mutation, load_session,
)
from teamsignup.services.membership_store import SqlMembershipStore


def get_store(db: AsyncSession = Depends(get_db)) -> SqlMembershipStore:
    return SqlMembershipStore(db)


async def get_session_state(
    request: Request,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> SessionState:
    token = request.cookies.get(settings.session_cookie_name)
    return await load_session(db, token)


def get_caller(
    session: SessionState = Depends(get_session_state),
    x_device_id: str | None = Header(None, alias="X-Device-ID"),
) -> CallerContext:
    return CallerContext(
        user_id=session.user_id,
        is_admin=session.is_admin,
        device_id=x_device_id or None,
    )


async def commit_session(
    db: AsyncSession,
    response: Response,
    settings: Settings,
    session: SessionState,
    mutation: SessionMutation,
) -> SessionState:
    """Apply a workflow's session mutation and set the cookie if needed."""
    updated = await apply_mutation(db, session, mutation)
    if updated.token and updated.token != session.token:
        response.set_cookie(
            settings.session_cookie_name,
            updated.token,
            max_age=settings.session_max_age_seconds,
            httponly=True,
            samesite="lax",
            secure=settings.session_cookie_secure,
        )
    return updated
