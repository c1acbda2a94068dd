"""Server-Side Session Store - web sessions keyed by an opaque cookie token.

Invariants:
    - The client only ever holds the token; user_id / is_admin live in web_sessions
    - A session row is created lazily, the first time a mutation needs one
    - apply_mutation changes only the fields the mutation names
    - Unknown or stale tokens behave like an anonymous caller
"""

import logging
import secrets
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from teamsignup.core.domain_types import SessionMutation
from teamsignup.models.web_session import WebSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionState:
    """Snapshot of a caller's session for the current request."""
    token: str | None = None
    user_id: str | None = None
    is_admin: bool = False


ANONYMOUS = SessionState()


def generate_token() -> str:
    return secrets.token_urlsafe(32)


async def load_session(db: AsyncSession, token: str | None) -> SessionState:
    """Resolve a cookie token to its session, or ANONYMOUS."""
    if not token:
        return ANONYMOUS
    row = await db.get(WebSession, token)
    if row is None:
        return ANONYMOUS
    return SessionState(token=row.id, user_id=row.user_id, is_admin=row.is_admin)


async def apply_mutation(
    db: AsyncSession, state: SessionState, mutation: SessionMutation,
) -> SessionState:
    """Persist a workflow's session mutation. Returns the updated state."""
    if mutation.is_empty:
        return state

    row = await db.get(WebSession, state.token) if state.token else None
    if row is None:
        row = WebSession(id=generate_token(), is_admin=False)
        db.add(row)

    if mutation.set_user_id is not None:
        row.user_id = mutation.set_user_id
    if mutation.clear_user_id:
        row.user_id = None
    if mutation.set_admin is not None:
        row.is_admin = mutation.set_admin

    await db.commit()
    logger.debug("Session updated", extra={"member_id": row.user_id})
    return SessionState(token=row.id, user_id=row.user_id, is_admin=row.is_admin)
