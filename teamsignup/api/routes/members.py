"""Members - self-service registration and removal.

Invariants:
    - POST registers and binds the new member id into the caller's session
    - DELETE authorizes via session identity + X-Device-ID (admins bypass)
    - Session changes come back from the workflow and are applied here only
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from teamsignup.api.dependencies import (
    commit_session, get_caller, get_session_state, get_store,
)
from teamsignup.config import Settings, get_settings
from teamsignup.core.domain_types import CallerContext
from teamsignup.infrastructure.database import get_db
from teamsignup.infrastructure.session_store import SessionState
from teamsignup.schemas.member import MemberCreate, MemberResponse
from teamsignup.services.membership_store import SqlMembershipStore
from teamsignup.services.registration import register_member
from teamsignup.services.removal import remove_member

router = APIRouter(prefix="/api/members", tags=["members"])


@router.post("", response_model=MemberResponse)
async def register_member_route(
    body: MemberCreate,
    response: Response,
    caller: CallerContext = Depends(get_caller),
    session: SessionState = Depends(get_session_state),
    store: SqlMembershipStore = Depends(get_store),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    result = await register_member(store, body.to_new_member(), caller)
    await commit_session(db, response, settings, session, result.session)
    return MemberResponse.model_validate(result.member)


@router.delete("/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_member_route(
    member_id: str,
    response: Response,
    caller: CallerContext = Depends(get_caller),
    session: SessionState = Depends(get_session_state),
    store: SqlMembershipStore = Depends(get_store),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    mutation = await remove_member(store, member_id, caller)
    await commit_session(db, response, settings, session, mutation)
