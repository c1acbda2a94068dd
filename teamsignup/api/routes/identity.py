"""Session Identity - which member, if any, the caller's session is bound to."""

from fastapi import APIRouter, Depends

from teamsignup.api.dependencies import get_session_state
from teamsignup.infrastructure.session_store import SessionState
from teamsignup.schemas.identity import MeResponse

router = APIRouter(prefix="/api", tags=["identity"])


@router.get("/me", response_model=MeResponse)
async def me(session: SessionState = Depends(get_session_state)):
    return MeResponse(user_id=session.user_id)
