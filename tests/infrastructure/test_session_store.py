"""Session Store - lazy creation and field-scoped mutation of web sessions."""

from teamsignup.core.domain_types import NO_SESSION_CHANGE, SessionMutation
from teamsignup.infrastructure.session_store import (
    ANONYMOUS, SessionState, apply_mutation, load_session,
)


async def test_missing_or_unknown_token_is_anonymous(test_db):
    assert await load_session(test_db, None) == ANONYMOUS
    assert await load_session(test_db, "no-such-token") == ANONYMOUS


async def test_empty_mutation_creates_nothing(test_db):
    assert await apply_mutation(test_db, ANONYMOUS, NO_SESSION_CHANGE) == ANONYMOUS


async def test_first_mutation_creates_session(test_db):
    state = await apply_mutation(test_db, ANONYMOUS, SessionMutation(set_user_id="M1"))
    assert state.token
    assert state.user_id == "M1"
    assert await load_session(test_db, state.token) == state


async def test_clear_user_id_keeps_admin_flag(test_db):
    state = await apply_mutation(
        test_db, ANONYMOUS, SessionMutation(set_user_id="M1", set_admin=True),
    )
    cleared = await apply_mutation(test_db, state, SessionMutation(clear_user_id=True))
    assert cleared.token == state.token
    assert cleared.user_id is None
    assert cleared.is_admin is True


async def test_stale_token_gets_new_session(test_db):
    stale = SessionState(token="gone", user_id="M1")
    state = await apply_mutation(test_db, stale, SessionMutation(set_admin=True))
    assert state.token != "gone"
    assert state.is_admin and state.user_id is None
