"""Domain Types - id format check, name keys, session mutation semantics."""

import uuid

from teamsignup.core.domain_types import (
    NO_SESSION_CHANGE, SessionMutation, is_well_formed_id, member_name_key,
)


def test_uuid_text_is_well_formed():
    assert is_well_formed_id(str(uuid.uuid4()))


def test_arbitrary_text_is_not_well_formed():
    assert not is_well_formed_id("P1")
    assert not is_well_formed_id("")


def test_no_session_change_is_empty():
    assert NO_SESSION_CHANGE.is_empty


def test_mutations_are_not_empty():
    assert not SessionMutation(set_user_id="M1").is_empty
    assert not SessionMutation(clear_user_id=True).is_empty
    assert not SessionMutation(set_admin=False).is_empty


def test_name_key_ignores_case_beyond_ascii():
    assert member_name_key("ÉMILE") == member_name_key("émile")
    assert member_name_key("Strauß") == member_name_key("STRAUSS")
    assert member_name_key("Aya") != member_name_key("Aya Ali")
