"""Removal Workflow - guard order, store effects, and session mutation.

Tests cover:
    - Malformed id -> ValidationError; unknown id -> NotFoundError
    - Non-owner, non-admin -> ForbiddenError, member kept, no write
    - Owner with mismatched / missing device id -> ForbiddenError
    - Owner with matching device id -> deleted, user_id cleared from session
    - Admin deletes anyone, session untouched
"""

import uuid

import pytest

from teamsignup.core.domain_types import CallerContext, NewMember
from teamsignup.core.errors import ForbiddenError, NotFoundError, ValidationError
from teamsignup.services.registration import register_member
from teamsignup.services.removal import remove_member


@pytest.fixture
async def member(store, project):
    result = await register_member(
        store,
        NewMember(
            name="Aya", whatsapp_number="+201234567890",
            project_id=project.id, device_id="D1",
        ),
        CallerContext(),
    )
    store.writes.clear()
    return result.member


async def test_malformed_id_is_validation_error(store):
    with pytest.raises(ValidationError):
        await remove_member(store, "not-an-id", CallerContext(is_admin=True))


async def test_unknown_member_is_not_found(store):
    with pytest.raises(NotFoundError):
        await remove_member(store, str(uuid.uuid4()), CallerContext(is_admin=True))


async def test_other_visitor_is_forbidden_and_member_kept(store, member):
    caller = CallerContext(user_id=str(uuid.uuid4()), device_id="D1")
    with pytest.raises(ForbiddenError):
        await remove_member(store, member.id, caller)
    assert member.id in store.members
    assert store.writes == []


async def test_anonymous_visitor_is_forbidden(store, member):
    with pytest.raises(ForbiddenError):
        await remove_member(store, member.id, CallerContext(device_id="D1"))
    assert member.id in store.members


async def test_owner_with_wrong_device_is_forbidden(store, member):
    caller = CallerContext(user_id=member.id, device_id="D2")
    with pytest.raises(ForbiddenError):
        await remove_member(store, member.id, caller)
    assert member.id in store.members
    assert store.writes == []


async def test_owner_without_device_header_is_forbidden(store, member):
    with pytest.raises(ForbiddenError):
        await remove_member(store, member.id, CallerContext(user_id=member.id))
    assert member.id in store.members


async def test_owner_with_matching_device_removes_and_logs_out(store, member):
    caller = CallerContext(user_id=member.id, device_id="D1")
    mutation = await remove_member(store, member.id, caller)
    assert member.id not in store.members
    assert mutation.clear_user_id
    assert mutation.set_admin is None


async def test_owner_match_via_recorded_user_id(store, project):
    created = await store.add_member(NewMember(
        name="Omar", whatsapp_number="+201000000000", project_id=project.id,
    ))
    owner_id = str(uuid.uuid4())
    await store.set_member_owner(created.id, owner_id)
    mutation = await remove_member(
        store, created.id, CallerContext(user_id=owner_id),
    )
    assert created.id not in store.members
    assert mutation.clear_user_id


async def test_member_without_device_id_needs_only_session(store, project):
    created = await store.add_member(NewMember(
        name="Omar", whatsapp_number="+201000000000", project_id=project.id,
    ))
    await remove_member(store, created.id, CallerContext(user_id=created.id))
    assert created.id not in store.members


async def test_admin_removes_anyone_without_device(store, member):
    mutation = await remove_member(store, member.id, CallerContext(is_admin=True))
    assert member.id not in store.members
    assert mutation.is_empty
    assert store.writes == [("remove_member", member.id)]


async def test_admin_who_is_also_owner_keeps_identity(store, member):
    caller = CallerContext(user_id=member.id, is_admin=True, device_id="other")
    mutation = await remove_member(store, member.id, caller)
    assert member.id not in store.members
    assert not mutation.clear_user_id
