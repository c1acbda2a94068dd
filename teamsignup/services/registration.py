"""Registration Workflow - turn a validated signup into a stored member and a session login.

Invariants:
    - Guards run in order, first failure wins:
        unknown project -> ValidationError
        same number in project -> ConflictError (reported before name)
        same name (case-insensitive) in project -> ConflictError
        missing device id -> ValidationError
    - Two writes on success: insert, then user_id backfill to the new id
    - Never touches session state directly; returns the mutation to apply

Design Decisions:
    - Schema validation (name, number format, section range) happens at the
      API boundary; this workflow receives an already-normalized NewMember
"""

import logging
from dataclasses import dataclass

from teamsignup.core.domain_types import (
    CallerContext, MemberRecord, NewMember, SessionMutation,
)
from teamsignup.core.errors import ConflictError, ErrorContext, ValidationError
from teamsignup.core.repository_protocols import MembershipStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegistrationResult:
    member: MemberRecord
    session: SessionMutation


async def check_duplicates(store: MembershipStore, member: NewMember) -> None:
    """Raise ConflictError if the number or name is taken in the project."""
    by_number, by_name = await store.find_duplicate(
        member.project_id, member.whatsapp_number, member.name,
    )
    ctx = ErrorContext(project_id=member.project_id)
    if by_number is not None:
        raise ConflictError(
            "This WhatsApp number is already registered in this project",
            "whatsappNumber", ctx,
        )
    if by_name is not None:
        raise ConflictError(
            "This name is already registered in this project", "name", ctx,
        )


async def register_member(
    store: MembershipStore, member: NewMember, caller: CallerContext,
) -> RegistrationResult:
    """Validate, de-duplicate, persist, backfill owner, and log the caller in."""
    project = await store.get_project(member.project_id)
    if project is None:
        raise ValidationError("Project not found", "projectId")

    await check_duplicates(store, member)

    if not member.device_id:
        raise ValidationError(
            "Device ID is required to register", "deviceId",
        )

    created = await store.add_member(member)
    # id is store-assigned, so ownership can only be recorded after insert
    owned = await store.set_member_owner(created.id, created.id)

    logger.info(
        f"Member registered in project '{project.name}'",
        extra={"member_id": owned.id, "project_id": owned.project_id},
    )
    if caller.user_id and caller.user_id != owned.id:
        logger.info(
            "Session identity replaced by new registration",
            extra={"member_id": owned.id},
        )
    return RegistrationResult(
        member=owned, session=SessionMutation(set_user_id=owned.id),
    )
