"""Removal Workflow - delete a member only when the caller is authorized.

Invariants:
    - Sequential guards, first failure wins:
        malformed id -> ValidationError
        no such member -> NotFoundError
        not admin and not owner -> ForbiddenError
        not admin and device id mismatch (when one was recorded) -> ForbiddenError
    - No store mutation unless every guard passes; the delete is the only write
    - A non-admin owner gets user_id cleared from the session; nothing else
      in the session changes
"""

import logging

from teamsignup.core.authorization import check_member_removal, is_owner
from teamsignup.core.domain_types import (
    CallerContext, MemberId, NO_SESSION_CHANGE, SessionMutation,
    is_well_formed_id,
)
from teamsignup.core.errors import NotFoundError, ValidationError
from teamsignup.core.repository_protocols import MembershipStore

logger = logging.getLogger(__name__)


async def remove_member(
    store: MembershipStore, member_id: str, caller: CallerContext,
) -> SessionMutation:
    """Authorize and delete a member. Returns the session mutation to apply."""
    if not is_well_formed_id(member_id):
        raise ValidationError("Invalid member ID", "id")

    member = await store.get_member(MemberId(member_id))
    if member is None:
        raise NotFoundError("Member", member_id)

    owner = is_owner(caller, member)
    error = check_member_removal(caller, member)
    if error:
        logger.warning(
            f"Member removal denied: {error.message}",
            extra={"member_id": member.id, "error_code": error.code},
        )
        raise error

    await store.remove_member(member.id)
    logger.info(
        "Member removed by %s", "admin" if caller.is_admin else "owner",
        extra={"member_id": member.id, "project_id": member.project_id},
    )

    if not caller.is_admin and owner:
        return SessionMutation(clear_user_id=True)
    return NO_SESSION_CHANGE
