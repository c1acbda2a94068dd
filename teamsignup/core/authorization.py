"""Authorization Guards - decide whether a caller may mutate a resource.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Return a TeamSignupError on violation, None on success (callers raise)
    - check_member_removal chains the removal guards; first error wins
    - Admins pass every guard; device identity is only checked for non-admins

Design Decisions:
    - Return errors (not raise): guards compose with `or` the same way the
      prerequisite chains elsewhere in core do, and tests assert on values
"""

import hmac

from teamsignup.core.domain_types import CallerContext, MemberRecord
from teamsignup.core.errors import (
    AuthenticationError, ErrorContext, ForbiddenError,
)


def check_admin(caller: CallerContext) -> ForbiddenError | None:
    """Project mutations are admin only."""
    if not caller.is_admin:
        return ForbiddenError("Admin access required")
    return None


def is_owner(caller: CallerContext, member: MemberRecord) -> bool:
    """Session identity matches the member id or its recorded owner."""
    if not caller.user_id:
        return False
    return caller.user_id in (member.id, member.user_id)


def check_ownership(
    caller: CallerContext, member: MemberRecord,
) -> ForbiddenError | None:
    """Non-admins may only remove their own registration."""
    if caller.is_admin or is_owner(caller, member):
        return None
    return ForbiddenError(
        "You can only remove yourself from teams",
        ErrorContext(member_id=member.id, project_id=member.project_id),
    )


def check_device_identity(
    caller: CallerContext, member: MemberRecord,
) -> ForbiddenError | None:
    """Once a device id was recorded, the session alone is not enough."""
    if caller.is_admin or not member.device_id:
        return None
    if caller.device_id != member.device_id:
        return ForbiddenError(
            "This registration was made from a different device",
            ErrorContext(member_id=member.id, project_id=member.project_id),
        )
    return None


def check_member_removal(
    caller: CallerContext, member: MemberRecord,
) -> ForbiddenError | None:
    """Chain removal guards. Returns first error or None."""
    return (
        check_ownership(caller, member)
        or check_device_identity(caller, member)
    )


def check_admin_password(
    submitted: str, configured: str | None,
) -> AuthenticationError | None:
    """Constant-time compare against the shared admin secret.

    An unset secret rejects every login.
    """
    if not configured:
        return AuthenticationError("Admin login is not configured")
    if not hmac.compare_digest(submitted.encode(), configured.encode()):
        return AuthenticationError()
    return None
