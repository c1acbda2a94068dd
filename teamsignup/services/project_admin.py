"""Project Administration - admin login and admin-only project mutations.

Invariants:
    - create/delete require CallerContext.is_admin (check_admin guard)
    - delete_project cascades to members and is idempotent for unknown ids
    - Admin status is granted only by a password match against the
      configured shared secret
"""

import logging

from teamsignup.core.authorization import check_admin, check_admin_password
from teamsignup.core.domain_types import (
    CallerContext, ProjectId, ProjectRecord, SessionMutation, is_well_formed_id,
)
from teamsignup.core.errors import ErrorContext, ValidationError
from teamsignup.core.repository_protocols import MembershipStore

logger = logging.getLogger(__name__)

DEFAULT_PROJECTS = ("Web Development", "Mobile App", "AI/ML Project")


def login_admin(password: str, admin_password: str | None) -> SessionMutation:
    """Mark the session admin when the shared secret matches."""
    error = check_admin_password(password, admin_password)
    if error:
        logger.warning("Admin login rejected", extra={"error_code": error.code})
        raise error
    logger.info("Admin login succeeded")
    return SessionMutation(set_admin=True)


def logout_admin() -> SessionMutation:
    return SessionMutation(set_admin=False)


async def create_project(
    store: MembershipStore, caller: CallerContext, name: str,
) -> ProjectRecord:
    error = check_admin(caller)
    if error:
        raise error
    project = await store.create_project(name)
    logger.info(
        f"Project '{project.name}' created", extra={"project_id": project.id},
    )
    return project


async def delete_project(
    store: MembershipStore, caller: CallerContext, project_id: str,
) -> None:
    """Delete a project and every member that references it."""
    error = check_admin(caller)
    if error:
        raise error
    if not is_well_formed_id(project_id):
        raise ValidationError(
            "Invalid project ID", "id", ErrorContext(project_id=project_id),
        )
    removed = await store.delete_project(ProjectId(project_id))
    logger.info(
        f"Project deleted with {removed} member(s)",
        extra={"project_id": project_id},
    )


async def seed_default_projects(store: MembershipStore) -> list[ProjectRecord]:
    """Create the starter projects when the store has none."""
    if await store.list_projects():
        return []
    seeded = [await store.create_project(name) for name in DEFAULT_PROJECTS]
    logger.info(f"Seeded {len(seeded)} default project(s)")
    return seeded
