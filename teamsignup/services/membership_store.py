"""SQL Membership Store - SQLAlchemy implementation of MembershipStore.

Invariants:
    - Returns frozen records (core/domain_types.py), never ORM instances
    - Every mutating method commits before returning
    - Unique (project_id, whatsapp_number) violations become ConflictError
    - Name matching uses the stored name_key; database lower() folds
      ASCII only on SQLite and C-collated PostgreSQL
    - delete_project removes members explicitly before the project, so the
      cascade holds on backends that do not enforce foreign keys (SQLite)

Design Decisions:
    - One store per request, bound to the request's AsyncSession
"""

import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from teamsignup.core.domain_types import (
    MemberId, MemberRecord, NewMember, ProjectId, ProjectRecord,
    member_name_key,
)
from teamsignup.core.errors import ConflictError, ErrorContext, NotFoundError
from teamsignup.models.project import Project
from teamsignup.models.team_member import TeamMember

logger = logging.getLogger(__name__)


def _to_project(row: Project) -> ProjectRecord:
    return ProjectRecord(id=ProjectId(row.id), name=row.name)


def _to_member(row: TeamMember) -> MemberRecord:
    return MemberRecord(
        id=MemberId(row.id),
        name=row.name,
        whatsapp_number=row.whatsapp_number,
        project_id=ProjectId(row.project_id),
        section_number=row.section_number,
        photo_url=row.photo_url,
        user_id=row.user_id,
        device_id=row.device_id,
        created_at=row.created_at,
    )


class SqlMembershipStore:
    """Projects and team members persisted through an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── Projects ────────────────────────────────────────────────

    async def list_projects(self) -> list[ProjectRecord]:
        result = await self.db.execute(
            select(Project).order_by(Project.created_at, Project.name),
        )
        return [_to_project(p) for p in result.scalars().all()]

    async def get_project(self, project_id: ProjectId) -> ProjectRecord | None:
        project = await self.db.get(Project, project_id)
        return _to_project(project) if project else None

    async def create_project(self, name: str) -> ProjectRecord:
        project = Project(name=name)
        self.db.add(project)
        await self.db.commit()
        await self.db.refresh(project)
        return _to_project(project)

    async def delete_project(self, project_id: ProjectId) -> int:
        result = await self.db.execute(
            delete(TeamMember).where(TeamMember.project_id == project_id),
        )
        await self.db.execute(delete(Project).where(Project.id == project_id))
        await self.db.commit()
        return result.rowcount or 0

    # ─── Members ─────────────────────────────────────────────────

    async def list_members(
        self, project_id: ProjectId | None = None,
    ) -> list[MemberRecord]:
        query = select(TeamMember).order_by(TeamMember.created_at)
        if project_id is not None:
            query = query.where(TeamMember.project_id == project_id)
        result = await self.db.execute(query)
        return [_to_member(m) for m in result.scalars().all()]

    async def get_member(self, member_id: MemberId) -> MemberRecord | None:
        member = await self.db.get(TeamMember, member_id)
        return _to_member(member) if member else None

    async def find_duplicate(
        self, project_id: ProjectId, whatsapp_number: str, name: str,
    ) -> tuple[MemberRecord | None, MemberRecord | None]:
        same_number = await self.db.execute(
            select(TeamMember).where(
                TeamMember.project_id == project_id,
                TeamMember.whatsapp_number == whatsapp_number,
            ).limit(1),
        )
        same_name = await self.db.execute(
            select(TeamMember).where(
                TeamMember.project_id == project_id,
                TeamMember.name_key == member_name_key(name),
            ).limit(1),
        )
        by_number = same_number.scalar_one_or_none()
        by_name = same_name.scalar_one_or_none()
        return (
            _to_member(by_number) if by_number else None,
            _to_member(by_name) if by_name else None,
        )

    async def add_member(self, member: NewMember) -> MemberRecord:
        row = TeamMember(
            name=member.name,
            name_key=member_name_key(member.name),
            whatsapp_number=member.whatsapp_number,
            project_id=member.project_id,
            section_number=member.section_number,
            photo_url=member.photo_url,
            device_id=member.device_id,
        )
        self.db.add(row)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(
                f"Duplicate registration rejected by store: {e.orig}",
                extra={"project_id": member.project_id},
            )
            raise ConflictError(
                "This WhatsApp number is already registered in this project",
                "whatsappNumber",
                ErrorContext(project_id=member.project_id),
            )
        await self.db.refresh(row)
        return _to_member(row)

    async def set_member_owner(
        self, member_id: MemberId, user_id: str,
    ) -> MemberRecord:
        row = await self.db.get(TeamMember, member_id)
        if row is None:
            raise NotFoundError("Member", member_id)
        row.user_id = user_id
        await self.db.commit()
        await self.db.refresh(row)
        return _to_member(row)

    async def remove_member(self, member_id: MemberId) -> None:
        await self.db.execute(
            delete(TeamMember).where(TeamMember.id == member_id),
        )
        await self.db.commit()
