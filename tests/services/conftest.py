"""Service test fixtures - in-memory MembershipStore for workflow tests.

Invariants:
    - InMemoryMembershipStore honours the MembershipStore protocol, including
      store-assigned ids and the (project, number) uniqueness constraint
    - `writes` records every mutating call so tests can assert "no mutation"
"""

import uuid
from dataclasses import replace

import pytest

from teamsignup.core.domain_types import (
    MemberId, MemberRecord, NewMember, ProjectId, ProjectRecord,
    member_name_key,
)
from teamsignup.core.errors import ConflictError, NotFoundError


class InMemoryMembershipStore:
    def __init__(self):
        self.projects: dict[str, ProjectRecord] = {}
        self.members: dict[str, MemberRecord] = {}
        self.writes: list[tuple[str, str]] = []

    async def list_projects(self) -> list[ProjectRecord]:
        return list(self.projects.values())

    async def get_project(self, project_id):
        return self.projects.get(project_id)

    async def create_project(self, name: str) -> ProjectRecord:
        project = ProjectRecord(id=ProjectId(str(uuid.uuid4())), name=name)
        self.projects[project.id] = project
        self.writes.append(("create_project", project.id))
        return project

    async def delete_project(self, project_id) -> int:
        doomed = [m.id for m in self.members.values() if m.project_id == project_id]
        for member_id in doomed:
            del self.members[member_id]
        self.projects.pop(project_id, None)
        self.writes.append(("delete_project", project_id))
        return len(doomed)

    async def list_members(self, project_id=None) -> list[MemberRecord]:
        return [
            m for m in self.members.values()
            if project_id is None or m.project_id == project_id
        ]

    async def get_member(self, member_id):
        return self.members.get(member_id)

    async def find_duplicate(self, project_id, whatsapp_number, name):
        in_project = [m for m in self.members.values() if m.project_id == project_id]
        by_number = next(
            (m for m in in_project if m.whatsapp_number == whatsapp_number), None,
        )
        by_name = next(
            (m for m in in_project
             if member_name_key(m.name) == member_name_key(name)), None,
        )
        return by_number, by_name

    async def add_member(self, member: NewMember) -> MemberRecord:
        for existing in self.members.values():
            if (existing.project_id == member.project_id
                    and existing.whatsapp_number == member.whatsapp_number):
                raise ConflictError("duplicate number", "whatsappNumber")
        record = MemberRecord(
            id=MemberId(str(uuid.uuid4())),
            name=member.name,
            whatsapp_number=member.whatsapp_number,
            project_id=member.project_id,
            section_number=member.section_number,
            photo_url=member.photo_url,
            device_id=member.device_id,
        )
        self.members[record.id] = record
        self.writes.append(("add_member", record.id))
        return record

    async def set_member_owner(self, member_id, user_id) -> MemberRecord:
        if member_id not in self.members:
            raise NotFoundError("Member", member_id)
        updated = replace(self.members[member_id], user_id=user_id)
        self.members[member_id] = updated
        self.writes.append(("set_member_owner", member_id))
        return updated

    async def remove_member(self, member_id) -> None:
        self.members.pop(member_id, None)
        self.writes.append(("remove_member", member_id))


@pytest.fixture
def store():
    return InMemoryMembershipStore()


@pytest.fixture
async def project(store):
    return await store.create_project("Web Dev")
