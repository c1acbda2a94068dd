"""Boundary Protocols - contracts between core/services and the shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by the shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, so tests pass plain fakes
    - Async in MembershipStore: implementations do IO; workflows await them
"""

from typing import Protocol

from teamsignup.core.domain_types import (
    MemberId, MemberRecord, NewMember, ProjectId, ProjectRecord,
)


class MembershipStore(Protocol):
    """Contract for project and member persistence."""

    async def list_projects(self) -> list[ProjectRecord]: ...
    async def get_project(self, project_id: ProjectId) -> ProjectRecord | None: ...
    async def create_project(self, name: str) -> ProjectRecord: ...
    async def delete_project(self, project_id: ProjectId) -> int:
        """Delete the project and its members. Returns members removed."""
        ...

    async def list_members(
        self, project_id: ProjectId | None = None,
    ) -> list[MemberRecord]: ...
    async def get_member(self, member_id: MemberId) -> MemberRecord | None: ...
    async def find_duplicate(
        self, project_id: ProjectId, whatsapp_number: str, name: str,
    ) -> tuple[MemberRecord | None, MemberRecord | None]:
        """Return (same-number member, same-name member) within the project.

        Number matches exactly; name matches case-insensitively.
        """
        ...
    async def add_member(self, member: NewMember) -> MemberRecord: ...
    async def set_member_owner(
        self, member_id: MemberId, user_id: str,
    ) -> MemberRecord: ...
    async def remove_member(self, member_id: MemberId) -> None: ...


class DeviceIdStorage(Protocol):
    """Durable client-side key/value storage. Raises OSError when unavailable."""

    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...
