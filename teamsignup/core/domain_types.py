"""Domain Types - records and identity types shared by core, services and api.

Invariants:
    - ProjectId and MemberId wrap opaque store-assigned strings (UUID4 text)
    - Records are frozen: workflows never mutate what the store returned
    - Member names compare by member_name_key, never by raw text
    - CallerContext is the only view of the HTTP session that workflows see
    - SessionMutation describes session changes; the api layer applies them

Design Decisions:
    - NewType over wrappers: zero runtime cost, full type-checker support
    - Frozen dataclasses over ORM objects: workflows stay testable with an
      in-memory store
"""

from dataclasses import dataclass
from datetime import datetime
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

ProjectId = NewType("ProjectId", str)
MemberId = NewType("MemberId", str)


def is_well_formed_id(value: str) -> bool:
    """True if value parses as a store-assigned identifier."""
    try:
        UUID(value)
    except (ValueError, TypeError, AttributeError):
        return False
    return True


def member_name_key(name: str) -> str:
    """Comparison key for case-insensitive name uniqueness (full Unicode folding)."""
    return name.casefold()


# ─── Records ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class ProjectRecord:
    id: ProjectId
    name: str


@dataclass(frozen=True)
class MemberRecord:
    id: MemberId
    name: str
    whatsapp_number: str
    project_id: ProjectId
    section_number: int | None = None
    photo_url: str | None = None
    user_id: str | None = None
    device_id: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class NewMember:
    """Member fields before the store assigns an identifier."""
    name: str
    whatsapp_number: str
    project_id: ProjectId
    section_number: int | None = None
    photo_url: str | None = None
    device_id: str | None = None


# ─── Caller & Session ────────────────────────────────────────────

@dataclass(frozen=True)
class CallerContext:
    """Who is calling: session identity, admin flag, claimed device."""
    user_id: str | None = None
    is_admin: bool = False
    device_id: str | None = None


@dataclass(frozen=True)
class SessionMutation:
    """Session changes a workflow asks the caller's session to apply.

    set_user_id binds a member identity; clear_user_id drops it without
    touching the rest of the session; set_admin toggles the admin flag
    when not None.
    """
    set_user_id: str | None = None
    clear_user_id: bool = False
    set_admin: bool | None = None

    @property
    def is_empty(self) -> bool:
        return (
            self.set_user_id is None
            and not self.clear_user_id
            and self.set_admin is None
        )


NO_SESSION_CHANGE = SessionMutation()
