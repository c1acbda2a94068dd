"""Member Schemas - signup payload and public member view.

Invariants:
    - MemberCreate.name: 1-100 chars after stripping whitespace
    - MemberCreate.whatsapp_number is normalized to +20XXXXXXXXXX
    - MemberCreate.section_number, when present, is within 1-4
    - MemberCreate.device_id is optional here; the registration workflow
      rejects its absence only after the duplicate checks
    - MemberResponse never exposes device_id

Design Decisions:
    - field_validator for side-effect-free transforms (strip, normalize)
"""

from datetime import datetime

from pydantic import Field, field_validator

from teamsignup.core.contact_number import normalize_whatsapp_number
from teamsignup.core.domain_types import NewMember, ProjectId
from teamsignup.schemas.base import CamelModel

MIN_SECTION = 1
MAX_SECTION = 4


class MemberCreate(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    whatsapp_number: str = Field(min_length=1, max_length=32)
    project_id: str = Field(min_length=1, max_length=36)
    section_number: int | None = Field(None, ge=MIN_SECTION, le=MAX_SECTION)
    photo_url: str | None = Field(None, max_length=2048)
    device_id: str | None = Field(None, max_length=100)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v

    @field_validator("whatsapp_number")
    @classmethod
    def normalize_number(cls, v: str) -> str:
        return normalize_whatsapp_number(v)

    @field_validator("device_id")
    @classmethod
    def blank_device_is_missing(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None

    def to_new_member(self) -> NewMember:
        return NewMember(
            name=self.name,
            whatsapp_number=self.whatsapp_number,
            project_id=ProjectId(self.project_id),
            section_number=self.section_number,
            photo_url=self.photo_url,
            device_id=self.device_id,
        )


class MemberResponse(CamelModel):
    id: str
    name: str
    whatsapp_number: str
    project_id: str
    section_number: int | None = None
    photo_url: str | None = None
    user_id: str | None = None
    created_at: datetime | None = None
