"""Project Schemas - admin project creation and public project views.

Invariants:
    - ProjectCreate.name: 1-100 chars after stripping whitespace
"""

from pydantic import Field, field_validator

from teamsignup.schemas.base import CamelModel


class ProjectCreate(CamelModel):
    name: str = Field(min_length=1, max_length=100)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class ProjectResponse(CamelModel):
    id: str
    name: str
