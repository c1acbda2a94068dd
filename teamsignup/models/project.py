"""Project ORM - an admin-created team that visitors sign up for.

Invariants:
    - id is an opaque UUID4 string assigned on insert
    - name is non-nullable text
    - Never updated; deleting it deletes its members (ORM and FK cascade)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from teamsignup.db.base import Base


class Project(Base):
    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4()),
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    members: Mapped[list["TeamMember"]] = relationship(
        "TeamMember", back_populates="project",
        cascade="all, delete-orphan", passive_deletes=True,
    )
