"""ORM Models - SQLAlchemy declarative models for all persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Project is the aggregate root for TeamMember

Design Decisions:
    - One file per entity for locality
    - All models imported here so string-based relationship() references
      resolve before any query runs
"""

from teamsignup.models.project import Project  # noqa: F401
from teamsignup.models.team_member import TeamMember  # noqa: F401
from teamsignup.models.web_session import WebSession  # noqa: F401
