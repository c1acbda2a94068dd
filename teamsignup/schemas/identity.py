"""Identity Schemas - admin login and session identity views."""

from pydantic import Field

from teamsignup.schemas.base import CamelModel


class AdminLogin(CamelModel):
    password: str = Field(min_length=1, max_length=256)


class SuccessResponse(CamelModel):
    success: bool = True


class AdminStatusResponse(CamelModel):
    is_admin: bool


class MeResponse(CamelModel):
    user_id: str | None = None
