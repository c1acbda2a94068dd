"""Projects - public listing plus admin-only create and cascade delete.

Invariants:
    - Reads are public; create/delete go through the admin guard
    - GET /{id} with a malformed or unknown id is 404
    - GET /{id}/members returns [] for unknown projects
"""

from fastapi import APIRouter, Depends, status

from teamsignup.api.dependencies import get_caller, get_store
from teamsignup.core.domain_types import (
    CallerContext, ProjectId, is_well_formed_id,
)
from teamsignup.core.errors import NotFoundError
from teamsignup.schemas.member import MemberResponse
from teamsignup.schemas.project import ProjectCreate, ProjectResponse
from teamsignup.services.membership_store import SqlMembershipStore
from teamsignup.services.project_admin import create_project, delete_project

router = APIRouter(prefix="/api/projects", tags=["projects"])


@router.get("", response_model=list[ProjectResponse])
async def list_projects(store: SqlMembershipStore = Depends(get_store)):
    projects = await store.list_projects()
    return [ProjectResponse.model_validate(p) for p in projects]


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: str, store: SqlMembershipStore = Depends(get_store),
):
    project = (
        await store.get_project(ProjectId(project_id))
        if is_well_formed_id(project_id) else None
    )
    if project is None:
        raise NotFoundError("Project", project_id)
    return ProjectResponse.model_validate(project)


@router.get("/{project_id}/members", response_model=list[MemberResponse])
async def list_project_members(
    project_id: str, store: SqlMembershipStore = Depends(get_store),
):
    if not is_well_formed_id(project_id):
        return []
    members = await store.list_members(ProjectId(project_id))
    return [MemberResponse.model_validate(m) for m in members]


@router.post("", response_model=ProjectResponse)
async def create_project_route(
    body: ProjectCreate,
    caller: CallerContext = Depends(get_caller),
    store: SqlMembershipStore = Depends(get_store),
):
    project = await create_project(store, caller, body.name)
    return ProjectResponse.model_validate(project)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project_route(
    project_id: str,
    caller: CallerContext = Depends(get_caller),
    store: SqlMembershipStore = Depends(get_store),
):
    await delete_project(store, caller, project_id)
