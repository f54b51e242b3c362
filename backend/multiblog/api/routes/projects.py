"""Project Routes — owner-only CRUD over the caller's projects.

Invariants:
    - Every route requires a bearer token
    - Another user's project answers 404, exactly like a missing one
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from multiblog.api.dependencies import get_current_user, get_project_lifecycle
from multiblog.models.user import User
from multiblog.schemas.project import (
    ProjectCreate, ProjectRemoved, ProjectResponse, ProjectUpdate,
)
from multiblog.services.project_lifecycle import ProjectLifecycle

router = APIRouter(prefix="/api/v1/projects", tags=["projects"])


@router.post(
    "", response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_project(
    body: ProjectCreate,
    user: User = Depends(get_current_user),
    projects: ProjectLifecycle = Depends(get_project_lifecycle),
):
    project = await projects.create(user.id, body)
    return ProjectResponse.model_validate(project)


@router.get("", response_model=list[ProjectResponse])
async def list_projects(
    user: User = Depends(get_current_user),
    projects: ProjectLifecycle = Depends(get_project_lifecycle),
):
    """Caller's projects, newest first, each with its post count."""
    owned = await projects.list_by_owner(user.id)
    return [
        ProjectResponse.model_validate(project).model_copy(
            update={"post_count": count},
        )
        for project, count in owned
    ]


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: UUID,
    user: User = Depends(get_current_user),
    projects: ProjectLifecycle = Depends(get_project_lifecycle),
):
    project = await projects.find_one(project_id, user.id)
    return ProjectResponse.model_validate(project)


@router.patch("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: UUID,
    body: ProjectUpdate,
    user: User = Depends(get_current_user),
    projects: ProjectLifecycle = Depends(get_project_lifecycle),
):
    project = await projects.update(project_id, user.id, body)
    return ProjectResponse.model_validate(project)


@router.delete("/{project_id}", response_model=ProjectRemoved)
async def delete_project(
    project_id: UUID,
    user: User = Depends(get_current_user),
    projects: ProjectLifecycle = Depends(get_project_lifecycle),
):
    """Delete a project; its posts go with it (storage cascade)."""
    removed_id = await projects.remove(project_id, user.id)
    return ProjectRemoved(
        message=f"Project {removed_id} successfully removed",
        removed_id=removed_id,
    )
