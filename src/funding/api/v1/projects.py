"""Project endpoints.

Store failures propagate to the exception handlers in core.exceptions,
which map them to status codes.
"""

from fastapi import APIRouter, status

from src.funding.api.dependencies import ProjectSvc
from src.funding.models.domain import Project
from src.funding.schemas.project import ProjectForUsers

router = APIRouter(prefix="/projects", tags=["projects"])


@router.post(
    "",
    response_model=ProjectForUsers,
    status_code=status.HTTP_201_CREATED,
    summary="Save project",
    responses={
        201: {"description": "Project saved"},
        409: {"description": "A project with this uuid already exists"},
        422: {"description": "Project shape not storable by this schema layout"},
    },
)
async def save_project(project: Project, service: ProjectSvc) -> ProjectForUsers:
    """Save a project and return its view with shareable links."""
    return await service.save_project(project)


@router.get(
    "/uuid/{project_uuid}",
    response_model=Project,
    summary="Get project by uuid",
    responses={404: {"description": "Project not found"}},
)
async def get_project_with_uuid(project_uuid: str, service: ProjectSvc) -> Project:
    return await service.load_project_with_uuid(project_uuid)


@router.get(
    "/uuid/{project_uuid}/view",
    response_model=ProjectForUsers,
    summary="Get project view by uuid",
    responses={404: {"description": "Project not found"}},
)
async def get_project_for_users_with_uuid(
    project_uuid: str, service: ProjectSvc
) -> ProjectForUsers:
    return await service.load_project_for_users_with_uuid(project_uuid)


@router.get(
    "/{project_id}",
    response_model=Project,
    summary="Get project",
    responses={404: {"description": "Project not found"}},
)
async def get_project(project_id: str, service: ProjectSvc) -> Project:
    return await service.load_project(project_id)


@router.get(
    "/{project_id}/view",
    response_model=ProjectForUsers,
    summary="Get project view",
    description="Project fields needed by the invest page, plus shareable links.",
    responses={404: {"description": "Project not found"}},
)
async def get_project_for_users(project_id: str, service: ProjectSvc) -> ProjectForUsers:
    return await service.load_project_for_users(project_id)
