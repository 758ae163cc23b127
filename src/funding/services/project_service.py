"""Project views - composes repository results with frontend links."""

from uuid import UUID

from src.funding.core.exceptions import ValidationError
from src.funding.models.domain import Project
from src.funding.repositories import ProjectRepository
from src.funding.repositories.base import parse_id
from src.funding.schemas.project import ProjectForUsers


def parse_uuid(value: str) -> UUID:
    try:
        return UUID(value)
    except (ValueError, AttributeError, TypeError) as e:
        raise ValidationError(f"Invalid project uuid: {value!r}") from e


class ProjectService:
    """Project operations exposed to the web layer. No persistence logic."""

    def __init__(self, project_repo: ProjectRepository, frontend_host: str):
        self.project_repo = project_repo
        self.frontend_host = frontend_host.rstrip("/")

    async def save_project(self, project: Project) -> ProjectForUsers:
        project_id = await self.project_repo.save(project)
        return self.to_project_for_users(project_id, project)

    async def load_project_for_users(self, project_id: str) -> ProjectForUsers:
        project = await self.project_repo.load(parse_id(project_id, "project id"))
        return self.to_project_for_users(project_id, project)

    async def load_project_for_users_with_uuid(self, project_uuid: str) -> ProjectForUsers:
        """View of a project looked up by uuid.

        The uuid doubles as the view id and the link key, so no surrogate id
        leaks into outward references.
        """
        uuid = parse_uuid(project_uuid)
        project = await self.project_repo.load_by_external_id(uuid)
        return self.to_project_for_users(str(uuid), project)

    async def load_project(self, project_id: str) -> Project:
        return await self.project_repo.load(parse_id(project_id, "project id"))

    async def load_project_with_uuid(self, project_uuid: str) -> Project:
        return await self.project_repo.load_by_external_id(parse_uuid(project_uuid))

    def to_project_for_users(self, project_id: str, project: Project) -> ProjectForUsers:
        return ProjectForUsers(
            id=project_id,
            uuid=str(project.uuid) if project.uuid is not None else None,
            name=project.specs.name,
            asset_price=project.specs.asset_price,
            investors_share=project.specs.investors_share,
            shares_asset_id=project.shares_asset_id,
            central_app_id=project.central_app_id,
            invest_escrow_address=project.invest_escrow.address,
            staking_escrow_address=project.staking_escrow.address,
            central_escrow_address=project.central_escrow.address,
            customer_escrow_address=project.customer_escrow.address,
            creator=project.creator,
            invest_link=f"{self.frontend_host}/invest/{project_id}",
            my_investment_link=f"{self.frontend_host}/investment/{project_id}",
            project_link=f"{self.frontend_host}/project/{project_id}",
        )
