"""Project views for API responses."""

from pydantic import BaseModel

from src.funding.models.domain import Address, MicroAlgos, Uint


class ProjectForUsers(BaseModel):
    """Outward view of a project with shareable frontend links."""

    id: str
    uuid: str | None
    name: str
    asset_price: MicroAlgos
    investors_share: Uint | None
    shares_asset_id: Uint
    central_app_id: Uint
    invest_escrow_address: Address
    staking_escrow_address: Address
    central_escrow_address: Address
    customer_escrow_address: Address
    creator: Address
    invest_link: str
    my_investment_link: str
    project_link: str
