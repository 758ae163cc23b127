from fastapi import APIRouter

from src.funding.api.v1 import projects, withdrawals

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(projects.router)
api_router.include_router(withdrawals.router)
