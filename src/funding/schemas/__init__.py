from src.funding.schemas.project import ProjectForUsers

__all__ = ["ProjectForUsers"]
