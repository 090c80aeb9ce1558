from .cd_repository import CDRepository
from .query_builder import CDQueryBuilder

__all__ = ["CDQueryBuilder", "CDRepository"]
