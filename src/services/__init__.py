from src.services import (
    catalog_service,
    recommendation_service,
    search_service,
)


__all__ = [
    "catalog_service",
    "recommendation_service",
    "search_service",
]
