from fastapi import Query

from app.config import settings
from app.interfaces.api.v1.schemas.pagination import PaginationParams


def get_pagination_params(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=settings.default_page_size, ge=1, le=settings.max_page_size),
    search: str | None = Query(default=None),
) -> PaginationParams:
    normalized_search = search.strip() if search is not None else None
    if normalized_search == "":
        normalized_search = None
    return PaginationParams(page=page, limit=limit, search=normalized_search)
