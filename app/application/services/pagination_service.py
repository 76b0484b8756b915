from math import ceil
from typing import Any

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from app.interfaces.api.v1.schemas.pagination import PaginationMeta


def apply_search_filter(query: Select, search: str | None, search_columns: list[Any]) -> Select:
    if search is None or not search_columns:
        return query
    escaped = search.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    pattern = f"%{escaped}%"
    conditions = [column.ilike(pattern, escape="\\") for column in search_columns]
    return query.where(or_(*conditions))


def paginate_scalars(
    db: Session,
    base_query: Select,
    *,
    page: int,
    limit: int,
    search: str | None,
    search_columns: list[Any],
) -> tuple[list[Any], PaginationMeta]:
    filtered_query = apply_search_filter(base_query, search, search_columns)

    total = db.execute(select(func.count()).select_from(base_query.order_by(None).subquery())).scalar_one()
    filtered_total = db.execute(select(func.count()).select_from(filtered_query.order_by(None).subquery())).scalar_one()

    offset = (page - 1) * limit
    paged_query = filtered_query.offset(offset).limit(limit)
    items = list(db.execute(paged_query).scalars().all())

    total_pages = ceil(filtered_total / limit) if filtered_total > 0 else 0

    meta = PaginationMeta(
        page=page,
        limit=limit,
        total=total,
        filtered_total=filtered_total,
        total_pages=total_pages,
        has_next=(offset + limit) < filtered_total,
        has_prev=page > 1,
    )
    return items, meta
