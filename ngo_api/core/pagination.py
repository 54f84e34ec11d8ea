"""Page/limit pagination for list endpoints."""

import math
from dataclasses import dataclass
from typing import Any

from fastapi import Query
from pydantic import BaseModel
from sqlalchemy.orm import Query as SQLAlchemyQuery

DEFAULT_PAGE_LIMIT = 20
MAX_PAGE_LIMIT = 100


@dataclass
class PaginationParams:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class Pagination(BaseModel):
    """Pagination block of list responses."""

    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


def get_pagination(
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    limit: int = Query(
        DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT, description=f"Items per page (max {MAX_PAGE_LIMIT})"
    ),
) -> PaginationParams:
    """
    Pagination dependency.

    Usage:
        @router.get("/communities")
        def list_communities(pagination: PaginationParams = Depends(get_pagination)):
            ...
    """
    return PaginationParams(page=page, limit=limit)


def pagination_meta(pagination: PaginationParams, total: int) -> dict[str, Any]:
    total_pages = math.ceil(total / pagination.limit) if total else 0
    return {
        "page": pagination.page,
        "limit": pagination.limit,
        "total": total,
        "total_pages": total_pages,
        "has_next": pagination.page < total_pages,
        "has_prev": pagination.page > 1,
    }


def paginate_query(query: SQLAlchemyQuery, pagination: PaginationParams) -> tuple[list, int]:
    """Return (rows of the requested page, total row count)."""
    total = query.order_by(None).count()
    rows = query.offset(pagination.offset).limit(pagination.limit).all()
    return rows, total
