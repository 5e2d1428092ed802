import math
from app.schemas.common.base import CamelModel

class PaginationMeta(CamelModel):
    current_page: int
    total_pages: int
    total_count: int
    limit: int
    has_next_page: bool
    has_prev_page: bool

    @classmethod
    def build(cls, page: int, limit: int, total_count: int) -> "PaginationMeta":
        total_pages = math.ceil(total_count / limit) if limit else 0
        return cls(
            current_page=page,
            total_pages=total_pages,
            total_count=total_count,
            limit=limit,
            has_next_page=page < total_pages,
            has_prev_page=page > 1,
        )
