from pydantic import BaseModel


class PaginationParams(BaseModel):
    page: int = 1
    limit: int = 10
    search: str | None = None

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class PaginationMeta(BaseModel):
    page: int
    limit: int
    total: int
    filtered_total: int
    total_pages: int
    has_next: bool
    has_prev: bool
