from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, Literal

Dir = Literal["asc", "desc"]

class QueryOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    search_field: str = "nama"
    default_sort_by: str = "id"
    default_sort_order: Dir = "asc"
    default_limit: int = Field(1000, ge=1)
    default_page: int = Field(1, ge=1)
    max_limit: int = Field(10000, ge=1)

class Pagination(BaseModel):
    model_config = ConfigDict(frozen=True)

    page: int = Field(1, ge=1)
    limit: int = Field(1000, ge=1)
    skip: int = Field(0, ge=0)

class SortSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    sort_by: str = "id"
    sort_order: Dir = "asc"

class ParsedQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    pagination: Pagination = Pagination()
    sort: SortSpec = SortSpec()
    filter: Dict[str, Any] = {}

class PageMeta(BaseModel):
    page: int
    limit: int
    skip: int
    total: int
    totalPages: int
    hasNext: bool
    hasPrev: bool
