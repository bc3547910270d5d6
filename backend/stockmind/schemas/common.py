"""Response envelope shared by every endpoint."""
import math
from pydantic import BaseModel, ValidationInfo
from typing import Any, Generic, List, Optional, TypeVar

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Standard response wrapper: {success, data?, error?, message?}."""
    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def ok(cls, data: Any = None, message: Optional[str] = None) -> "ApiResponse":
        return cls(success=True, data=data, message=message)

    @classmethod
    def fail(cls, error: str, message: Optional[str] = None) -> "ApiResponse":
        return cls(success=False, error=error, message=message)


class Pagination(BaseModel):
    """Pagination block of a list response."""
    total: int
    page: int
    limit: int
    pages: int

    @classmethod
    def build(cls, total: int, page: int, limit: int) -> "Pagination":
        """Compute the page count for a result set."""
        pages = math.ceil(total / limit) if limit else 0
        return cls(total=total, page=page, limit=limit, pages=pages)


class PaginatedResponse(BaseModel, Generic[T]):
    """List response with pagination metadata."""
    success: bool = True
    data: List[T]
    pagination: Pagination


def reject_null(value: Any, info: ValidationInfo) -> Any:
    """Partial updates may omit a NOT NULL column but not set it to null."""
    if value is None:
        raise ValueError(f"{info.field_name} cannot be null")
    return value
