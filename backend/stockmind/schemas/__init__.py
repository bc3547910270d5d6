"""Pydantic schemas for request/response validation."""
from stockmind.schemas.analysis import ScriptAnalysis
from stockmind.schemas.common import ApiResponse, PaginatedResponse, Pagination

__all__ = ["ScriptAnalysis", "ApiResponse", "PaginatedResponse", "Pagination"]
