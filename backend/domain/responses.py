"""
Standard API response models and helpers for consistent response formatting.

- Page of results: { "content": [...], "totalElements", "totalPages", "number",
  "size", "numberOfElements", "first", "last", "empty" }
- Error: { "success": false, "error": { "code": "...", "message": "...", "details": {...} } }
"""
import math
from typing import Any, Generic, TypeVar
from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class ErrorDetail(BaseModel):
    """Standard error detail structure."""
    code: str = Field(..., description="Error code (e.g., 'notfound', 'validation')")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] | None = Field(default=None, description="Additional error context")


class StandardErrorResponse(BaseModel):
    """Standard error response envelope."""
    success: bool = Field(False, description="Always false for errors")
    error: ErrorDetail = Field(..., description="Error details")


class Page(BaseModel, Generic[T]):
    """One page of a stable, id-ordered result set."""
    model_config = ConfigDict(populate_by_name=True)

    content: list[T] = Field(..., description="Items on this page")
    total_elements: int = Field(..., alias="totalElements")
    total_pages: int = Field(..., alias="totalPages")
    number: int = Field(..., description="Zero-based page index")
    size: int = Field(..., description="Requested page size")
    number_of_elements: int = Field(..., alias="numberOfElements")
    first: bool
    last: bool
    empty: bool


def error_body(code: str, message: str, details: dict[str, Any] | None = None) -> dict[str, Any]:
    """Build the JSON body of an error response."""
    return {
        "success": False,
        "error": {
            "code": code,
            "message": message,
            "details": details,
        },
    }


def page_of(items: list[Any], *, page: int, size: int, total: int) -> dict[str, Any]:
    """
    Build a page payload.

    Args:
        items: Items for this page (already sliced)
        page: Zero-based page index
        size: Requested page size
        total: Total number of matching items

    Returns:
        dict matching the Page model (aliased keys)
    """
    total_pages = math.ceil(total / size) if size else 0
    return {
        "content": items,
        "totalElements": total,
        "totalPages": total_pages,
        "number": page,
        "size": size,
        "numberOfElements": len(items),
        "first": page == 0,
        "last": page >= total_pages - 1,
        "empty": len(items) == 0,
    }
