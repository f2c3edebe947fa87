"""Response envelope shared by every endpoint."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ErrorDetail(BaseModel):
    code: str = "UNKNOWN_ERROR"
    message: str = "An unknown error occurred"
    details: dict[str, str] | None = None


class Meta(BaseModel):
    page: int | None = None
    limit: int | None = None
    total_items: int | None = None
    total_pages: int | None = None


class ApiResponse(BaseModel):
    success: bool
    message: str | None = None
    data: Any = None
    error: ErrorDetail | None = None
    meta: Meta | None = None


class Page(BaseModel, Generic[T]):
    """One page of a server-paginated listing."""

    items: list[T] = Field(default_factory=list)
    meta: Meta = Field(default_factory=Meta)
    # Other keys of a keyed listing, e.g. ``unread_count``
    extra: dict[str, Any] = Field(default_factory=dict)

    @property
    def total_pages(self) -> int:
        return self.meta.total_pages or 1

    @property
    def total_items(self) -> int:
        return self.meta.total_items if self.meta.total_items is not None else len(self.items)


class MessageResponse(BaseModel):
    message: str = ""
