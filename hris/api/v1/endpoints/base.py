"""Shared parsing for endpoint groups."""

from __future__ import annotations

import math
from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter

from hris.api.v1.client import ApiClient
from hris.schemas.common import ApiResponse, Meta, Page

M = TypeVar("M", bound=BaseModel)


class EndpointGroup:
    """Base for one family of endpoints sharing a client."""

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    @staticmethod
    def _one(model: type[M], envelope: ApiResponse) -> M:
        return model.model_validate(envelope.data)

    @staticmethod
    def _many(model: type[M], envelope: ApiResponse) -> list[M]:
        return TypeAdapter(list[model]).validate_python(envelope.data or [])  # type: ignore[valid-type]

    @staticmethod
    def _page(model: type[M], envelope: ApiResponse, key: str | None = None) -> Page[M]:
        """Build a page from either a bare list + ``meta`` or a keyed object.

        Some listings answer ``{"<key>": [...], "total_count", "total_pages"}``
        instead of putting the counts in the envelope ``meta``.
        """
        meta = envelope.meta or Meta()
        data: Any = envelope.data
        extra: dict[str, Any] = {}
        if isinstance(data, dict):
            data = dict(data)
            items = data.pop(key or "items", None) or []
            total = data.pop("total_count", data.pop("total_items", data.pop("total", None)))
            meta = Meta(
                page=data.pop("page", meta.page),
                limit=data.pop("limit", meta.limit),
                total_items=meta.total_items if total is None else total,
                total_pages=data.pop("total_pages", meta.total_pages),
            )
            if not meta.total_pages and meta.total_items is not None and meta.limit:
                meta.total_pages = max(1, math.ceil(meta.total_items / meta.limit))
            extra = data
        else:
            items = data or []
        parsed = TypeAdapter(list[model]).validate_python(items)  # type: ignore[valid-type]
        return Page[model](items=parsed, meta=meta, extra=extra)  # type: ignore[valid-type]
