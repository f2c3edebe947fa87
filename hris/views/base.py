"""
Shared screen machinery.

* :class:`ListView` – fetch a list, hold it, filter and paginate it locally.
* :class:`ActionGuard` – run a mutation with a per-row busy flag, then
  refetch the parent list whatever the outcome.
* :class:`Debouncer` – delay a coroutine, dropping a previous one still waiting.
"""

from __future__ import annotations

import asyncio
import logging
import math
from collections.abc import Awaitable, Callable, Sequence
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from hris.core.config import settings
from hris.core.exceptions import notify_failure, validation_message
from hris.core.notify import Notifier
from hris.schemas.common import Meta, Page

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")
F = TypeVar("F", bound=BaseModel)


def parse_form(notifier: Notifier, model: type[F], fields: dict[str, Any]) -> F | None:
    """Validate raw form *fields*; on failure toast the first problem and return None."""
    try:
        return model.model_validate(fields)
    except ValidationError as exc:
        notifier.error(validation_message(exc), title="Validation Error")
        return None


# ── List ────────────────────────────────────────────────────────────
class ListView(Generic[T]):
    """Fetch-and-render list state for one screen.

    Subclasses implement :meth:`fetch` and may declare ``search_fields``
    (attribute names matched case-insensitively against :attr:`query`) and
    override :meth:`include` for extra client-side filters.
    """

    search_fields: tuple[str, ...] = ()
    load_error = "Failed to load data"

    def __init__(self, notifier: Notifier, *, page_size: int | None = None) -> None:
        self.notifier = notifier
        self.rows: list[T] = []
        self.meta: Meta | None = None
        self.loading = False
        self.query = ""
        self.page = 1
        self.page_size = page_size or settings.DEFAULT_PAGE_SIZE

    async def fetch(self) -> Sequence[T] | Page[T]:
        raise NotImplementedError

    async def refresh(self) -> bool:
        """Run exactly one fetch; on failure keep the previous rows."""
        self.loading = True
        try:
            result = await self.fetch()
        except Exception as exc:
            notify_failure(self.notifier, exc, fallback=self.load_error)
            return False
        finally:
            self.loading = False

        if isinstance(result, Page):
            self.rows = list(result.items)
            self.meta = result.meta
        else:
            self.rows = list(result)
            self.meta = None
        return True

    # ── Filtering ───────────────────────────────────────────────────
    def set_query(self, query: str) -> None:
        self.query = query
        self.page = 1

    def include(self, row: T) -> bool:
        return True

    def matches(self, row: T) -> bool:
        needle = self.query.strip().lower()
        if not needle:
            return True
        for field in self.search_fields:
            value = getattr(row, field, None)
            if value is not None and needle in str(value).lower():
                return True
        return False

    def filtered(self) -> list[T]:
        return [row for row in self.rows if self.include(row) and self.matches(row)]

    # ── Pagination ──────────────────────────────────────────────────
    @property
    def server_paginated(self) -> bool:
        return self.meta is not None and bool(self.meta.total_pages)

    @property
    def total_pages(self) -> int:
        if self.server_paginated:
            return self.meta.total_pages  # type: ignore[union-attr]
        return max(1, math.ceil(len(self.filtered()) / self.page_size))

    def go_to(self, page: int) -> None:
        self.page = min(max(page, 1), self.total_pages)

    async def set_page(self, page: int) -> None:
        """Move to *page*; a server-paginated list fetches it."""
        self.go_to(page)
        if self.server_paginated:
            await self.refresh()

    def visible(self) -> list[T]:
        rows = self.filtered()
        if self.server_paginated:
            return rows
        start = (self.page - 1) * self.page_size
        return rows[start : start + self.page_size]


# ── Row actions ─────────────────────────────────────────────────────
class ActionGuard:
    """Per-key busy flags around mutations.

    While a key is busy every action on it is disabled; the flag is cleared
    in ``finally`` and the parent refetch runs after success and failure
    alike. Nothing is changed locally before the server answers.
    """

    def __init__(
        self,
        notifier: Notifier,
        refetch: Callable[[], Awaitable[Any]] | None = None,
    ) -> None:
        self.notifier = notifier
        self.busy: set[str] = set()
        self._refetch = refetch

    def is_busy(self, key: str) -> bool:
        return key in self.busy

    def disabled(self, key: str) -> bool:
        return self.is_busy(key)

    async def run(
        self,
        key: str,
        action: Callable[[], Awaitable[R]],
        *,
        success: str | None = None,
        failure: str = "Action failed",
        title: str = "Error",
    ) -> R | None:
        if key in self.busy:
            logger.debug("Ignoring action on busy key %s", key)
            return None

        self.busy.add(key)
        try:
            result = await action()
            if success:
                self.notifier.success(success)
            return result
        except Exception as exc:
            notify_failure(self.notifier, exc, title=title, fallback=failure)
            return None
        finally:
            self.busy.discard(key)
            if self._refetch is not None:
                await self._refetch()


# ── Debounce ────────────────────────────────────────────────────────
class Debouncer:
    """Delay a coroutine; a newer call replaces one still waiting.

    Only the delay is cancellable. Once it has elapsed the call runs to
    completion, even if another call is scheduled meanwhile.
    """

    def __init__(self, delay_ms: int | None = None) -> None:
        delay_ms = settings.SEARCH_DEBOUNCE_MS if delay_ms is None else delay_ms
        self.delay = delay_ms / 1000
        self._timer: asyncio.Task[None] | None = None
        self._running: set[asyncio.Future[Any]] = set()

    @property
    def pending(self) -> bool:
        return self._timer is not None and not self._timer.done()

    def call(self, func: Callable[[], Awaitable[Any]]) -> asyncio.Task[None]:
        """Schedule *func* after the delay, replacing any call still waiting."""
        self.cancel()
        self._timer = asyncio.create_task(self._start_after_delay(func))
        return self._timer

    async def _start_after_delay(self, func: Callable[[], Awaitable[Any]]) -> None:
        await asyncio.sleep(self.delay)
        running = asyncio.ensure_future(func())
        self._running.add(running)
        running.add_done_callback(self._running.discard)

    def cancel(self) -> None:
        if self.pending:
            self._timer.cancel()  # type: ignore[union-attr]

    async def wait(self) -> None:
        """Await the waiting call, if any, and every call already started."""
        if self._timer is not None:
            try:
                await self._timer
            except asyncio.CancelledError:
                pass
        if self._running:
            await asyncio.gather(*self._running)
