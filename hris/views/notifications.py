"""Notification inbox: paginated list, unread filter, bulk read and delete."""

from __future__ import annotations

from hris.api.v1.api import HrisApi
from hris.core.exceptions import notify_failure
from hris.core.notify import Notifier
from hris.schemas.common import Page
from hris.schemas.dashboard import Notification
from hris.views.base import ListView

PAGE_SIZE = 20


class NotificationsView(ListView[Notification]):
    search_fields = ("title", "message")
    load_error = "Failed to load notifications"

    def __init__(self, api: HrisApi, notifier: Notifier, *, page_size: int = PAGE_SIZE) -> None:
        super().__init__(notifier, page_size=page_size)
        self.api = api
        self.unread_only = False
        self.unread_count = 0
        self.selected: set[str] = set()

    async def fetch(self) -> Page[Notification]:
        page = await self.api.notifications.list(self.page, self.page_size, self.unread_only)
        self.unread_count = int(page.extra.get("unread_count", 0))
        self.selected.clear()
        return page

    async def set_unread_only(self, unread_only: bool) -> None:
        self.unread_only = unread_only
        self.page = 1
        await self.refresh()

    # ── Selection ───────────────────────────────────────────────────
    def select(self, notification_id: str, checked: bool = True) -> None:
        if checked:
            self.selected.add(notification_id)
        else:
            self.selected.discard(notification_id)

    def select_all(self, checked: bool = True) -> None:
        self.selected = {n.id for n in self.rows} if checked else set()

    # ── Mutations ───────────────────────────────────────────────────
    async def mark_selected_as_read(self) -> bool:
        ids = sorted(self.selected)
        if not ids:
            return False
        try:
            await self.api.notifications.mark_as_read(ids)
        except Exception as exc:
            notify_failure(self.notifier, exc, fallback="Failed to mark notifications as read")
            return False
        self.notifier.success(f"{len(ids)} notification(s) marked as read")
        await self.refresh()
        return True

    async def mark_all_as_read(self) -> bool:
        try:
            await self.api.notifications.mark_all_as_read()
        except Exception as exc:
            notify_failure(self.notifier, exc, fallback="Failed to mark all as read")
            return False
        self.notifier.success("All notifications marked as read")
        await self.refresh()
        return True

    async def delete(self, notification_id: str) -> bool:
        try:
            await self.api.notifications.delete(notification_id)
        except Exception as exc:
            notify_failure(self.notifier, exc, fallback="Failed to delete notification")
            return False
        self.notifier.success("Notification deleted")
        await self.refresh()
        return True
