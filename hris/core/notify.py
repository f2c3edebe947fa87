"""
Toast notifications for screen controllers.

Every screen reports its outcome through a :class:`Notifier` instead of
printing. Toasts are kept in ``history`` so callers (and tests) can render
or inspect them, and each one is mirrored to the log.
"""

from __future__ import annotations

import logging
from typing import Literal

from pydantic import BaseModel

logger = logging.getLogger(__name__)

ToastVariant = Literal["default", "destructive"]


class Toast(BaseModel):
    title: str
    description: str = ""
    variant: ToastVariant = "default"


class Notifier:
    """Collects toasts emitted by screens."""

    def __init__(self) -> None:
        self.history: list[Toast] = []

    def toast(
        self,
        title: str,
        description: str = "",
        variant: ToastVariant = "default",
    ) -> Toast:
        item = Toast(title=title, description=description, variant=variant)
        self.history.append(item)
        level = logging.WARNING if variant == "destructive" else logging.INFO
        logger.log(level, "%s: %s", title, description)
        return item

    def success(self, description: str, title: str = "Success") -> Toast:
        return self.toast(title, description)

    def error(self, description: str, title: str = "Error") -> Toast:
        return self.toast(title, description, variant="destructive")

    @property
    def last(self) -> Toast | None:
        return self.history[-1] if self.history else None

    def clear(self) -> None:
        self.history.clear()
