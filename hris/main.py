"""
HRIS client entry point.

This is the only module that assembles the client: logging, the session,
the HTTP transport and the endpoint aggregator. Screens receive the
resulting :class:`HrisApi` and a :class:`Notifier`.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx

from hris.api.v1.api import HrisApi
from hris.api.v1.client import ApiClient
from hris.core.config import settings
from hris.core.session import Session

logger = logging.getLogger(__name__)


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )


# ── Client factory ──────────────────────────────────────────────────
def create_api(
    session: Session | None = None,
    *,
    base_url: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> HrisApi:
    """Build an :class:`HrisApi`; the session defaults to the persisted one."""
    session = session or Session.from_settings()
    client = ApiClient(session, base_url=base_url, transport=transport)
    logger.info("%s v%s -> %s", settings.PROJECT_NAME, settings.VERSION, client.base_url)
    return HrisApi(client)


@asynccontextmanager
async def open_api(
    session: Session | None = None,
    *,
    base_url: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AsyncIterator[HrisApi]:
    api = create_api(session, base_url=base_url, transport=transport)
    try:
        yield api
    finally:
        await api.aclose()
        logger.debug("Client closed")
