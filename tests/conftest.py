"""
Shared test fixtures for the HRIS client test suite.

Every test talks to a fresh :class:`FakeBackend` through httpx's ASGI
transport, so requests never leave the process.
"""

import os
import sys
from typing import AsyncGenerator

import pytest

# Ensure project root is importable
ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from httpx import ASGITransport

from fake_backend import REFRESH_TOKEN, FakeBackend
from hris.api.v1.api import HrisApi
from hris.core.notify import Notifier
from hris.core.session import Session
from hris.main import create_api

BASE_URL = "http://test/api/v1"


@pytest.fixture
def backend() -> FakeBackend:
    """A freshly seeded fake server."""
    return FakeBackend()


@pytest.fixture
def session(backend: FakeBackend) -> Session:
    """A signed-in session holding a token the backend accepts."""
    session = Session(leeway_seconds=30)
    session.set_access_token(backend.issue_token(), 3600)
    session.set_refresh_token(REFRESH_TOKEN)
    return session


@pytest.fixture
async def api(backend: FakeBackend, session: Session) -> AsyncGenerator[HrisApi, None]:
    """Return an HrisApi wired to the fake backend."""
    client = create_api(session, base_url=BASE_URL, transport=ASGITransport(app=backend.app))
    yield client
    await client.aclose()


@pytest.fixture
def notifier() -> Notifier:
    return Notifier()
