"""API test fixtures — FastAPI app around an isolated store + httpx client.

Invariants:
    - Every test gets its own app and EntityStore (test mode, no persistence)
    - Requests go through the real ASGI stack: CORS middleware, error handlers,
      catch-all transport route
"""

import pytest
from httpx import ASGITransport, AsyncClient

from newsboard.config import Settings
from newsboard.core.entity_store import EntityStore
from newsboard.main import create_app


@pytest.fixture
def store():
    return EntityStore()


@pytest.fixture
def app(store):
    return create_app(Settings(is_test_mode=True, log_format="text"), store=store)


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
