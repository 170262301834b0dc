"""Service test fixtures — isolated store + dispatcher per test.

Invariants:
    - Every test gets a fresh EntityStore (no shared module state)
    - seeded_dispatcher holds users alice and bob plus article 1 by alice
"""

import pytest

from newsboard.core.entity_store import EntityStore
from newsboard.services.dispatcher import Dispatcher


@pytest.fixture
def store():
    return EntityStore()


@pytest.fixture
def dispatcher(store):
    return Dispatcher(store)


@pytest.fixture
def seeded_dispatcher(dispatcher):
    dispatcher.dispatch("POST", "/users", {"username": "alice"})
    dispatcher.dispatch("POST", "/users", {"username": "bob"})
    dispatcher.dispatch("POST", "/articles", {
        "article": {"title": "T", "url": "http://x", "username": "alice"},
    })
    return dispatcher
