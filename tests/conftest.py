import random
from datetime import UTC, datetime

import pytest

from cardvault.db.kv_store import InMemoryStore
from cardvault.models import failure as failure_module
from cardvault.services.card_game import CardGame, build_game

FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


@pytest.fixture(autouse=True)
def clear_finalized_responses():
    """Clear the finalized responses set between tests.

    Python reuses memory addresses for new objects, which would otherwise
    cause id() collisions with previously finalized responses.
    """
    failure_module._finalized_responses.clear()
    yield
    failure_module._finalized_responses.clear()


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def game(store: InMemoryStore) -> CardGame:
    """A freshly seeded game with a deterministic RNG and clock."""
    return build_game(store, rng=random.Random(1234), clock=lambda: FIXED_NOW)
