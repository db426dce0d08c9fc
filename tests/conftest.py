import random
from datetime import datetime

import pytest

from prompt_portal.core.security import PasswordHasher
from prompt_portal.database.entity_store import EntityStore
from prompt_portal.database.storage import InMemoryStorage

from tests.factories import FIXED_NOW


@pytest.fixture
def anyio_backend():
    return "asyncio"


class FakeClock:
    """Manually advanced clock for deterministic timestamps."""

    def __init__(self, now: datetime = FIXED_NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta) -> datetime:
        self.now = self.now + delta
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def store(storage):
    return EntityStore(storage)


@pytest.fixture
def hasher():
    return PasswordHasher(iterations=1000)


@pytest.fixture
def rng():
    return random.Random(42)
