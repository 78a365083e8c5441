import random

import pytest

from studygenie.seed import seed_demo
from studygenie.store import ProgressStore


@pytest.fixture
def empty_store():
    """A store with no subjects and a seeded random source."""
    return ProgressStore(rng=random.Random(7))


@pytest.fixture
def store():
    """The demo curriculum: Computer Science (7 topics) and Mathematics (5 topics)."""
    store = ProgressStore(rng=random.Random(7))
    seed_demo(store)
    return store


@pytest.fixture
def config_path(tmp_path):
    return str(tmp_path / "config.json")
