"""
Shared fixtures.
"""

import pytest

from src.generators.engine import TestDataGenerator
from src.generators.storage import TestDataStorage
from src.utils.config import GeneratorSettings


@pytest.fixture
def generator():
    """Generator with a fixed seed for reproducible random strings."""
    return TestDataGenerator(settings=GeneratorSettings(seed=1234))


@pytest.fixture
def storage():
    """
    Storage for entities a test created.

    A real suite would pass its request layer's delete call here; tests in
    this repository never reach a server, so teardown only clears it.
    """
    storage = TestDataStorage()
    yield storage
    storage.delete_created_entities(lambda endpoint, identifier: None)
