"""
TestDataStorage: remembers entities created on the server during a test.

The request layer records every entity it creates; at teardown the storage
hands each one back to a deleter so the server is left clean.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from src.models.base import Entity
from src.models.teamcity import Endpoint


logger = logging.getLogger(__name__)

# Attributes tried, in order, to find what a deleter should address
IDENTIFIER_ATTRIBUTES = ("id", "locator", "username")

Deleter = Callable[[Endpoint, str], Any]


def get_identifier(entity: Entity) -> Optional[str]:
    """Return the first non-empty identifier attribute of an entity."""
    for attr in IDENTIFIER_ATTRIBUTES:
        value = getattr(entity, attr, None)
        if value is not None and value != "":
            return str(value)
    return None


class TestDataStorage:
    """Created entities grouped by endpoint, in creation order."""
    __test__ = False  # keep pytest from collecting this class

    def __init__(self):
        self._created: Dict[Endpoint, List[Entity]] = {}

    def __len__(self) -> int:
        return sum(len(entities) for entities in self._created.values())

    def add_created_entity(self, endpoint: Endpoint, entity: Entity) -> None:
        """Record an entity; recording the same instance twice has no effect."""
        entities = self._created.setdefault(endpoint, [])
        if not any(existing is entity for existing in entities):
            entities.append(entity)

    def created_entities(self, endpoint: Endpoint) -> List[Entity]:
        return list(self._created.get(endpoint, []))

    def delete_created_entities(self, deleter: Deleter) -> int:
        """
        Delete every recorded entity, then clear the storage.

        All entities are attempted even if some deletions fail; the first
        failure is re-raised afterwards.

        Args:
            deleter: Called as deleter(endpoint, identifier)

        Returns:
            Number of entities deleted successfully
        """
        deleted = 0
        first_error: Optional[Exception] = None

        for endpoint, entities in self._created.items():
            for entity in entities:
                identifier = get_identifier(entity)
                if identifier is None:
                    logger.warning(
                        "Cannot delete %s from %s: no identifier",
                        type(entity).__name__, endpoint.url,
                    )
                    continue
                try:
                    deleter(endpoint, identifier)
                    deleted += 1
                except Exception as e:
                    logger.error("Failed to delete %s %s: %s", endpoint.name, identifier, e)
                    if first_error is None:
                        first_error = e

        self._created.clear()

        if first_error is not None:
            raise first_error
        return deleted
