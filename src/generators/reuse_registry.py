"""
ReuseRegistry: entities already generated during one aggregate build.
"""

from typing import Iterator, List, Optional, Type, TypeVar

from src.models.base import Entity

from .errors import SchemaMismatchError


E = TypeVar("E", bound=Entity)


class ReuseRegistry:
    """
    Append-only, ordered collection of generated entities.

    Lookups match the exact concrete type. The registry holds at most one
    entity per type, so a lookup is never ambiguous.
    """

    def __init__(self):
        self._entities: List[Entity] = []

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[Entity]:
        return iter(self._entities)

    def __contains__(self, entity: object) -> bool:
        return any(existing is entity for existing in self._entities)

    def __repr__(self) -> str:
        names = ", ".join(type(e).__name__ for e in self._entities)
        return f"ReuseRegistry([{names}])"

    def add(self, entity: Entity) -> None:
        """Register an entity; raises SchemaMismatchError if its type is already present."""
        if self.find(type(entity)) is not None:
            raise SchemaMismatchError(
                f"Registry already holds a {type(entity).__name__}"
            )
        self._entities.append(entity)

    def find(self, entity_type: Type[E]) -> Optional[E]:
        """Return the registered entity of exactly this type, or None."""
        for entity in self._entities:
            if type(entity) is entity_type:
                return entity
        return None
