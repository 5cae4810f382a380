"""
AggregateGenerator: builds a TestData composite with cross-entity reuse.

Entity fields of the aggregate are generated in declaration order. Each
result is registered before the next field is generated, so a later entity
reuses an earlier one wherever it has a field of that type. The order of
the aggregate's fields therefore has to follow the dependency direction
(a project before the build type that belongs to it).

An aggregate may declare each entity type only once; a second field of an
already generated type raises SchemaMismatchError instead of silently
reusing the first instance.
"""

import logging
from typing import Optional, Type, TypeVar

from src.models.teamcity import TestData

from .engine import TestDataGenerator, write_field
from .reuse_registry import ReuseRegistry
from .schema import FieldKind


logger = logging.getLogger(__name__)

A = TypeVar("A")


class AggregateGenerator:
    """Generates aggregates whose entities share one reuse registry."""

    def __init__(self, generator: Optional[TestDataGenerator] = None):
        self.generator = generator or TestDataGenerator()

    def generate(self, aggregate_type: Type[A] = TestData) -> A:
        """
        Generate every entity field of an aggregate.

        Args:
            aggregate_type: Dataclass whose entity fields should be filled

        Returns:
            The populated aggregate; nothing is returned if any entity fails
        """
        instance = self.generator.instantiate(aggregate_type)
        registry = ReuseRegistry()

        for descriptor in self.generator.schema.describe(aggregate_type):
            if descriptor.kind != FieldKind.ENTITY or descriptor.is_skip:
                continue
            entity = self.generator.generate(descriptor.entity_type, registry=registry)
            write_field(instance, descriptor, entity)
            registry.add(entity)

        logger.info(
            "Generated %s with %d entities: %s",
            aggregate_type.__name__,
            len(registry),
            ", ".join(type(e).__name__ for e in registry),
        )
        return instance


def generate_test_data(aggregate_type: Type[A] = TestData) -> A:
    """Generate an aggregate (TestData by default) with default settings."""
    return AggregateGenerator().generate(aggregate_type)
