"""
Generator engine: builds one fully populated entity.

The engine instantiates the requested type with its defaults, walks the
field descriptors in declaration order and applies the resolver's decision
to each field, recursing for nested entities. Parameters and the reuse
registry are shared by the whole recursive call tree of one request.
"""

import logging
from typing import Any, Optional, Tuple, Type, TypeVar

from src.models.base import Entity
from src.models.teamcity import TestData
from src.utils.config import GeneratorSettings

from .cursor import ParameterCursor
from .errors import ConstructionError, RecursionDepthError
from .random_data import Randomizer
from .resolver import Action, FieldPolicyResolver, Resolution
from .reuse_registry import ReuseRegistry
from .schema import DEFAULT_SCHEMA, FieldDescriptor, SchemaRegistry, is_entity_type


logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Entity)


class TestDataGenerator:
    """
    Builds entities according to their field descriptors.

    One generator can serve many requests; all per-request state (cursor,
    registry, depth) lives on the call stack.
    """
    __test__ = False  # keep pytest from collecting this class

    def __init__(
        self,
        settings: Optional[GeneratorSettings] = None,
        schema: Optional[SchemaRegistry] = None,
        randomizer: Optional[Randomizer] = None,
    ):
        """
        Initialize the generator.

        Args:
            settings: Generator settings (default: GeneratorSettings())
            schema: Descriptor cache (default: the shared one)
            randomizer: Random string source (default: built from settings)
        """
        self.settings = settings or GeneratorSettings()
        self.schema = schema or DEFAULT_SCHEMA
        self.randomizer = randomizer or Randomizer(
            length=self.settings.random_length,
            prefix=self.settings.random_prefix,
            alphabet=self.settings.alphabet,
            seed=self.settings.seed,
        )
        self.resolver = FieldPolicyResolver(self.randomizer)

    def generate(
        self,
        entity_type: Type[E],
        *parameters: Any,
        registry: Optional[ReuseRegistry] = None,
    ) -> E:
        """
        Generate one entity.

        Args:
            entity_type: Entity dataclass to build
            parameters: Values for PARAMETER fields, in field declaration
                order across the whole nested tree; extras are ignored
            registry: Entities nested fields may reuse (default: empty)

        Returns:
            A new, fully populated instance of entity_type

        Raises:
            ConstructionError: If the type cannot be instantiated or written
            SchemaMismatchError: If a parameter does not fit its field
            RecursionDepthError: If nesting exceeds settings.max_depth
        """
        if registry is None:
            registry = ReuseRegistry()
        cursor = ParameterCursor(parameters)

        entity = self._build(entity_type, registry, cursor, chain=())

        if not cursor.is_empty():
            logger.debug(
                "%s consumed %d of %d parameters, ignoring the rest",
                entity_type.__name__, cursor.consumed, len(parameters),
            )
        return entity

    def generate_test_data(self, aggregate_type: Type[Any] = TestData) -> Any:
        """Generate an aggregate (TestData by default) using this generator's settings."""
        from .aggregate import AggregateGenerator
        return AggregateGenerator(self).generate(aggregate_type)

    def _build(
        self,
        entity_type: Type[E],
        registry: ReuseRegistry,
        cursor: ParameterCursor,
        chain: Tuple[type, ...],
    ) -> E:
        if not is_entity_type(entity_type):
            raise ConstructionError(f"{entity_type!r} is not an Entity dataclass")

        chain = chain + (entity_type,)
        if len(chain) > self.settings.max_depth:
            path = " -> ".join(t.__name__ for t in chain)
            raise RecursionDepthError(
                f"Nesting deeper than {self.settings.max_depth} levels: {path}"
            )

        descriptors = self.schema.describe(entity_type)
        instance = self.instantiate(entity_type)

        for descriptor in descriptors:
            resolution = self.resolver.resolve(descriptor, registry, cursor)
            self._apply(instance, descriptor, resolution, registry, cursor, chain)

        return instance

    def _apply(
        self,
        instance: Any,
        descriptor: FieldDescriptor,
        resolution: Resolution,
        registry: ReuseRegistry,
        cursor: ParameterCursor,
        chain: Tuple[type, ...],
    ) -> None:
        logger.debug(
            "%s.%s: %s%s",
            type(instance).__name__, descriptor.name, resolution.rule.value,
            " (reused)" if resolution.reused else "",
        )

        if resolution.action == Action.KEEP_DEFAULT:
            return
        if resolution.action == Action.ASSIGN:
            value = resolution.value
        elif resolution.action == Action.GENERATE:
            value = self._build(resolution.entity_type, registry, cursor, chain)
        else:
            value = [self._build(resolution.entity_type, registry, cursor, chain)]

        write_field(instance, descriptor, value)

    @staticmethod
    def instantiate(cls: Type[Any]) -> Any:
        """Create a default-valued instance, wrapping any failure in ConstructionError."""
        try:
            return cls()
        except Exception as e:
            raise ConstructionError(
                f"Cannot instantiate {cls.__name__} without arguments: {e}", cause=e
            ) from e


def write_field(instance: Any, descriptor: FieldDescriptor, value: Any) -> None:
    """Set a field, wrapping write failures (e.g. frozen dataclasses) in ConstructionError."""
    try:
        descriptor.set(instance, value)
    except (AttributeError, TypeError) as e:
        raise ConstructionError(
            f"Cannot write {type(instance).__name__}.{descriptor.name}: {e}", cause=e
        ) from e


def generate(entity_type: Type[E], *parameters: Any, registry: Optional[ReuseRegistry] = None) -> E:
    """Generate one entity with default settings."""
    return TestDataGenerator().generate(entity_type, *parameters, registry=registry)
