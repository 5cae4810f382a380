"""
Field descriptor tables for entity and aggregate types.

Each dataclass is analysed once: its fields, in declaration order, become
FieldDescriptors carrying the population tags and the field kind (string,
entity, list of entities, other). Generation reads only these tables.
"""

import logging
import sys
import types
from dataclasses import dataclass, fields, is_dataclass
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional, Tuple, Union, get_args, get_origin, get_type_hints

from src.models.base import Entity, FieldTag, field_tags

from .errors import SchemaMismatchError


logger = logging.getLogger(__name__)

_UNION_TYPES = (Union, types.UnionType) if sys.version_info >= (3, 10) else (Union,)


class FieldKind(Enum):
    """What the declared type of a field is, as far as generation cares."""
    STRING = "string"
    ENTITY = "entity"
    ENTITY_LIST = "entity_list"
    OTHER = "other"


@dataclass(frozen=True)
class FieldDescriptor:
    """Static description of one field of a dataclass."""
    name: str
    declared_type: Any
    kind: FieldKind
    tags: FrozenSet[FieldTag] = frozenset()
    element_type: Optional[type] = None
    nullable: bool = False

    @property
    def is_skip(self) -> bool:
        return FieldTag.SKIP in self.tags

    @property
    def is_parameter(self) -> bool:
        return FieldTag.PARAMETER in self.tags

    @property
    def is_random(self) -> bool:
        return FieldTag.RANDOM in self.tags

    @property
    def entity_type(self) -> Optional[type]:
        """The Entity type to reuse or generate for this field, if any."""
        if self.kind == FieldKind.ENTITY:
            return self.declared_type
        if self.kind == FieldKind.ENTITY_LIST:
            return self.element_type
        return None

    def get(self, instance: Any) -> Any:
        return getattr(instance, self.name)

    def set(self, instance: Any, value: Any) -> None:
        setattr(instance, self.name, value)

    def accepts(self, value: Any) -> bool:
        """Check whether a caller-supplied parameter fits the declared type."""
        if value is None:
            return self.nullable or self.declared_type is Any
        if self.declared_type is Any:
            return True
        if isinstance(self.declared_type, type):
            return isinstance(value, self.declared_type)
        origin = get_origin(self.declared_type)
        if isinstance(origin, type):
            return isinstance(value, origin)
        return True


def is_entity_type(candidate: Any) -> bool:
    """True for concrete Entity subclasses declared as dataclasses."""
    return (
        isinstance(candidate, type)
        and issubclass(candidate, Entity)
        and candidate is not Entity
        and is_dataclass(candidate)
    )


def _unwrap_optional(annotation: Any) -> Tuple[Any, bool]:
    """Strip a single Optional[...] wrapper; report whether None was allowed."""
    if get_origin(annotation) in _UNION_TYPES:
        args = [a for a in get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return args[0], len(args) < len(get_args(annotation))
    return annotation, False


def _is_list_type(annotation: Any) -> bool:
    return annotation is list or annotation is List or get_origin(annotation) is list


def _classify(owner: type, name: str, annotation: Any, tags: FrozenSet[FieldTag]) -> Tuple[FieldKind, Optional[type]]:
    if isinstance(annotation, type) and issubclass(annotation, Entity):
        return FieldKind.ENTITY, None

    if _is_list_type(annotation):
        args = get_args(annotation)
        if not args:
            if FieldTag.SKIP in tags:
                return FieldKind.OTHER, None
            raise SchemaMismatchError(
                f"{owner.__name__}.{name}: list field has no element type"
            )
        element = args[0]
        if isinstance(element, type) and issubclass(element, Entity):
            return FieldKind.ENTITY_LIST, element
        return FieldKind.OTHER, None

    if annotation is str:
        return FieldKind.STRING, None

    return FieldKind.OTHER, None


class SchemaRegistry:
    """
    Cache of descriptor tables, one per dataclass type.

    Tables are built lazily so entity modules can reference each other with
    forward references; once built a table never changes.
    """

    def __init__(self):
        self._tables: Dict[type, Tuple[FieldDescriptor, ...]] = {}

    def __contains__(self, cls: type) -> bool:
        return cls in self._tables

    def describe(self, cls: type) -> Tuple[FieldDescriptor, ...]:
        """
        Get the ordered field descriptors of a dataclass.

        Args:
            cls: Entity or aggregate dataclass

        Returns:
            Descriptors in field declaration order

        Raises:
            SchemaMismatchError: If cls is not a dataclass, a type hint cannot
                be resolved, or a list field has no element type
        """
        table = self._tables.get(cls)
        if table is not None:
            return table

        if not (isinstance(cls, type) and is_dataclass(cls)):
            raise SchemaMismatchError(f"{cls!r} is not a dataclass")

        try:
            hints = get_type_hints(cls)
        except NameError as e:
            raise SchemaMismatchError(f"Cannot resolve type hints of {cls.__name__}: {e}") from e

        descriptors = []
        for f in fields(cls):
            tags = field_tags(f)
            declared, nullable = _unwrap_optional(hints.get(f.name, Any))
            kind, element = _classify(cls, f.name, declared, tags)
            descriptors.append(FieldDescriptor(
                name=f.name,
                declared_type=declared,
                kind=kind,
                tags=tags,
                element_type=element,
                nullable=nullable,
            ))

        table = tuple(descriptors)
        self._tables[cls] = table
        logger.debug(
            "Described %s: %s",
            cls.__name__,
            ", ".join(f"{d.name}[{d.kind.value}]" for d in table),
        )
        return table


# Descriptor tables are static metadata, so one shared cache is enough
DEFAULT_SCHEMA = SchemaRegistry()


def describe(cls: type) -> Tuple[FieldDescriptor, ...]:
    """Describe a dataclass using the default schema registry."""
    return DEFAULT_SCHEMA.describe(cls)
