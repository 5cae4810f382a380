"""
FieldPolicyResolver: decides how a single field gets its value.

Rules are checked in a fixed order and the first match wins:

    1. SKIP          keep the default, touch nothing
    2. PARAMETER     take the next caller parameter, if there is one
    3. RANDOM        random string (string fields only, otherwise keep default)
    4. entity        reuse a registered instance of that type, or generate one
    5. entity list   one-element list, element chosen as in rule 4
    6. anything else keep the default

A PARAMETER field with no parameter left falls through to rule 3 onward.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from .cursor import ParameterCursor
from .errors import SchemaMismatchError
from .random_data import Randomizer
from .reuse_registry import ReuseRegistry
from .schema import FieldDescriptor, FieldKind


logger = logging.getLogger(__name__)


class Action(Enum):
    """What the engine should do with a field."""
    KEEP_DEFAULT = "keep_default"
    ASSIGN = "assign"
    GENERATE = "generate"
    GENERATE_LIST = "generate_list"


class Rule(Enum):
    """Which resolution rule produced a decision."""
    SKIP = "skip"
    PARAMETER = "parameter"
    RANDOM = "random"
    NESTED = "nested"
    NESTED_LIST = "nested_list"
    NONE = "none"


@dataclass
class Resolution:
    """Decision for one field."""
    action: Action
    rule: Rule
    value: Any = None
    entity_type: Optional[type] = None
    reused: bool = False


class FieldPolicyResolver:
    """Applies the ordered population rules to field descriptors."""

    def __init__(self, randomizer: Optional[Randomizer] = None):
        self.randomizer = randomizer or Randomizer()

    def resolve(
        self,
        descriptor: FieldDescriptor,
        registry: ReuseRegistry,
        cursor: ParameterCursor,
    ) -> Resolution:
        """
        Decide the value of one field.

        Args:
            descriptor: The field being populated
            registry: Entities available for reuse
            cursor: Remaining caller parameters (advanced on rule 2)

        Returns:
            Resolution telling the engine to keep, assign, or generate

        Raises:
            SchemaMismatchError: If the next parameter does not fit the field type
        """
        if descriptor.is_skip:
            return Resolution(Action.KEEP_DEFAULT, Rule.SKIP)

        if descriptor.is_parameter and not cursor.is_empty():
            value = cursor.peek()
            if not descriptor.accepts(value):
                raise SchemaMismatchError(
                    f"Parameter {value!r} ({type(value).__name__}) does not fit "
                    f"field '{descriptor.name}' of type {_type_name(descriptor.declared_type)}"
                )
            cursor.advance()
            return Resolution(Action.ASSIGN, Rule.PARAMETER, value=value)

        if descriptor.is_random:
            if descriptor.kind == FieldKind.STRING:
                return Resolution(Action.ASSIGN, Rule.RANDOM, value=self.randomizer.random_string())
            return Resolution(Action.KEEP_DEFAULT, Rule.RANDOM)

        if descriptor.kind == FieldKind.ENTITY:
            existing = registry.find(descriptor.entity_type)
            if existing is not None:
                return Resolution(
                    Action.ASSIGN, Rule.NESTED, value=existing,
                    entity_type=descriptor.entity_type, reused=True,
                )
            return Resolution(Action.GENERATE, Rule.NESTED, entity_type=descriptor.entity_type)

        if descriptor.kind == FieldKind.ENTITY_LIST:
            existing = registry.find(descriptor.entity_type)
            if existing is not None:
                return Resolution(
                    Action.ASSIGN, Rule.NESTED_LIST, value=[existing],
                    entity_type=descriptor.entity_type, reused=True,
                )
            return Resolution(Action.GENERATE_LIST, Rule.NESTED_LIST, entity_type=descriptor.entity_type)

        return Resolution(Action.KEEP_DEFAULT, Rule.NONE)


def _type_name(declared: Any) -> str:
    return getattr(declared, "__name__", repr(declared))
