"""
Tests for the field resolution rules and their priority order.
"""

from dataclasses import dataclass
from typing import List, Optional

import pytest

from src.generators.cursor import ParameterCursor
from src.generators.errors import SchemaMismatchError
from src.generators.random_data import Randomizer
from src.generators.resolver import Action, FieldPolicyResolver, Rule
from src.generators.reuse_registry import ReuseRegistry
from src.generators.schema import describe
from src.models.base import Entity, FieldTag, entity_field


@dataclass
class Target(Entity):
    name: Optional[str] = entity_field(FieldTag.RANDOM)


@dataclass
class Sample(Entity):
    skipped: Optional[str] = entity_field(FieldTag.SKIP)
    bound: Optional[str] = entity_field(FieldTag.PARAMETER, FieldTag.RANDOM)
    random_int: int = entity_field(FieldTag.RANDOM, default=7)
    target: Optional[Target] = None
    targets: List[Target] = entity_field(default_factory=list)
    plain: Optional[str] = None
    number: int = entity_field(FieldTag.PARAMETER, default=0)


@pytest.fixture
def fields():
    return {d.name: d for d in describe(Sample)}


@pytest.fixture
def resolver():
    return FieldPolicyResolver(Randomizer(prefix="r_"))


class TestResolutionRules:

    def test_skip_touches_nothing(self, fields, resolver):
        cursor = ParameterCursor(["p"])
        resolution = resolver.resolve(fields["skipped"], ReuseRegistry(), cursor)

        assert resolution.action == Action.KEEP_DEFAULT
        assert resolution.rule == Rule.SKIP
        assert cursor.consumed == 0

    def test_parameter_wins_over_random(self, fields, resolver):
        cursor = ParameterCursor(["p"])
        resolution = resolver.resolve(fields["bound"], ReuseRegistry(), cursor)

        assert resolution.action == Action.ASSIGN
        assert resolution.rule == Rule.PARAMETER
        assert resolution.value == "p"
        assert cursor.is_empty()

    def test_empty_cursor_falls_through_to_random(self, fields, resolver):
        resolution = resolver.resolve(fields["bound"], ReuseRegistry(), ParameterCursor())

        assert resolution.action == Action.ASSIGN
        assert resolution.rule == Rule.RANDOM
        assert resolution.value.startswith("r_")

    def test_random_on_non_string_keeps_default(self, fields, resolver):
        resolution = resolver.resolve(fields["random_int"], ReuseRegistry(), ParameterCursor())

        assert resolution.action == Action.KEEP_DEFAULT
        assert resolution.rule == Rule.RANDOM

    def test_nested_generates_when_not_registered(self, fields, resolver):
        resolution = resolver.resolve(fields["target"], ReuseRegistry(), ParameterCursor())

        assert resolution.action == Action.GENERATE
        assert resolution.entity_type is Target

    def test_nested_reuses_registered_instance(self, fields, resolver):
        registry = ReuseRegistry()
        existing = Target(name="existing")
        registry.add(existing)

        resolution = resolver.resolve(fields["target"], registry, ParameterCursor())

        assert resolution.action == Action.ASSIGN
        assert resolution.value is existing
        assert resolution.reused

    def test_nested_list_generates_when_not_registered(self, fields, resolver):
        resolution = resolver.resolve(fields["targets"], ReuseRegistry(), ParameterCursor())

        assert resolution.action == Action.GENERATE_LIST
        assert resolution.rule == Rule.NESTED_LIST
        assert resolution.entity_type is Target

    def test_nested_list_reuses_registered_instance(self, fields, resolver):
        registry = ReuseRegistry()
        existing = Target()
        registry.add(existing)

        resolution = resolver.resolve(fields["targets"], registry, ParameterCursor())

        assert resolution.action == Action.ASSIGN
        assert len(resolution.value) == 1
        assert resolution.value[0] is existing

    def test_untagged_plain_field_keeps_default(self, fields, resolver):
        cursor = ParameterCursor(["p"])
        resolution = resolver.resolve(fields["plain"], ReuseRegistry(), cursor)

        assert resolution.action == Action.KEEP_DEFAULT
        assert resolution.rule == Rule.NONE
        assert cursor.consumed == 0

    def test_parameter_of_wrong_type(self, fields, resolver):
        cursor = ParameterCursor(["not a number"])
        with pytest.raises(SchemaMismatchError, match="does not fit field 'number'"):
            resolver.resolve(fields["number"], ReuseRegistry(), cursor)
        assert cursor.consumed == 0
