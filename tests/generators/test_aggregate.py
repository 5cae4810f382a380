"""
Tests for TestData generation and cross-entity reuse.
"""

from dataclasses import dataclass
from typing import Optional

import pytest

from src.generators.aggregate import AggregateGenerator, generate_test_data
from src.generators.engine import TestDataGenerator
from src.generators.errors import ConstructionError, SchemaMismatchError
from src.models import BuildType, NewProjectDescription, Role, Roles, TestData, User
from src.models.base import Entity, FieldTag, entity_field
from src.utils.config import GeneratorSettings


@dataclass
class Pipeline(Entity):
    name: Optional[str] = entity_field(FieldTag.RANDOM)
    build_type: Optional[BuildType] = None


@dataclass
class DeepData:
    project: Optional[NewProjectDescription] = None
    pipeline: Optional[Pipeline] = None


@dataclass
class ReversedData:
    build_type: Optional[BuildType] = None
    project: Optional[NewProjectDescription] = None


@dataclass
class RoleData:
    role: Optional[Role] = None
    roles: Optional[Roles] = None
    label: str = "not an entity"


@dataclass
class DuplicateData:
    first: Optional[NewProjectDescription] = None
    second: Optional[NewProjectDescription] = None


@dataclass
class BrokenData:
    project: NewProjectDescription


class TestTestData:
    """The bundled TestData aggregate."""

    @pytest.fixture
    def test_data(self):
        return generate_test_data()

    def test_build_type_reuses_project(self, test_data):
        assert test_data.build_type.project is test_data.project

    def test_project_is_populated(self, test_data):
        assert test_data.project != NewProjectDescription()
        assert test_data.project.id.startswith("test_")
        assert test_data.project.name.startswith("test_")

    def test_all_fields_are_generated(self, test_data):
        assert isinstance(test_data, TestData)
        assert isinstance(test_data.build_type, BuildType)
        assert isinstance(test_data.user, User)
        assert test_data.user.roles.role[0].role_id == "SYSTEM_ADMIN"

    def test_separate_aggregates_share_nothing(self, test_data):
        other = generate_test_data()
        assert other.project is not test_data.project
        assert other.build_type.project is other.project


class TestReuseDirection:
    """Generation order decides which entities can be reused."""

    def test_reuse_deep_inside_later_entity(self):
        data = generate_test_data(DeepData)
        assert data.pipeline.build_type.project is data.project

    def test_earlier_field_cannot_reuse_later_one(self):
        data = generate_test_data(ReversedData)
        assert data.build_type.project is not data.project

    def test_entity_list_reuses_earlier_entity(self):
        data = generate_test_data(RoleData)

        assert data.roles.role[0] is data.role
        assert data.label == "not an entity"

    def test_duplicate_entity_types_are_rejected(self):
        with pytest.raises(SchemaMismatchError):
            generate_test_data(DuplicateData)

    def test_aggregate_without_default_constructor(self):
        with pytest.raises(ConstructionError):
            generate_test_data(BrokenData)


def test_aggregate_uses_generator_settings():
    generator = TestDataGenerator(settings=GeneratorSettings(random_prefix="agg_"))
    data = AggregateGenerator(generator).generate()

    assert data.project.id.startswith("agg_")
    assert data.user.username.startswith("agg_")


def test_seeded_fixture_generator(generator):
    first = AggregateGenerator(generator).generate()
    second = AggregateGenerator(TestDataGenerator(settings=generator.settings)).generate()

    assert first.build_type.project is first.project
    assert first.project == second.project


def test_generator_builds_aggregate_with_its_settings():
    generator = TestDataGenerator(settings=GeneratorSettings(random_prefix="own_"))

    data = generator.generate_test_data()
    reversed_data = generator.generate_test_data(ReversedData)

    assert isinstance(data, TestData)
    assert data.build_type.project is data.project
    assert data.project.name.startswith("own_")
    assert reversed_data.build_type.project is not reversed_data.project
