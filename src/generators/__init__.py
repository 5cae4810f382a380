"""
Test data generation.

Builds fully populated entities from their dataclass declarations:

    from src.generators import generate, generate_test_data
    from src.models import BuildType

    build_type = generate(BuildType, "my_build_id")
    test_data = generate_test_data()
    assert test_data.build_type.project is test_data.project
"""

from .errors import (
    GenerationError,
    ConstructionError,
    SchemaMismatchError,
    RecursionDepthError,
)
from .schema import (
    DEFAULT_SCHEMA,
    FieldDescriptor,
    FieldKind,
    SchemaRegistry,
    describe,
    is_entity_type,
)
from .random_data import Randomizer, get_string
from .cursor import ParameterCursor
from .reuse_registry import ReuseRegistry
from .resolver import Action, FieldPolicyResolver, Resolution, Rule
from .engine import TestDataGenerator, generate
from .aggregate import AggregateGenerator, generate_test_data
from .storage import TestDataStorage, get_identifier

__all__ = [
    # Errors
    "GenerationError",
    "ConstructionError",
    "SchemaMismatchError",
    "RecursionDepthError",
    # Schema
    "DEFAULT_SCHEMA",
    "FieldDescriptor",
    "FieldKind",
    "SchemaRegistry",
    "describe",
    "is_entity_type",
    # Building blocks
    "Randomizer",
    "get_string",
    "ParameterCursor",
    "ReuseRegistry",
    "Action",
    "FieldPolicyResolver",
    "Resolution",
    "Rule",
    # Generation
    "TestDataGenerator",
    "generate",
    "AggregateGenerator",
    "generate_test_data",
    # Teardown
    "TestDataStorage",
    "get_identifier",
]
