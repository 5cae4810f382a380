"""
Entity models for generated test data.
"""

from .base import Entity, FieldTag, entity_field, field_tags
from .teamcity import (
    BuildType,
    Endpoint,
    NewProjectDescription,
    Project,
    Properties,
    Property,
    Role,
    Roles,
    Step,
    Steps,
    TestData,
    User,
)

__all__ = [
    # Base
    "Entity",
    "FieldTag",
    "entity_field",
    "field_tags",
    # Reference graph
    "BuildType",
    "NewProjectDescription",
    "Project",
    "Properties",
    "Property",
    "Role",
    "Roles",
    "Step",
    "Steps",
    "User",
    "TestData",
    "Endpoint",
]
