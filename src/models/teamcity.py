"""
Reference entity graph modelled on a CI server's REST resources.

Field declaration order matters: it decides which caller parameter lands in
which PARAMETER field, and TestData's order decides which entities later
ones can reuse.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .base import Entity, FieldTag, entity_field


@dataclass
class Project(Entity):
    """A project as returned by the server."""
    id: Optional[str] = entity_field(FieldTag.PARAMETER, FieldTag.RANDOM)
    name: Optional[str] = entity_field(FieldTag.RANDOM)
    locator: Optional[str] = entity_field(FieldTag.SKIP)


@dataclass
class NewProjectDescription(Entity):
    """Request body for creating a project."""
    id: Optional[str] = entity_field(FieldTag.PARAMETER, FieldTag.RANDOM)
    name: Optional[str] = entity_field(FieldTag.RANDOM)
    parent_project_locator: Optional[str] = entity_field(FieldTag.SKIP)
    copy_all_associated_settings: bool = True


@dataclass
class Property(Entity):
    """A name/value pair inside a step's property list."""
    name: Optional[str] = entity_field(FieldTag.PARAMETER)
    value: Optional[str] = entity_field(FieldTag.PARAMETER)


@dataclass
class Properties(Entity):
    count: Optional[int] = entity_field(FieldTag.SKIP)
    property: List[Property] = entity_field(default_factory=list)


@dataclass
class Step(Entity):
    """A single build step."""
    id: Optional[str] = entity_field(FieldTag.SKIP)
    name: Optional[str] = entity_field(FieldTag.RANDOM)
    type: str = "simpleRunner"
    properties: Optional[Properties] = entity_field(FieldTag.SKIP)


@dataclass
class Steps(Entity):
    count: Optional[int] = entity_field(FieldTag.SKIP)
    step: List[Step] = entity_field(default_factory=list)


@dataclass
class BuildType(Entity):
    """A build configuration belonging to a project."""
    id: Optional[str] = entity_field(FieldTag.PARAMETER, FieldTag.RANDOM)
    name: Optional[str] = entity_field(FieldTag.RANDOM)
    project: Optional[NewProjectDescription] = None
    steps: Optional[Steps] = entity_field(FieldTag.SKIP)


@dataclass
class Role(Entity):
    role_id: str = entity_field(FieldTag.PARAMETER, default="SYSTEM_ADMIN")
    scope: str = entity_field(FieldTag.PARAMETER, default="g")


@dataclass
class Roles(Entity):
    role: List[Role] = entity_field(default_factory=list)


@dataclass
class User(Entity):
    """A server user together with its role assignments."""
    id: Optional[int] = entity_field(FieldTag.SKIP)
    username: Optional[str] = entity_field(FieldTag.RANDOM)
    password: Optional[str] = entity_field(FieldTag.RANDOM)
    roles: Optional[Roles] = None


@dataclass
class TestData:
    """
    The fixed set of entities a test starts from.

    Not an Entity itself. The aggregate generator fills each field in order
    and later fields reuse earlier ones (BuildType.project is this project).
    """
    __test__ = False  # keep pytest from collecting this class

    project: Optional[NewProjectDescription] = None
    build_type: Optional[BuildType] = None
    user: Optional[User] = None


class Endpoint(Enum):
    """REST resources and the entity type each one accepts and returns."""
    PROJECTS = ("/app/rest/projects", Project)
    BUILD_TYPES = ("/app/rest/buildTypes", BuildType)
    USERS = ("/app/rest/users", User)

    def __init__(self, url: str, model_class: type):
        self.url = url
        self.model_class = model_class
