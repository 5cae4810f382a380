"""
Base entity type and field tagging for generated test data.

Entities are dataclasses. How the generator populates a field is declared
with entity_field() tags stored in the dataclass field metadata:

    @dataclass
    class Project(Entity):
        id: Optional[str] = entity_field(FieldTag.PARAMETER, FieldTag.RANDOM)
        name: Optional[str] = entity_field(FieldTag.RANDOM)
        parent_project: Optional[ProjectLocator] = entity_field(FieldTag.SKIP)

Untagged fields are still filled when their type is an Entity or a list of
Entities; everything else keeps its default.
"""

from dataclasses import MISSING, field, fields, is_dataclass
from enum import Enum
from typing import Any, Dict, FrozenSet


TAGS_METADATA_KEY = "fixture_tags"


class FieldTag(Enum):
    """Population tags that can be attached to an entity field."""
    SKIP = "skip"            # Never touched by the generator
    PARAMETER = "parameter"  # Takes the next caller-supplied parameter
    RANDOM = "random"        # Gets a random string (string fields only)


def entity_field(*tags: FieldTag, default: Any = None, default_factory: Any = MISSING) -> Any:
    """
    Declare a dataclass field with population tags.

    Args:
        tags: Any of FieldTag; SKIP cannot be combined with other tags
        default: Default value (ignored when default_factory is given)
        default_factory: Callable producing the default value

    Returns:
        A dataclasses.Field carrying the tags in its metadata
    """
    tag_set: FrozenSet[FieldTag] = frozenset(tags)
    if FieldTag.SKIP in tag_set and len(tag_set) > 1:
        raise ValueError("FieldTag.SKIP cannot be combined with other tags")

    metadata = {TAGS_METADATA_KEY: tag_set}
    if default_factory is not MISSING:
        return field(default_factory=default_factory, metadata=metadata)
    return field(default=default, metadata=metadata)


def field_tags(dataclass_field) -> FrozenSet[FieldTag]:
    """Get the population tags of a dataclass field."""
    return dataclass_field.metadata.get(TAGS_METADATA_KEY, frozenset())


class Entity:
    """
    Marker base for every domain record the generator can build.

    Subclasses must be dataclasses whose fields all have defaults.
    """

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, excluding None values."""
        return _to_plain(self)


def _to_plain(value: Any) -> Any:
    # Identity-shared sub-entities are serialized at every place they appear
    if is_dataclass(value) and not isinstance(value, type):
        result = {}
        for f in fields(value):
            plain = _to_plain(getattr(value, f.name))
            if plain is not None:
                result[f.name] = plain
        return result
    if isinstance(value, (list, tuple)):
        return [_to_plain(v) for v in value]
    if isinstance(value, dict):
        return {k: _to_plain(v) for k, v in value.items() if v is not None}
    if isinstance(value, Enum):
        return value.value
    return value
