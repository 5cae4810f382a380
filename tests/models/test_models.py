"""
Tests for entity models and serialization.
"""

from src.models import BuildType, NewProjectDescription, Role, Roles, Step, Steps, User


def test_to_dict_drops_none_values():
    project = NewProjectDescription(id="p1", name="Project 1")

    assert project.to_dict() == {
        "id": "p1",
        "name": "Project 1",
        "copy_all_associated_settings": True,
    }


def test_to_dict_nested():
    project = NewProjectDescription(id="p1")
    build_type = BuildType(
        id="b1",
        project=project,
        steps=Steps(step=[Step(name="run")]),
    )

    result = build_type.to_dict()

    assert result["project"]["id"] == "p1"
    assert result["steps"] == {"step": [{"name": "run", "type": "simpleRunner"}]}
    assert "name" not in result


def test_role_defaults():
    user = User(username="u", roles=Roles(role=[Role()]))
    assert user.to_dict()["roles"] == {"role": [{"role_id": "SYSTEM_ADMIN", "scope": "g"}]}
