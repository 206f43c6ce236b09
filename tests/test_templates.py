import json

import pytest

from delvekit.spatial import INVALID_ENTITY
from delvekit.templates import (
    Action,
    Actor,
    BaseInfo,
    EntityWorld,
    Position,
    TemplateError,
    TemplateNotFoundError,
    TemplateRegistry,
)

ORC = {
    "name": "Orc",
    "components": [
        {"type": "Position", "x": 3, "y": 4},
        {
            "type": "BaseInfo",
            "symbol": "orc",
            "color": 2,
            "name": "Orc",
            "description": "A brute",
        },
        {"type": "Actor", "hp": 30, "strength": 14},
        {"type": "Action", "action_type": 1, "action_data": 2},
    ],
}


@pytest.fixture
def registry():
    reg = TemplateRegistry()
    reg.load_data({"templates": [ORC]})
    return reg


def test_load_data_counts_array_and_skips_bad_entries():
    reg = TemplateRegistry()
    count = reg.load_data({"templates": [ORC, 5, {"no_name": True}, {"name": 3}]})
    assert count == 4
    assert reg.names() == ["Orc"]


def test_reload_replaces_case_insensitively(registry):
    registry.load_data({"templates": [{"name": "ORC", "components": []}]})
    assert registry.names() == ["ORC"]
    assert registry.get("ORC")["components"] == []


def test_get_is_case_sensitive(registry):
    assert registry.get("Orc")["name"] == "Orc"
    with pytest.raises(TemplateNotFoundError):
        registry.get("orc")


def test_missing_templates_array():
    with pytest.raises(TemplateError):
        TemplateRegistry().load_data({"things": []})


def test_load_file(tmp_path):
    path = tmp_path / "t.json"
    path.write_text(json.dumps({"templates": [ORC]}))
    reg = TemplateRegistry()
    assert reg.load_file(str(path)) == 1
    assert reg.names() == ["Orc"]


def test_load_file_errors(tmp_path):
    reg = TemplateRegistry()
    with pytest.raises(ValueError):
        reg.load_file("")
    with pytest.raises(TemplateError):
        reg.load_file(str(tmp_path / "missing.json"))
    bad = tmp_path / "bad.json"
    bad.write_text("{not json")
    with pytest.raises(TemplateError):
        reg.load_file(str(bad))


def test_build_components_values(registry):
    built = dict(registry.build_components("Orc"))
    assert built["Position"] == Position(x=3, y=4, entity=INVALID_ENTITY)
    assert built["BaseInfo"].character == "o"
    assert built["BaseInfo"].description == "A brute"
    actor = built["Actor"]
    assert actor.hp == 30
    assert actor.max_hp == 30
    assert actor.strength == 14
    assert actor.damage_sides == 6
    assert built["Action"] == Action(type=1, action_data=2)


def test_defaults_for_empty_components():
    reg = TemplateRegistry()
    reg.load_data(
        {
            "templates": [
                {
                    "name": "Blank",
                    "components": [{"type": "BaseInfo"}, {"type": "actor"}],
                }
            ]
        }
    )
    built = reg.build_components("Blank")
    assert built[0] == ("BaseInfo", BaseInfo())
    assert built[0][1].name == "Unknown"
    assert built[1] == ("actor", Actor())


def test_create_entity_adds_components(registry):
    world = EntityWorld()
    entity = registry.create_entity("Orc", world)
    assert entity in world
    pos = world.component(entity, world.component_id("Position"))
    assert (pos.x, pos.y) == (3, 4)
    info = world.component(entity, world.component_id("BaseInfo"))
    assert info.name == "Orc"


def test_create_entity_skips_unknown_component_type():
    reg = TemplateRegistry()
    reg.load_data(
        {
            "templates": [
                {
                    "name": "Odd",
                    "components": [{"type": "Mystery"}, {"type": "Position", "x": 1}],
                }
            ]
        }
    )
    world = EntityWorld()
    entity = reg.create_entity("Odd", world)
    assert world.component(entity, world.component_id("Position")).x == 1
    with pytest.raises(KeyError):
        world.component_id("Mystery")


def test_create_entity_without_components_destroys_entity():
    reg = TemplateRegistry()
    reg.load_data({"templates": [{"name": "Empty"}]})
    world = EntityWorld()
    with pytest.raises(TemplateError):
        reg.create_entity("Empty", world)
    assert 0 not in world


def test_create_entity_argument_errors(registry):
    world = EntityWorld()
    with pytest.raises(ValueError):
        registry.create_entity("", world)
    with pytest.raises(TemplateNotFoundError):
        registry.create_entity("Goblin", world)


def test_clear(registry):
    registry.clear()
    assert len(registry) == 0
    with pytest.raises(TemplateNotFoundError):
        registry.get("Orc")


def test_world_destroy_unknown_entity():
    world = EntityWorld()
    entity = world.create_entity()
    world.destroy_entity(entity)
    with pytest.raises(KeyError):
        world.destroy_entity(entity)