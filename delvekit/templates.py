"""Entity templates loaded from JSON and instantiated into an entity world."""

from __future__ import annotations

import copy
import json
import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from delvekit.spatial import INVALID_ENTITY

logger = logging.getLogger(__name__)

ACTION_NONE = 0
DIRECTION_NONE = 0

DEFAULT_COMPONENTS = ("Position", "BaseInfo", "Actor", "Action", "FieldOfView")


class TemplateError(Exception):
    """Raised when templates cannot be loaded or instantiated."""


class TemplateNotFoundError(TemplateError, LookupError):
    """Raised when no template has the requested name."""


@dataclass
class Position:
    x: int = 0
    y: int = 0
    entity: int = INVALID_ENTITY


@dataclass
class BaseInfo:
    character: str = "?"
    color: int = 0
    name: str = "Unknown"
    description: str = ""
    weight: int = 1
    volume: int = 1
    flags: int = 0


@dataclass
class Actor:
    energy: int = 100
    energy_per_turn: int = 10
    hp: int = 100
    max_hp: int = 100
    strength: int = 10
    attack: int = 5
    attack_bonus: int = 0
    defense: int = 5
    defense_bonus: int = 0
    damage_dice: int = 1
    damage_sides: int = 6
    damage_bonus: int = 0


@dataclass
class Action:
    type: int = ACTION_NONE
    action_data: int = DIRECTION_NONE


class EntityWorld:
    """A minimal entity store with named component types."""

    def __init__(self, component_names: Iterable[str] = DEFAULT_COMPONENTS) -> None:
        self._component_ids = {
            name.casefold(): index for index, name in enumerate(component_names)
        }
        self._entities: dict[int, dict[int, Any]] = {}
        self._next_entity = 0

    def __contains__(self, entity: object) -> bool:
        return entity in self._entities

    def create_entity(self) -> int:
        entity = self._next_entity
        self._next_entity += 1
        self._entities[entity] = {}
        return entity

    def destroy_entity(self, entity: int) -> None:
        try:
            del self._entities[entity]
        except KeyError:
            raise KeyError(f"unknown entity {entity}") from None

    def component_id(self, name: str) -> int:
        """Id of a registered component type; KeyError if unknown."""
        try:
            return self._component_ids[name.casefold()]
        except KeyError:
            raise KeyError(f"unknown component type {name!r}") from None

    def add_component(self, entity: int, component_id: int, data: Any) -> None:
        """Attach a copy of ``data`` to an entity."""
        if entity not in self._entities:
            raise KeyError(f"unknown entity {entity}")
        if component_id not in self._component_ids.values():
            raise KeyError(f"unknown component id {component_id}")
        self._entities[entity][component_id] = copy.copy(data)

    def component(self, entity: int, component_id: int) -> Any:
        """The entity's component of that id, or None."""
        return self._entities.get(entity, {}).get(component_id)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _int(fields: Mapping[str, Any], key: str, default: int) -> int:
    if key not in fields:
        return default
    value = fields[key]
    return int(value) if _is_number(value) else 0


def _str(fields: Mapping[str, Any], key: str, default: str) -> str:
    value = fields.get(key)
    return value if isinstance(value, str) else default


def _build_position(fields: Mapping[str, Any]) -> Position:
    return Position(x=_int(fields, "x", 0), y=_int(fields, "y", 0))


def _build_base_info(fields: Mapping[str, Any]) -> BaseInfo:
    symbol = fields.get("symbol")
    if isinstance(symbol, str):
        character = symbol[:1] or "\0"
    else:
        character = "?"
    return BaseInfo(
        character=character,
        color=_int(fields, "color", 0),
        name=_str(fields, "name", "Unknown"),
        description=_str(fields, "description", ""),
        weight=_int(fields, "weight", 1),
        volume=_int(fields, "volume", 1),
        flags=_int(fields, "flags", 0),
    )


def _build_actor(fields: Mapping[str, Any]) -> Actor:
    hp = _int(fields, "hp", 100)
    return Actor(
        energy=_int(fields, "energy", 100),
        energy_per_turn=_int(fields, "energy_per_turn", 10),
        hp=hp,
        max_hp=_int(fields, "max_hp", hp),
        strength=_int(fields, "strength", 10),
        attack=_int(fields, "attack", 5),
        attack_bonus=_int(fields, "attack_bonus", 0),
        defense=_int(fields, "defense", 5),
        defense_bonus=_int(fields, "defense_bonus", 0),
        damage_dice=_int(fields, "damage_dice", 1),
        damage_sides=_int(fields, "damage_sides", 6),
        damage_bonus=_int(fields, "damage_bonus", 0),
    )


def _build_action(fields: Mapping[str, Any]) -> Action:
    return Action(
        type=_int(fields, "action_type", ACTION_NONE),
        action_data=_int(fields, "action_data", DIRECTION_NONE),
    )


_BUILDERS = {
    "position": _build_position,
    "baseinfo": _build_base_info,
    "actor": _build_actor,
    "action": _build_action,
}


class TemplateRegistry:
    """Named entity templates, replaced by later loads with the same name."""

    def __init__(self) -> None:
        self._templates: dict[str, tuple[str, dict[str, Any]]] = {}
        logger.info("Template system initialized")

    def __len__(self) -> int:
        return len(self._templates)

    def load_file(self, filename: str) -> int:
        """Load templates from a JSON file; returns the size of its array."""
        if not filename:
            raise ValueError("filename cannot be empty")
        try:
            with open(filename, encoding="utf-8") as handle:
                text = handle.read()
        except OSError as exc:
            raise TemplateError(f"failed to open template file: {filename}") from exc
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise TemplateError(f"failed to parse JSON from {filename}") from exc
        count = self.load_data(data)
        logger.info("Loaded %d templates from %s", count, filename)
        return count

    def load_data(self, data: Any) -> int:
        """Load templates from parsed JSON; returns the size of its array."""
        entries = data.get("templates") if isinstance(data, dict) else None
        if not isinstance(entries, list):
            raise TemplateError("no 'templates' array found")
        for entry in entries:
            if not isinstance(entry, dict):
                continue
            name = entry.get("name")
            if not isinstance(name, str):
                continue
            self._templates[name.casefold()] = (name, copy.deepcopy(entry))
        return len(entries)

    def names(self) -> list[str]:
        return [name for name, _ in self._templates.values()]

    def get(self, name: str) -> dict[str, Any]:
        """The template's JSON object, matched by exact name."""
        stored = self._templates.get(name.casefold())
        if stored is None or stored[0] != name:
            raise TemplateNotFoundError(f"template {name!r} not found")
        return copy.deepcopy(stored[1])

    def build_components(self, name: str) -> list[tuple[str, Any]]:
        """Components of a template as (type name, value) pairs.

        Entries of a type this module cannot build are returned with None.
        """
        template = self.get(name)
        components = template.get("components")
        if not isinstance(components, list):
            raise TemplateError(f"no components found in template {name!r}")
        built: list[tuple[str, Any]] = []
        for fields in components:
            if not isinstance(fields, dict):
                continue
            kind = fields.get("type")
            if not isinstance(kind, str):
                continue
            builder = _BUILDERS.get(kind.casefold())
            built.append((kind, builder(fields) if builder else None))
        return built

    def create_entity(self, name: str, world: EntityWorld) -> int:
        """Create an entity in ``world`` from the named template."""
        if not name:
            raise ValueError("template name cannot be empty")
        self.get(name)
        entity = world.create_entity()
        try:
            components = self.build_components(name)
        except TemplateError:
            world.destroy_entity(entity)
            raise
        for kind, data in components:
            try:
                component_id = world.component_id(kind)
            except KeyError:
                logger.warning(
                    "Unknown component type '%s' in template '%s'", kind, name
                )
                continue
            if data is not None:
                world.add_component(entity, component_id, data)
        logger.info("Created entity %d from template '%s'", entity, name)
        return entity

    def clear(self) -> None:
        self._templates.clear()