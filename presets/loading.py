"""Readers for the game data and preset documents.

Each reader parses a single already-located file into the immutable DTOs of
`rando_logic`. Documents ending in `.yml`/`.yaml` are parsed as YAML; anything
else as JSON.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterator

import yaml

from rando_logic.catalog import NotableCatalog, NotableEntry, TechCatalog
from rando_logic.presets import NotableSetting, Preset

_YAML_SUFFIXES = {".yml", ".yaml"}
_PRESET_KEYS = {"name", "tech", "notables"}


class PresetDataError(ValueError):
    """Raised when a game data or preset document is malformed."""


def _read_document(path: Path) -> Any:
    """Parse a JSON or YAML document."""

    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise PresetDataError(f"Unable to read {path}: {exc}") from exc
    try:
        if Path(path).suffix.lower() in _YAML_SUFFIXES:
            return yaml.safe_load(raw)
        return json.loads(raw)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise PresetDataError(f"Unable to parse {path}: {exc}") from exc


def _require(mapping: Any, key: str, expected: type, *, where: str) -> Any:
    """Return `mapping[key]` after checking its type."""

    if not isinstance(mapping, dict):
        raise PresetDataError(f"{where}: expected an object, got {type(mapping).__name__}.")
    if key not in mapping:
        raise PresetDataError(f"{where}: missing required field {key!r}.")
    value = mapping[key]
    # bool is an int subclass; identifiers must be real integers.
    if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
        raise PresetDataError(f"{where}: field {key!r} has invalid value {value!r}.")
    return value


def _walk_tech(techs: Any, *, where: str) -> Iterator[str]:
    """Yield tech names depth-first, extension tech after their parent."""

    if not isinstance(techs, list):
        raise PresetDataError(f"{where}: expected a list of tech.")
    for idx, tech in enumerate(techs):
        tech_where = f"{where}[{idx}]"
        yield _require(tech, "name", str, where=tech_where)
        yield from _walk_tech(tech.get("extensionTechs", []), where=f"{tech_where}.extensionTechs")


def load_tech_catalog(path: Path) -> TechCatalog:
    """Load the tech catalog from an sm-json-data style `tech.json`.

    Args:
        path: Path to a document shaped like
            `{"techCategories": [{"name": ..., "techs": [{"name": ..., "extensionTechs": [...]}]}]}`.

    Returns:
        TechCatalog in depth-first document order.
    """

    payload = _read_document(path)
    categories = _require(payload, "techCategories", list, where=str(path))
    names: list[str] = []
    for idx, category in enumerate(categories):
        where = f"{path}: techCategories[{idx}]"
        names.extend(_walk_tech(_require(category, "techs", list, where=where), where=f"{where}.techs"))
    try:
        return TechCatalog(names)
    except ValueError as exc:
        raise PresetDataError(f"{path}: {exc}") from exc


def load_notable_catalog(path: Path) -> NotableCatalog:
    """Load the notable catalog from a list of rooms.

    Args:
        path: Path to a document shaped like
            `[{"id": 38, "name": "Room", "notables": [{"id": 1, "name": "Strat"}]}]`.

    Returns:
        NotableCatalog ordered by room, then by notable within the room.
    """

    rooms = _read_document(path)
    if not isinstance(rooms, list):
        raise PresetDataError(f"{path}: expected a list of rooms.")
    entries: list[NotableEntry] = []
    for room_idx, room in enumerate(rooms):
        where = f"{path}: rooms[{room_idx}]"
        room_id = _require(room, "id", int, where=where)
        room_name = _require(room, "name", str, where=where)
        notables = room.get("notables", [])
        if not isinstance(notables, list):
            raise PresetDataError(f"{where}: 'notables' must be a list.")
        for notable_idx, notable in enumerate(notables):
            notable_where = f"{where}.notables[{notable_idx}]"
            entries.append(
                NotableEntry(
                    room_id=room_id,
                    notable_id=_require(notable, "id", int, where=notable_where),
                    room_name=room_name,
                    notable_name=_require(notable, "name", str, where=notable_where),
                )
            )
    try:
        return NotableCatalog(entries)
    except ValueError as exc:
        raise PresetDataError(f"{path}: {exc}") from exc


def _parse_notable_setting(raw: Any, *, where: str) -> NotableSetting:
    return NotableSetting(
        room_id=_require(raw, "room_id", int, where=where),
        notable_id=_require(raw, "notable_id", int, where=where),
        room_name=_require(raw, "room_name", str, where=where),
        notable_name=_require(raw, "notable_name", str, where=where),
    )


def _parse_preset(raw: Any, *, where: str) -> Preset:
    name = _require(raw, "name", str, where=where)
    tech = _require(raw, "tech", list, where=where)
    for idx, value in enumerate(tech):
        if not isinstance(value, str):
            raise PresetDataError(f"{where}.tech[{idx}]: expected a tech name, got {value!r}.")
    notables = _require(raw, "notables", list, where=where)
    return Preset(
        name=name,
        tech=tuple(tech),
        notables=tuple(
            _parse_notable_setting(item, where=f"{where}.notables[{idx}]") for idx, item in enumerate(notables)
        ),
        extra={key: value for key, value in raw.items() if key not in _PRESET_KEYS},
    )


def load_presets(path: Path) -> tuple[Preset, ...]:
    """Load the ordered preset list.

    Args:
        path: Path to a list of presets, easiest tier first.

    Returns:
        Presets in document order.
    """

    payload = _read_document(path)
    if not isinstance(payload, list):
        raise PresetDataError(f"{path}: expected a list of presets.")
    return tuple(_parse_preset(raw, where=f"{path}: presets[{idx}]") for idx, raw in enumerate(payload))
