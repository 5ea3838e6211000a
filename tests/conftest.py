"""Pytest fixtures shared across preset compiler tests."""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from rando_logic.catalog import GameCatalog, NotableCatalog, NotableEntry, TechCatalog
from rando_logic.presets import NotableSetting, Preset


def make_setting(room_id: int, notable_id: int, room_name: str = "Room", notable_name: str = "Strat") -> NotableSetting:
    """Build a NotableSetting with placeholder display names."""

    return NotableSetting(room_id=room_id, notable_id=notable_id, room_name=room_name, notable_name=notable_name)


def make_catalog(tech: Sequence[str], notables: Sequence[tuple[int, int]] = ()) -> GameCatalog:
    """Build a GameCatalog from tech names and `(room_id, notable_id)` keys."""

    return GameCatalog(
        tech=TechCatalog(tech),
        notables=NotableCatalog(
            NotableEntry(
                room_id=room_id,
                notable_id=notable_id,
                room_name=f"Room {room_id}",
                notable_name=f"Strat {notable_id}",
            )
            for room_id, notable_id in notables
        ),
    )


@pytest.fixture
def tiered_catalog() -> GameCatalog:
    """Return a catalog with implicit, ignored and visible tech plus four notables."""

    return make_catalog(
        tech=("canWalljump", "canAlwaysOn", "canMockball", "canHidden", "canShinespark", "canIBJ"),
        notables=((1, 1), (1, 2), (38, 1), (154, 1)),
    )


@pytest.fixture
def tiered_presets() -> tuple[Preset, ...]:
    """Return three presets that exactly cover `tiered_catalog`."""

    return (
        Preset(name="Basic", tech=("canWalljump",), notables=(make_setting(38, 1),)),
        Preset(
            name="Medium",
            tech=("canMockball", "canIBJ"),
            notables=(make_setting(1, 2), make_setting(1, 1)),
            extra={"shinespark_tiles": 28},
        ),
        Preset(name="Hard", tech=("canShinespark",), notables=(make_setting(154, 1),)),
    )


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    The suite is runnable by intent:
    - `unit`: pure, fast tests with no Django or file access.
    - `integration`: tests touching Django, management commands, or files.

    Each test must have exactly one of these markers.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )
