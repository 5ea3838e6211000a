"""Integration tests for reading game data and preset documents."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from presets.loading import PresetDataError, load_notable_catalog, load_presets, load_tech_catalog
from rando_logic.presets import NotableSetting

pytestmark = pytest.mark.integration


def _write_json(path: Path, payload: object) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_load_tech_catalog_flattens_extension_tech_depth_first(tmp_path: Path) -> None:
    """Extension tech follows its parent, categories keep document order."""

    path = _write_json(
        tmp_path / "tech.json",
        {
            "techCategories": [
                {
                    "name": "Movement",
                    "techs": [
                        {
                            "name": "canWalljump",
                            "extensionTechs": [
                                {"name": "canPreciseWalljump", "extensionTechs": [{"name": "canDelayedWalljump"}]}
                            ],
                        },
                        {"name": "canCrouchJump"},
                    ],
                },
                {"name": "Bombs", "techs": [{"name": "canIBJ"}]},
            ]
        },
    )

    catalog = load_tech_catalog(path)

    assert catalog.keys == ("canWalljump", "canPreciseWalljump", "canDelayedWalljump", "canCrouchJump", "canIBJ")


def test_load_tech_catalog_rejects_duplicate_names(tmp_path: Path) -> None:
    """Duplicate tech across categories is reported with the file name."""

    path = _write_json(
        tmp_path / "tech.json",
        {"techCategories": [{"techs": [{"name": "canIBJ"}]}, {"techs": [{"name": "canIBJ"}]}]},
    )

    with pytest.raises(PresetDataError, match="Duplicate tech"):
        load_tech_catalog(path)


def test_load_notable_catalog_orders_by_room_then_notable(tmp_path: Path) -> None:
    """Notables are listed room by room."""

    path = _write_json(
        tmp_path / "notables.json",
        [
            {"id": 38, "name": "Green Brinstar Main Shaft", "notables": [{"id": 1, "name": "Etecoon Climb"}]},
            {"id": 2, "name": "Empty Room"},
            {
                "id": 1,
                "name": "Landing Site",
                "notables": [{"id": 2, "name": "Gauntlet Walljump"}, {"id": 1, "name": "Ship Spark"}],
            },
        ],
    )

    catalog = load_notable_catalog(path)

    assert catalog.keys == ((38, 1), (1, 2), (1, 1))
    assert catalog.entry_at(1).room_name == "Landing Site"
    assert catalog.entry_at(1).notable_name == "Gauntlet Walljump"


def test_load_notable_catalog_rejects_non_integer_ids(tmp_path: Path) -> None:
    """Room and notable ids must be integers."""

    path = _write_json(tmp_path / "notables.json", [{"id": "38", "name": "Room", "notables": []}])

    with pytest.raises(PresetDataError, match="'id'"):
        load_notable_catalog(path)


def test_load_presets_keeps_order_and_extra_fields(tmp_path: Path) -> None:
    """Preset fields other than name/tech/notables are carried through."""

    path = _write_json(
        tmp_path / "presets.json",
        [
            {
                "name": "Basic",
                "shinespark_tiles": 32,
                "tech": ["canWalljump"],
                "notables": [
                    {"room_id": 38, "notable_id": 1, "room_name": "Green Brinstar Main Shaft", "notable_name": "Climb"}
                ],
            },
            {"name": "Hard", "tech": [], "notables": []},
        ],
    )

    presets = load_presets(path)

    assert [preset.name for preset in presets] == ["Basic", "Hard"]
    assert presets[0].tech == ("canWalljump",)
    assert presets[0].notables == (
        NotableSetting(room_id=38, notable_id=1, room_name="Green Brinstar Main Shaft", notable_name="Climb"),
    )
    assert presets[0].extra == {"shinespark_tiles": 32}
    assert presets[1].extra == {}


def test_load_presets_reads_yaml(tmp_path: Path) -> None:
    """YAML preset documents are accepted."""

    path = tmp_path / "presets.yml"
    path.write_text(
        "\n".join(
            [
                "- name: Basic",
                "  resource_multiplier: 3.0",
                "  tech: [canWalljump, canCrouchJump]",
                "  notables:",
                "    - {room_id: 1, notable_id: 2, room_name: Landing Site, notable_name: Gauntlet Walljump}",
                "",
            ]
        ),
        encoding="utf-8",
    )

    (preset,) = load_presets(path)

    assert preset.tech == ("canWalljump", "canCrouchJump")
    assert preset.notables[0].key == (1, 2)
    assert preset.extra == {"resource_multiplier": 3.0}


@pytest.mark.parametrize(
    ("payload", "match"),
    [
        ({"name": "Basic"}, "expected a list of presets"),
        ([{"tech": [], "notables": []}], "missing required field 'name'"),
        ([{"name": "Basic", "tech": ["canIBJ", 3], "notables": []}], r"tech\[1\]"),
        ([{"name": "Basic", "tech": [], "notables": [{"room_id": 1}]}], "missing required field 'notable_id'"),
    ],
)
def test_load_presets_rejects_malformed_documents(tmp_path: Path, payload: object, match: str) -> None:
    """Malformed preset documents raise PresetDataError naming the problem."""

    path = _write_json(tmp_path / "presets.json", payload)

    with pytest.raises(PresetDataError, match=match):
        load_presets(path)


def test_load_presets_reports_unreadable_files(tmp_path: Path) -> None:
    """Missing and unparsable files are PresetDataErrors."""

    broken = tmp_path / "broken.json"
    broken.write_text("[{", encoding="utf-8")

    with pytest.raises(PresetDataError, match="Unable to read"):
        load_presets(tmp_path / "missing.json")
    with pytest.raises(PresetDataError, match="Unable to parse"):
        load_presets(broken)
