"""Preset DTOs consumed and produced by the preset compiler."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from .catalog import NotableKey


@dataclass(frozen=True, slots=True)
class NotableSetting:
    """A preset's claim on one notable strategy.

    Attributes:
        room_id: Room identifier of the claimed notable.
        notable_id: Notable identifier within the room.
        room_name: Room display name, as written in the preset data.
        notable_name: Notable display name, as written in the preset data.
    """

    room_id: int
    notable_id: int
    room_name: str
    notable_name: str

    @property
    def key(self) -> NotableKey:
        """Return the composite `(room_id, notable_id)` key."""

        return (self.room_id, self.notable_id)

    @property
    def label(self) -> str:
        """Return the `room:notable` label used in diagnostics."""

        return f"{self.room_name}:{self.notable_name}"


@dataclass(frozen=True, slots=True)
class Preset:
    """A difficulty tier that newly unlocks tech and notable strategies.

    Attributes:
        name: Display name of the tier (e.g. "Basic").
        tech: Tech names newly unlocked by this tier, in file order.
        notables: Notable settings newly unlocked by this tier, in file order.
        extra: Remaining preset fields (shinespark tiles, leniency frames, ...),
            carried through to consumers unchanged. Stored as a read-only copy.
    """

    name: str
    tech: tuple[str, ...] = ()
    notables: tuple[NotableSetting, ...] = ()
    extra: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))


@dataclass(frozen=True, slots=True)
class CompiledPreset:
    """Cumulative settings for one preset.

    Attributes:
        preset: Source preset.
        tech_setting: `(tech, enabled)` pairs over the visible tech, in catalog order.
        notable_setting: `(setting, enabled)` pairs over the notable catalog, in catalog order.
        implicit_tech: Tech that is always enabled and not listed in `tech_setting`.
    """

    preset: Preset
    tech_setting: tuple[tuple[str, bool], ...]
    notable_setting: tuple[tuple[NotableSetting, bool], ...]
    implicit_tech: frozenset[str] = frozenset()

    @property
    def name(self) -> str:
        """Return the source preset name."""

        return self.preset.name

    def is_tech_enabled(self, tech: str) -> bool:
        """Return whether a tech is enabled at this tier.

        Implicit tech is always enabled; ignored and unknown tech never is.
        """

        if tech in self.implicit_tech:
            return True
        return any(name == tech and enabled for name, enabled in self.tech_setting)

    def is_notable_enabled(self, key: NotableKey) -> bool:
        """Return whether a notable strategy is enabled at this tier."""

        return any(setting.key == key and enabled for setting, enabled in self.notable_setting)

    def enabled_tech(self) -> tuple[str, ...]:
        """Return enabled visible tech in catalog order."""

        return tuple(name for name, enabled in self.tech_setting if enabled)

    def enabled_notables(self) -> tuple[NotableSetting, ...]:
        """Return enabled notable settings in catalog order."""

        return tuple(setting for setting, enabled in self.notable_setting if enabled)
