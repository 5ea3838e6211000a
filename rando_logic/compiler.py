"""Preset compiler.

Presets form an ordered progression of difficulty tiers. Each tier newly
unlocks some tech and notable strategies, and every later tier includes
everything unlocked before it. The compiler turns that progression into
cumulative per-tier settings over the tech and notable catalogs, and verifies
that the tiers cover both catalogs exactly once.

The compiler is pure: it never terminates the process and performs no I/O.
Callers inspect the returned `PresetCompileResult` and decide whether to abort
start-up.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from .catalog import GameCatalog, NotableEntry, NotableKey
from .presets import CompiledPreset, NotableSetting, Preset
from .violations import PresetCompileError, PresetViolation, ViolationKind, ViolationSubject


@dataclass(frozen=True, slots=True)
class PresetCompileResult:
    """Outcome of compiling a preset sequence.

    Args:
        is_valid: True when no violations exist.
        presets: Compiled presets in input order; empty when invalid.
        visible_tech: Catalog tech shown in every tech vector, in catalog order.
        implicit_tech: Tech that is always enabled.
        violations: Consistency violations; empty when valid.
    """

    is_valid: bool
    presets: tuple[CompiledPreset, ...] = ()
    visible_tech: tuple[str, ...] = ()
    implicit_tech: frozenset[str] = frozenset()
    violations: tuple[PresetViolation, ...] = ()

    def raise_for_violations(self) -> None:
        """Raise `PresetCompileError` when the compilation failed."""

        if not self.is_valid:
            raise PresetCompileError(self.violations)

    def by_name(self, name: str) -> CompiledPreset | None:
        """Return the compiled preset with a given name, or None when missing."""

        for compiled in self.presets:
            if compiled.name == name:
                return compiled
        return None


def _violation(
    kind: ViolationKind,
    subject: ViolationSubject,
    identifiers: Iterable[str],
    message: str,
) -> PresetViolation:
    return PresetViolation(kind=kind, subject=subject, identifiers=tuple(identifiers), message=message)


def _failed(*violations: PresetViolation) -> PresetCompileResult:
    return PresetCompileResult(is_valid=False, violations=tuple(violations))


def _quoted(names: Iterable[str]) -> str:
    return ", ".join(f'"{name}"' for name in names)


def _notable_identifier(room_id: int, notable_id: int, room_name: str, notable_name: str) -> str:
    return f"({room_id}, {notable_id}) {room_name}: {notable_name}"


def _entry_identifier(entry: NotableEntry) -> str:
    return _notable_identifier(entry.room_id, entry.notable_id, entry.room_name, entry.notable_name)


def _setting_identifier(setting: NotableSetting) -> str:
    return _notable_identifier(setting.room_id, setting.notable_id, setting.room_name, setting.notable_name)


def compile_presets(
    presets: Sequence[Preset],
    catalog: GameCatalog,
    *,
    implicit_tech: Iterable[str] = (),
    ignored_tech: Iterable[str] = (),
) -> PresetCompileResult:
    """Compile an ordered preset sequence into cumulative settings.

    Args:
        presets: Presets from the easiest tier to the hardest.
        catalog: Tech and notable catalogs.
        implicit_tech: Tech that is always enabled, outside the progression.
        ignored_tech: Catalog tech hidden from every preset and from coverage checks.

    Returns:
        PresetCompileResult with one CompiledPreset per input preset, or the
        violation(s) that stopped compilation. Violations found during the pass
        stop it immediately; coverage gaps found after the pass are reported
        together, each naming every offending entry.
    """

    implicit = frozenset(implicit_tech)
    ignored = frozenset(ignored_tech)
    tech_catalog = catalog.tech
    notable_catalog = catalog.notables

    if not presets:
        return _failed(
            _violation(ViolationKind.no_presets, "preset", (), "At least one preset is required.")
        )

    unknown_ignored = sorted(name for name in ignored if name not in tech_catalog)
    if unknown_ignored:
        return _failed(
            _violation(
                ViolationKind.unrecognized_identifier,
                "tech",
                unknown_ignored,
                f"Unrecognized ignored tech {_quoted(unknown_ignored)}.",
            )
        )
    unknown_implicit = sorted(name for name in implicit if name not in tech_catalog)
    if unknown_implicit:
        return _failed(
            _violation(
                ViolationKind.unrecognized_identifier,
                "tech",
                unknown_implicit,
                f"Unrecognized implicit tech {_quoted(unknown_implicit)}.",
            )
        )
    both = sorted(implicit & ignored)
    if both:
        return _failed(
            _violation(
                ViolationKind.conflicting_classification,
                "tech",
                both,
                f"Tech is both ignored and implicit: {_quoted(both)}.",
            )
        )

    visible_indices = tuple(
        index for index, name in enumerate(tech_catalog.keys) if name not in ignored and name not in implicit
    )
    visible_tech = tuple(tech_catalog.name_at(index) for index in visible_indices)

    tech_claimed = [name in implicit for name in tech_catalog.keys]

    setting_by_key: dict[NotableKey, NotableSetting] = {}
    for preset in presets:
        for setting in preset.notables:
            if setting.key in setting_by_key:
                return _failed(
                    _violation(
                        ViolationKind.duplicate_unlock,
                        "notable",
                        (_setting_identifier(setting),),
                        f"Notable strat {setting.label} appears in presets more than once.",
                    )
                )
            setting_by_key[setting.key] = setting

    notable_claimed = [False] * len(notable_catalog)
    extraneous: dict[NotableKey, NotableSetting] = {}
    snapshots: list[tuple[Preset, tuple[bool, ...], tuple[bool, ...]]] = []
    for preset in presets:
        for name in preset.tech:
            if name in implicit or name in ignored:
                classification = "implicit" if name in implicit else "ignored"
                return _failed(
                    _violation(
                        ViolationKind.conflicting_classification,
                        "tech",
                        (name,),
                        f'Tech "{name}" is {classification} but appears in preset {preset.name}.',
                    )
                )
            index = tech_catalog.index_of(name)
            if index is None:
                return _failed(
                    _violation(
                        ViolationKind.unrecognized_identifier,
                        "tech",
                        (name,),
                        f'Unrecognized tech "{name}" appears in preset {preset.name}.',
                    )
                )
            if tech_claimed[index]:
                return _failed(
                    _violation(
                        ViolationKind.duplicate_unlock,
                        "tech",
                        (name,),
                        f'Tech "{name}" appears in presets more than once.',
                    )
                )
            tech_claimed[index] = True

        for setting in preset.notables:
            index = notable_catalog.index_of(setting.key)
            if index is None:
                extraneous.setdefault(setting.key, setting)
                continue
            if notable_claimed[index]:
                return _failed(
                    _violation(
                        ViolationKind.duplicate_unlock,
                        "notable",
                        (_setting_identifier(setting),),
                        f"Notable strat {setting.label} appears in presets more than once.",
                    )
                )
            notable_claimed[index] = True

        snapshots.append(
            (
                preset,
                tuple(tech_claimed[index] for index in visible_indices),
                tuple(notable_claimed),
            )
        )

    violations: list[PresetViolation] = []
    missing_tech = [tech_catalog.name_at(index) for index in visible_indices if not tech_claimed[index]]
    if missing_tech:
        violations.append(
            _violation(
                ViolationKind.missing_coverage,
                "tech",
                missing_tech,
                f"Tech not found in any preset: {_quoted(missing_tech)}.",
            )
        )
    missing_notables = [
        _entry_identifier(notable_catalog.entry_at(index))
        for index, claimed in enumerate(notable_claimed)
        if not claimed
    ]
    if missing_notables:
        violations.append(
            _violation(
                ViolationKind.missing_coverage,
                "notable",
                missing_notables,
                f"Notables not found in any preset: {'; '.join(missing_notables)}.",
            )
        )
    if extraneous:
        unrecognized = [_setting_identifier(extraneous[key]) for key in sorted(extraneous)]
        violations.append(
            _violation(
                ViolationKind.extraneous_claim,
                "notable",
                unrecognized,
                f"Unrecognized notable strats in presets: {'; '.join(unrecognized)}.",
            )
        )
    if violations:
        return _failed(*violations)

    catalog_settings = tuple(setting_by_key[entry.key] for entry in notable_catalog)
    compiled = tuple(
        CompiledPreset(
            preset=preset,
            tech_setting=tuple(zip(visible_tech, tech_flags)),
            notable_setting=tuple(zip(catalog_settings, notable_flags)),
            implicit_tech=implicit,
        )
        for preset, tech_flags, notable_flags in snapshots
    )
    return PresetCompileResult(
        is_valid=True,
        presets=compiled,
        visible_tech=visible_tech,
        implicit_tech=implicit,
    )
