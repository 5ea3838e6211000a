"""Typed diagnostics for preset/catalog consistency failures."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Literal

ViolationSubject = Literal["tech", "notable", "preset"]


class ViolationKind(StrEnum):
    """Kind of configuration-consistency violation.

    Values are stable identifiers used in diagnostics and tests.
    """

    unrecognized_identifier = "unrecognized_identifier"
    conflicting_classification = "conflicting_classification"
    duplicate_unlock = "duplicate_unlock"
    missing_coverage = "missing_coverage"
    extraneous_claim = "extraneous_claim"
    no_presets = "no_presets"


@dataclass(frozen=True, slots=True)
class PresetViolation:
    """A single consistency violation.

    Attributes:
        kind: Violation kind.
        subject: Which catalog the offending identifiers belong to.
        identifiers: Offending identifiers, in catalog order or sorted.
        message: Human-readable diagnostic.
    """

    kind: ViolationKind
    subject: ViolationSubject
    identifiers: tuple[str, ...]
    message: str

    def __str__(self) -> str:
        return f"[{self.kind}] {self.message}"


class PresetCompileError(Exception):
    """Raised when a preset configuration fails to compile."""

    def __init__(self, violations: tuple[PresetViolation, ...]) -> None:
        self.violations = violations
        super().__init__("; ".join(str(violation) for violation in violations))
