"""Compile logic presets against the game data without starting the service.

Intended for operators editing `presets.json`: it reports every consistency
problem the start-up compile would abort on, or a per-preset summary. The
start-up compile in `PresetsConfig.ready` is skipped for this command so a
broken configuration reaches its `CommandError` path.
"""

from __future__ import annotations

from pathlib import Path

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from presets.loading import PresetDataError
from presets.registry import compile_preset_files


class Command(BaseCommand):
    """Validate and summarize logic presets."""

    help = "Compile logic presets against the tech and notable catalogs."

    def add_arguments(self, parser) -> None:
        """Add command arguments."""

        parser.add_argument("--presets", type=Path, help="Preset document (defaults to MAPRANDO_PRESETS_PATH).")
        parser.add_argument(
            "--tech-catalog",
            type=Path,
            help="Tech catalog document (defaults to MAPRANDO_TECH_CATALOG_PATH).",
        )
        parser.add_argument(
            "--notable-catalog",
            type=Path,
            help="Notable catalog document (defaults to MAPRANDO_NOTABLE_CATALOG_PATH).",
        )
        parser.add_argument(
            "--show-unlocks",
            action="store_true",
            help="List the tech and notables each preset newly unlocks.",
        )

    def handle(self, *args, **options) -> str | None:
        """Run the command."""

        presets_path: Path = options["presets"] or settings.MAPRANDO_PRESETS_PATH
        tech_path: Path = options["tech_catalog"] or settings.MAPRANDO_TECH_CATALOG_PATH
        notable_path: Path = options["notable_catalog"] or settings.MAPRANDO_NOTABLE_CATALOG_PATH
        show_unlocks: bool = options["show_unlocks"]

        try:
            result = compile_preset_files(
                presets_path=presets_path,
                tech_catalog_path=tech_path,
                notable_catalog_path=notable_path,
                implicit_tech=settings.MAPRANDO_IMPLICIT_TECH,
                ignored_tech=settings.MAPRANDO_IGNORED_TECH,
            )
        except PresetDataError as exc:
            raise CommandError(str(exc)) from exc

        if not result.is_valid:
            details = "\n".join(f"- {violation}" for violation in result.violations)
            raise CommandError(f"Preset compilation failed:\n{details}")

        self.stdout.write(
            f"presets={len(result.presets)} visible_tech={len(result.visible_tech)} "
            f"implicit_tech={len(result.implicit_tech)}"
        )
        for compiled in result.presets:
            enabled_tech = compiled.enabled_tech()
            enabled_notables = compiled.enabled_notables()
            self.stdout.write(
                f"preset={compiled.name} tech={len(enabled_tech)}/{len(compiled.tech_setting)} "
                f"notables={len(enabled_notables)}/{len(compiled.notable_setting)}"
            )
            if show_unlocks:
                for tech in compiled.preset.tech:
                    self.stdout.write(f"  + tech {tech}")
                for setting in compiled.preset.notables:
                    self.stdout.write(f"  + notable {setting.label}")

        self.stdout.write(self.style.SUCCESS("Presets are consistent with the game data."))
        return None
