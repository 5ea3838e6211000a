"""Django app configuration for logic presets."""

from __future__ import annotations

import sys
from pathlib import Path

from django.apps import AppConfig
from django.conf import settings

# Commands that compile presets themselves and report failures as CommandError.
_SELF_COMPILING_COMMANDS = frozenset({"check_presets"})


def _running_self_compiling_command(argv: list[str]) -> bool:
    """Return whether the process is a management command that compiles presets itself."""

    if len(argv) < 2:
        return False
    program = Path(argv[0]).name
    if program not in {"manage.py", "django-admin", "django-admin.py", "__main__.py"}:
        return False
    return argv[1] in _SELF_COMPILING_COMMANDS


class PresetsConfig(AppConfig):
    """AppConfig that compiles logic presets at start-up."""

    name = "presets"

    def ready(self) -> None:
        """Compile presets before the service accepts any traffic."""

        if not settings.MAPRANDO_COMPILE_PRESETS_ON_STARTUP:
            return
        if _running_self_compiling_command(sys.argv):
            return

        from presets.registry import load_preset_data

        load_preset_data()
