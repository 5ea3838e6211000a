"""Process-wide compiled preset data.

Presets are compiled once at start-up (see `PresetsConfig.ready`) and shared
read-only for the rest of the process lifetime. Any inconsistency between the
presets and the game data catalogs prevents start-up.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from presets.loading import PresetDataError, load_notable_catalog, load_presets, load_tech_catalog
from rando_logic.catalog import GameCatalog
from rando_logic.compiler import PresetCompileResult, compile_presets

logger = logging.getLogger(__name__)

_PRESET_DATA: PresetCompileResult | None = None


def compile_preset_files(
    *,
    presets_path: Path,
    tech_catalog_path: Path,
    notable_catalog_path: Path,
    implicit_tech: list[str] | tuple[str, ...],
    ignored_tech: list[str] | tuple[str, ...],
) -> PresetCompileResult:
    """Load catalogs and presets from disk and compile them.

    Raises:
        PresetDataError: When a document cannot be read or is malformed.
    """

    catalog = GameCatalog(
        tech=load_tech_catalog(tech_catalog_path),
        notables=load_notable_catalog(notable_catalog_path),
    )
    presets = load_presets(presets_path)
    return compile_presets(presets, catalog, implicit_tech=implicit_tech, ignored_tech=ignored_tech)


def load_preset_data() -> PresetCompileResult:
    """Compile the configured presets and store them for the process.

    Returns:
        The valid PresetCompileResult.

    Raises:
        ImproperlyConfigured: When the data cannot be loaded or fails to compile.
    """

    global _PRESET_DATA

    logger.info("Loading logic preset data")
    start = time.perf_counter()
    try:
        result = compile_preset_files(
            presets_path=settings.MAPRANDO_PRESETS_PATH,
            tech_catalog_path=settings.MAPRANDO_TECH_CATALOG_PATH,
            notable_catalog_path=settings.MAPRANDO_NOTABLE_CATALOG_PATH,
            implicit_tech=settings.MAPRANDO_IMPLICIT_TECH,
            ignored_tech=settings.MAPRANDO_IGNORED_TECH,
        )
    except PresetDataError as exc:
        raise ImproperlyConfigured(f"Invalid logic preset data: {exc}") from exc

    if not result.is_valid:
        for violation in result.violations:
            logger.error("Preset violation: %s", violation)
        details = "\n".join(f"- {violation}" for violation in result.violations)
        raise ImproperlyConfigured(f"Logic presets are inconsistent with the game data:\n{details}")

    _PRESET_DATA = result
    logger.info(
        "Compiled %d logic presets (%d visible tech, %d implicit tech) in %.3fs",
        len(result.presets),
        len(result.visible_tech),
        len(result.implicit_tech),
        time.perf_counter() - start,
    )
    return result


def get_preset_data() -> PresetCompileResult:
    """Return the compiled presets, compiling them on first use."""

    if _PRESET_DATA is None:
        return load_preset_data()
    return _PRESET_DATA


def reset_preset_data() -> None:
    """Forget the compiled presets so the next access recompiles them."""

    global _PRESET_DATA
    _PRESET_DATA = None
