"""Django settings for the map randomizer web service.

Configuration is driven by environment variables so deployments can point the
service at their own game data and preset files without code changes.
"""

from __future__ import annotations

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

def _env_bool(name: str, *, default: bool) -> bool:
    """Parse a boolean environment variable.

    Args:
        name: Environment variable name.
        default: Value when the variable is not set.

    Returns:
        Parsed boolean value.
    """

    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


def _env_csv(name: str, *, default: list[str]) -> list[str]:
    """Parse a comma-separated environment variable into a list of strings.

    Args:
        name: Environment variable name.
        default: Value when the variable is not set.

    Returns:
        A list of non-empty, trimmed values.
    """

    raw = os.getenv(name)
    if raw is None:
        return default
    return [part.strip() for part in raw.split(",") if part.strip()]


def _env_path(name: str, *, default: Path) -> Path:
    """Parse a filesystem path environment variable."""

    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return Path(raw.strip()).expanduser()

DEBUG = _env_bool("DJANGO_DEBUG", default=True)

_DEV_SECRET_KEY = "dev-only-insecure-secret-key"
SECRET_KEY = os.getenv("DJANGO_SECRET_KEY") or (_DEV_SECRET_KEY if DEBUG else "")
if not SECRET_KEY:
    raise RuntimeError("DJANGO_SECRET_KEY is required when DJANGO_DEBUG is False.")

INSTALLED_APPS = [
    "presets.apps.PresetsConfig",
]

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "timestamped": {"format": "[{asctime} {levelname} {name}] {message}", "style": "{"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "timestamped"},
    },
    "loggers": {
        "presets": {
            "handlers": ["console"],
            "level": os.getenv("MAPRANDO_LOG_LEVEL", "INFO").upper(),
        },
    },
}

# Game data and preset inputs.
MAPRANDO_DATA_DIR = _env_path("MAPRANDO_DATA_DIR", default=BASE_DIR / "data")
MAPRANDO_PRESETS_PATH = _env_path("MAPRANDO_PRESETS_PATH", default=MAPRANDO_DATA_DIR / "presets.json")
MAPRANDO_TECH_CATALOG_PATH = _env_path("MAPRANDO_TECH_CATALOG_PATH", default=MAPRANDO_DATA_DIR / "tech.json")
MAPRANDO_NOTABLE_CATALOG_PATH = _env_path(
    "MAPRANDO_NOTABLE_CATALOG_PATH",
    default=MAPRANDO_DATA_DIR / "notables.json",
)

# Tech that is always enabled, outside the preset progression.
MAPRANDO_IMPLICIT_TECH: list[str] = _env_csv(
    "MAPRANDO_IMPLICIT_TECH",
    default=[
        "canSpecialBeamAttack",
        "canTrivialMidAirMorph",
        "canTurnaroundSpinJump",
        "canStopOnADime",
        "canUseGrapple",
        "canEscapeEnemyGrab",
        "canDownBack",
        "canTrivialUseFrozenEnemies",
    ],
)

# Tech not used by any strat in logic, hidden from every preset.
MAPRANDO_IGNORED_TECH: list[str] = _env_csv(
    "MAPRANDO_IGNORED_TECH",
    default=[
        "canSpikeSuit",  # needs more complete flash suit logic
        "canTrickyCarryFlashSuit",  # needs more complete flash suit logic
        "canElevatorCrystalFlash",  # needs more complete flash suit logic
        "canRiskPermanentLossOfAccess",  # unsound with the current randomizer
        "canEscapeMorphLocation",  # internal tech for the vanilla map option
    ],
)

MAPRANDO_COMPILE_PRESETS_ON_STARTUP = _env_bool("MAPRANDO_COMPILE_PRESETS_ON_STARTUP", default=True)
