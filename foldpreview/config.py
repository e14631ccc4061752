"""Persistent JSON config helpers.

Stores the fold filler glyph, suffix format, preferred highlighter, and theme.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

from .fold_text import DEFAULT_FILLER, DEFAULT_SUFFIX_FORMAT
from .highlights import HIGHLIGHTERS
from .width import display_width

APP_NAME = "foldpreview"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def load_config() -> dict[str, object]:
    """Return the user's fold-preview settings as a dict.

    A missing, unreadable, or non-object config file yields ``{}`` so every
    ``load_*`` helper falls back to its built-in default.
    """
    try:
        text = CONFIG_PATH.read_text(encoding="utf-8")
        data = json.loads(text)
    except (OSError, ValueError):
        return {}
    if not isinstance(data, dict):
        return {}
    return data


def save_config(data: dict[str, object]) -> None:
    """Write fold-preview settings back to ``CONFIG_PATH``.

    Saving is best-effort: a read-only config directory must not stop a fold
    row from being printed.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    except (OSError, TypeError, ValueError):
        pass


def _update_config(key: str, value: object) -> None:
    config = load_config()
    config[key] = value
    save_config(config)


def is_valid_filler(value: object) -> bool:
    """Return whether ``value`` is a single-column printable glyph."""
    return isinstance(value, str) and len(value) == 1 and value.isprintable() and display_width(value) == 1


def is_valid_suffix_format(value: object) -> bool:
    """Accept printable format strings embedding ``{count}`` and nothing else."""
    if not isinstance(value, str) or "{count}" not in value or not value.isprintable():
        return False
    try:
        value.format(count=0)
    except (IndexError, KeyError, ValueError):
        return False
    return True


def load_filler() -> str:
    """Load the padding glyph, falling back to ``"."``."""
    value = load_config().get("filler")
    return value if is_valid_filler(value) else DEFAULT_FILLER


def save_filler(filler: str) -> None:
    """Persist padding glyph when it is a valid single-column character."""
    if not is_valid_filler(filler):
        return
    _update_config("filler", filler)


def load_suffix_format() -> str:
    """Load the suffix format string, falling back to the built-in default."""
    value = load_config().get("suffix_format")
    return value if is_valid_suffix_format(value) else DEFAULT_SUFFIX_FORMAT


def save_suffix_format(suffix_format: str) -> None:
    """Persist suffix format when it embeds ``{count}``."""
    if not is_valid_suffix_format(suffix_format):
        return
    _update_config("suffix_format", suffix_format)


def load_highlighter() -> str:
    """Load preferred highlighter name, defaulting to ``"auto"``."""
    value = load_config().get("highlighter")
    if not isinstance(value, str):
        return "auto"
    candidate = value.strip().lower()
    return candidate if candidate in HIGHLIGHTERS else "auto"


def load_theme_name() -> str | None:
    """Load persisted theme name, returning ``None`` when unset/invalid."""
    value = load_config().get("theme")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def save_highlighter(highlighter: str) -> None:
    """Persist preferred highlighter when it names a known provider set."""
    candidate = str(highlighter).strip().lower()
    if candidate not in HIGHLIGHTERS:
        return
    _update_config("highlighter", candidate)


def save_theme_name(theme_name: str) -> None:
    """Persist selected theme name."""
    stripped = str(theme_name).strip()
    if not stripped:
        return
    _update_config("theme", stripped)
