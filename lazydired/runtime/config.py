"""Persistent JSON config helpers.

Stores the listing display settings (sort order, time format, size and id
display, dot-file policy, detail mode) and the UI theme name.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

from ..errors import UnknownTimeFormatError
from ..listing.columns import DetailMode
from ..listing.filtering import FilterSettings
from ..listing.formatting import IdDisplay, SizeMode, lookup_time_format, time_format_name
from ..listing.sorting import DEFAULT_SORT_SPEC, parse_sort_spec
from ..settings import DEFAULT_SETTINGS, DiredSettings

logger = logging.getLogger(__name__)

APP_NAME = "lazydired"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.debug("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is logged and ignored to keep runtime
    behavior non-fatal when config cannot be written.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except (OSError, TypeError, ValueError) as exc:
        logger.debug("could not write config %s: %s", CONFIG_PATH, exc)


def _load_enum(value: object, enum_type, default):
    """Accept an enum member by lower-case name or integer value."""
    if isinstance(value, bool):
        return default
    if isinstance(value, str):
        key = value.strip().upper().replace("-", "_")
        return enum_type.__members__.get(key, default)
    if isinstance(value, int):
        try:
            return enum_type(value)
        except ValueError:
            return default
    return default


def _load_bool(value: object, default: bool) -> bool:
    return value if isinstance(value, bool) else default


def load_settings() -> DiredSettings:
    """Return persisted display settings, field by field over the defaults."""
    data = load_config()
    defaults = DEFAULT_SETTINGS

    sort_value = data.get("sort_mode")
    sort_spec = parse_sort_spec(sort_value, DEFAULT_SORT_SPEC) if isinstance(sort_value, str) else defaults.sort_spec

    time_format = defaults.time_format
    raw_time_format = data.get("time_format")
    if isinstance(raw_time_format, (str, int)) and not isinstance(raw_time_format, bool):
        try:
            time_format = lookup_time_format(raw_time_format)
        except UnknownTimeFormatError:
            logger.debug("ignoring unknown time format %r in config", raw_time_format)

    filter_settings = FilterSettings(
        show_dot_files=_load_bool(data.get("show_dot_files"), defaults.filter.show_dot_files),
        show_system_files=_load_bool(data.get("show_system_files"), defaults.filter.show_system_files),
    )
    return DiredSettings(
        sort_spec=sort_spec,
        time_format=time_format,
        size_mode=_load_enum(data.get("size_mode"), SizeMode, defaults.size_mode),
        id_display=_load_enum(data.get("id_display"), IdDisplay, defaults.id_display),
        filter=filter_settings,
        detail_mode=_load_enum(data.get("detail_mode"), DetailMode, defaults.detail_mode),
    )


def save_settings(settings: DiredSettings) -> None:
    """Persist display settings in readable form, keeping unrelated keys."""
    config = load_config()
    config["sort_mode"] = settings.sort_spec.to_grammar()
    config["time_format"] = time_format_name(settings.time_format)
    config["size_mode"] = SizeMode(settings.size_mode).name.lower()
    config["id_display"] = IdDisplay(settings.id_display).name.lower()
    config["show_dot_files"] = bool(settings.filter.show_dot_files)
    config["show_system_files"] = bool(settings.filter.show_system_files)
    config["detail_mode"] = DetailMode(settings.detail_mode).name.lower()
    save_config(config)


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    value = load_config().get("theme")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def save_theme_name(theme_name: str) -> None:
    """Persist selected UI theme name."""
    stripped = str(theme_name).strip()
    if not stripped:
        return
    config = load_config()
    config["theme"] = stripped
    save_config(config)
