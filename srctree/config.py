"""Persistent JSON defaults for command-line options.

Reads ``config.json`` from the platform user-config directory. All access is
defensive: a missing, unreadable or malformed file yields no defaults, and
values of the wrong type are ignored key by key.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "srctree"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

_INT_KEYS = ("depth", "max_size", "context")
_STR_KEYS = ("format", "sort", "direction")


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object, ``{}`` on any failure."""
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON; write errors are ignored."""
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        pass


def load_cli_defaults() -> dict[str, object]:
    """Return sanitized option defaults keyed by argparse destination name.

    Integers must be non-negative (``bool`` is rejected), ``exclude`` must be
    a list of strings and ``dirs_first`` a boolean.
    """
    data = load_config()
    defaults: dict[str, object] = {}
    for key in _INT_KEYS:
        value = data.get(key)
        if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
            defaults[key] = value
    for key in _STR_KEYS:
        value = data.get(key)
        if isinstance(value, str) and value:
            defaults[key] = value
    exclude = data.get("exclude")
    if isinstance(exclude, list) and all(isinstance(name, str) for name in exclude):
        defaults["exclude"] = list(exclude)
    dirs_first = data.get("dirs_first")
    if isinstance(dirs_first, bool):
        defaults["dirs_first"] = dirs_first
    return defaults


__all__ = ["APP_NAME", "CONFIG_PATH", "load_cli_defaults", "load_config", "save_config"]
