"""User settings from ~/.storyof/settings.json."""

from __future__ import annotations

import json
from pathlib import Path

from storyof.constants import GLOBAL_SETTINGS_PATH


def load_settings(path: Path | None = None) -> dict:
    """Read settings leniently; a missing or malformed file yields ``{}``."""
    settings_path = path if path is not None else GLOBAL_SETTINGS_PATH
    try:
        if not settings_path.is_file():
            return {}
        payload = json.loads(settings_path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return payload if isinstance(payload, dict) else {}


def settings_template_path(settings: dict) -> Path | None:
    raw = settings.get("templatePath")
    if not isinstance(raw, str) or not raw.strip():
        return None
    return Path(raw.strip()).expanduser()
