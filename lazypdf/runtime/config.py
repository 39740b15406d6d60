"""Persistent JSON settings.

Stores watcher debounce, render height, viewer command, image protocol and
the discovery glob. All access is defensive: malformed or missing config
falls back to defaults.
"""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from ..document import DEFAULT_RENDER_HEIGHT

APP_NAME = "lazypdf"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_DEBOUNCE_SECONDS = 2.0
DEFAULT_GLOB_PATTERN = "*.pdf"
IMAGE_PROTOCOL_CHOICES = ("auto", "iterm", "kitty")


def default_viewer_command() -> str:
    return "open" if sys.platform == "darwin" else "xdg-open"


@dataclass(frozen=True)
class Settings:
    """Effective runtime settings after config and CLI overrides."""

    debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS
    render_height: int = DEFAULT_RENDER_HEIGHT
    viewer_command: str = ""
    image_protocol: str = "auto"
    glob_pattern: str = DEFAULT_GLOB_PATTERN

    def __post_init__(self) -> None:
        if not self.viewer_command:
            object.__setattr__(self, "viewer_command", default_viewer_command())


def load_config(config_path: Path | None = None) -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    path = CONFIG_PATH if config_path is None else config_path
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def _positive_float(value: object) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value) if value > 0 else None


def _positive_int(value: object) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value > 0 else None


def _nonempty_str(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_settings(config_path: Path | None = None) -> Settings:
    """Build ``Settings`` from config, dropping invalid values key by key."""
    data = load_config(config_path)
    values: dict[str, object] = {}

    debounce = _positive_float(data.get("debounce_seconds"))
    if debounce is not None:
        values["debounce_seconds"] = debounce
    render_height = _positive_int(data.get("render_height"))
    if render_height is not None:
        values["render_height"] = render_height
    viewer = _nonempty_str(data.get("viewer_command"))
    if viewer is not None:
        values["viewer_command"] = viewer
    protocol = _nonempty_str(data.get("image_protocol"))
    if protocol in IMAGE_PROTOCOL_CHOICES:
        values["image_protocol"] = protocol
    pattern = _nonempty_str(data.get("glob_pattern"))
    if pattern is not None:
        values["glob_pattern"] = pattern

    return Settings(**values)
