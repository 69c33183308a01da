import json
import os
from dataclasses import dataclass, fields
from typing import Optional


PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
SETTINGS_PATH = os.path.join(PROJECT_ROOT, "config", "settings.json")
SETTINGS_RELATIVE = os.path.join("config", "settings.json")


@dataclass
class Settings:
    rembg_model: str = "isnet-general-use"
    max_workers: int = 4
    default_color_count: int = 5
    default_quality: int = 80
    default_format: str = "jpeg"
    output_dir: str = "output"
    debug_buffer: bool = False


def _resolve_path(base: str, relative: str) -> str:
    return os.path.abspath(os.path.join(base, relative))


def find_settings_path() -> str:
    """Return config/settings.json from the working directory, else the one next to the package."""
    local = os.path.abspath(SETTINGS_RELATIVE)
    if os.path.exists(local) or not os.path.exists(SETTINGS_PATH):
        return local
    return SETTINGS_PATH


def _finalize(settings: Settings) -> Settings:
    # relative output dirs are relative to where the tool is run
    settings.output_dir = _resolve_path(os.getcwd(), settings.output_dir)
    return settings


def load_settings(path: Optional[str] = None) -> Settings:
    """Load tool defaults from config/settings.json, falling back to built-in values."""
    settings_path = path or find_settings_path()
    settings = Settings()

    if not os.path.exists(settings_path):
        print(f"Warning: settings.json not found at {settings_path}")
        return _finalize(settings)

    try:
        with open(settings_path, "r", encoding="utf-8") as settings_file:
            raw = json.load(settings_file) or {}
        if not isinstance(raw, dict):
            raise ValueError("settings must be a JSON object")
    except (OSError, ValueError) as exc:
        print(f"Warning: Could not load settings from {settings_path}: {exc}")
        return _finalize(settings)

    for f in fields(Settings):
        if f.name not in raw:
            continue
        value = raw[f.name]
        default = getattr(settings, f.name)
        if not isinstance(value, type(default)) or (isinstance(value, bool) and not isinstance(default, bool)):
            print(f"Warning: ignoring setting '{f.name}' with unexpected value {value!r}")
            continue
        setattr(settings, f.name, value)

    if not 1 <= settings.default_color_count <= 10:
        print(f"Warning: default_color_count must be within 1..10, got {settings.default_color_count}")
        settings.default_color_count = Settings.default_color_count
    if settings.max_workers < 1:
        print(f"Warning: max_workers must be positive, got {settings.max_workers}")
        settings.max_workers = Settings.max_workers

    return _finalize(settings)
