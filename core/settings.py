# core/settings.py
# Settings are per-script customisation options (physics rate, custom events).  Process-wide
# values like the log level should be set via configs and the .env file.

from pathlib import Path

import yaml

from core.config import SETTINGS_FILE_NAME


def load_settings(script_path: Path) -> dict:
    """
    Read the settings.yaml that sits beside the script.  A missing file means
    no settings.  Known keys are checked here so a typo fails at startup:
    physics_fps must be a positive integer and events a list of names.
    """
    settings_file = Path(script_path).parent / SETTINGS_FILE_NAME
    if not settings_file.exists():
        return {}
    with open(settings_file, "r", encoding="utf-8") as f:
        settings = yaml.safe_load(f) or {}

    if not isinstance(settings, dict):
        raise ValueError(f"{settings_file}: expected a mapping of settings")

    fps = settings.get("physics_fps")
    if fps is not None and (isinstance(fps, bool) or not isinstance(fps, int) or fps <= 0):
        raise ValueError(f"{settings_file}: physics_fps must be a positive integer, got {fps!r}")

    events = settings.get("events")
    if events is not None and (
            not isinstance(events, list) or not all(isinstance(name, str) for name in events)):
        raise ValueError(f"{settings_file}: events must be a list of event names")

    return settings


def load_handler_map(resource_path: Path) -> dict[str, list]:
    """
    Read the event registration resource: a mapping of event name to an
    (initially empty) list of handlers.  Every call returns fresh lists.
    """
    with open(resource_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"{resource_path}: expected a mapping of event names")

    handler_map: dict[str, list] = {}
    for name, handlers in data.items():
        if handlers is None:
            handlers = []
        if not isinstance(handlers, list):
            raise ValueError(f"{resource_path}: '{name}' must map to a list")
        handler_map[str(name)] = list(handlers)
    return handler_map
