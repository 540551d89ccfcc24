from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
import json
import logging
import os
from pathlib import Path
import tempfile
from typing import Any, Mapping

from .errors import SettingsError

CONFIG_DIR = Path.home() / ".inspectlocator"
CONFIG_PATH = CONFIG_DIR / "config.json"
LOG_DIR = CONFIG_DIR / "logs"

ENV_ENABLED = "INSPECTLOCATOR_ENABLED"
ENV_COLOR = "INSPECTLOCATOR_COLOR"
_FALSE_VALUES = {"0", "false", "no", "off"}

logger = logging.getLogger("inspectlocator")


@dataclass(slots=True)
class InspectorSettings:
    enabled: bool = True
    color: bool = True
    context_depth: int = 4
    log_to_file: bool = True


def parse_settings(payload: Mapping[str, Any]) -> InspectorSettings:
    settings = InspectorSettings()
    known = {item.name: item for item in fields(InspectorSettings)}
    updates: dict[str, Any] = {}
    for key, value in payload.items():
        if key not in known:
            continue
        default = getattr(settings, key)
        if isinstance(default, bool):
            if not isinstance(value, bool):
                raise SettingsError(f"{key} must be true or false, got {value!r}")
        elif isinstance(default, int):
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise SettingsError(f"{key} must be a non-negative integer, got {value!r}")
        updates[key] = value
    return replace(settings, **updates)


def load_settings(config_path: Path | None = None) -> InspectorSettings:
    path = config_path or CONFIG_PATH
    if not path.exists() or not path.is_file():
        return InspectorSettings()

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, TypeError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
        return InspectorSettings()

    if not isinstance(payload, dict):
        return InspectorSettings()

    try:
        return parse_settings(payload)
    except SettingsError as exc:
        logger.warning("Ignoring invalid settings file %s: %s", path, exc)
        return InspectorSettings()


def save_settings(settings: InspectorSettings, config_path: Path | None = None) -> tuple[bool, str | None]:
    path = config_path or CONFIG_PATH

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        return False, f"Could not create config folder: {exc}"

    payload = json.dumps(asdict(settings), ensure_ascii=True, indent=2, sort_keys=True)
    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=str(path.parent),
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as handle:
            handle.write(payload)
            handle.flush()
            temp_path = Path(handle.name)

        temp_path.replace(path)
    except OSError as exc:
        if temp_path and temp_path.exists():
            temp_path.unlink(missing_ok=True)
        return False, f"Could not write inspector settings: {exc}"

    return True, None


def apply_environment(settings: InspectorSettings, environ: Mapping[str, str] | None = None) -> InspectorSettings:
    env = os.environ if environ is None else environ
    updates: dict[str, bool] = {}
    enabled = env.get(ENV_ENABLED)
    if enabled is not None and enabled.strip():
        updates["enabled"] = enabled.strip().lower() not in _FALSE_VALUES
    color = env.get(ENV_COLOR)
    if color is not None and color.strip():
        updates["color"] = color.strip().lower() not in _FALSE_VALUES
    if "NO_COLOR" in env:
        updates["color"] = False
    return replace(settings, **updates)


def resolve_settings(config_path: Path | None = None, environ: Mapping[str, str] | None = None) -> InspectorSettings:
    return apply_environment(load_settings(config_path), environ)
