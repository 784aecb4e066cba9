from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from typing import Any, Mapping

import yaml
from dotenv import load_dotenv

from .defaults import DEFAULT_CONFIG
from .schema import AppConfig, EnvOverrides

# Flat field name (env vars, CLI flags) -> (YAML section, key in that section)
_FLAT_TO_SECTION: dict[str, tuple[str, str]] = {
    "main_url": ("provider", "main_url"),
    "http_timeout_seconds": ("http", "timeout_seconds"),
    "http_home_timeout_seconds": ("http", "home_timeout_seconds"),
    "http_max_concurrent": ("http", "max_concurrent"),
    "http_user_agent": ("http", "user_agent"),
    "log_level": ("logging", "level"),
    "log_format": ("logging", "format"),
}
_SECTIONS = frozenset(section for section, _ in _FLAT_TO_SECTION.values())


def _merge_into(target: dict[str, Any], layer: Mapping[str, Any]) -> dict[str, Any]:
    """Overlay *layer* onto *target* in place.

    Nested mappings are merged key by key; any other value replaces what
    *target* held.
    """
    for key, value in layer.items():
        current = target.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            _merge_into(current, value)
        else:
            target[key] = value
    return target


def _sectioned(layer: Mapping[str, Any]) -> dict[str, Any]:
    """Bring a config layer into the ``provider/http/logging`` section shape.

    A layer may mix both spellings (``{"http": {...}, "log_level": ...}``);
    flat keys win over the section entry they map to.
    """
    shaped: dict[str, Any] = {
        section: dict(layer[section])
        for section in _SECTIONS
        if isinstance(layer.get(section), Mapping)
    }
    if "environment" in layer:
        shaped["environment"] = layer["environment"]

    for flat_key, (section, key) in _FLAT_TO_SECTION.items():
        if flat_key in layer:
            shaped.setdefault(section, {})[key] = layer[flat_key]
    return shaped


def _require_file(path: Path) -> Path:
    if not path.exists():
        raise FileNotFoundError(path)
    return path


def _read_yaml_config(config_path: Path) -> dict[str, Any]:
    document = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if document is None:
        return {}
    if not isinstance(document, dict):
        raise ValueError(
            f"Config YAML must be a mapping, got: {type(document).__name__}"
        )
    return document


def load_config(
    *,
    config_path: Path | None = None,
    dotenv_path: Path | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> AppConfig:
    """
    Build the validated ``AppConfig``.

    Layers, lowest to highest: built-in defaults, YAML file, ``VIDEMBED_*``
    environment (including a ``.env`` file), CLI overrides. CLI values of
    ``None`` mean "flag not given" and are skipped.

    Never writes to the filesystem.
    """
    if dotenv_path is not None:
        # Existing environment variables keep priority over the .env file
        load_dotenv(_require_file(dotenv_path), override=False)

    merged = _sectioned(deepcopy(DEFAULT_CONFIG))

    if config_path is not None:
        _merge_into(merged, _sectioned(_read_yaml_config(_require_file(config_path))))

    _merge_into(merged, _sectioned(EnvOverrides().to_update_dict()))

    given = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    _merge_into(merged, _sectioned(given))

    return AppConfig.model_validate(merged)
