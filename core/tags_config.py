"""Tagging configuration loading.

Settings come from an optional YAML (or JSON) file, then environment
variables, then command-line flags. Non-strict loading falls back to
defaults with a warning; strict loading raises ``ConfigValidationError``.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Optional

import yaml

# Haskell source extensions
HASKELL_EXTENSIONS: tuple[str, ...] = (".hs",)

# Directories never descended into during discovery
EXCLUDED_DIRS: tuple[str, ...] = (
    ".stack-work",
    "__pycache__",
    "build",
    "dist",
    "dist-newstyle",
    "node_modules",
)

OUTPUT_FORMATS: tuple[str, ...] = ("ctags", "jsonl")

logger = logging.getLogger(__name__)


class ConfigValidationError(RuntimeError):
    """Raised when strict configuration validation fails."""


@dataclass(frozen=True)
class TagsConfig:
    """Tag generation settings."""

    extensions: tuple[str, ...] = HASKELL_EXTENSIONS
    exclude_dirs: tuple[str, ...] = EXCLUDED_DIRS
    sort_output: bool = True
    emit_header: bool = True
    continue_on_error: bool = True
    output_format: str = "ctags"


_BOOL_KEYS = {"sort_output", "emit_header", "continue_on_error"}
_LIST_KEYS = {"extensions", "exclude_dirs"}
_KNOWN_KEYS = {f.name for f in fields(TagsConfig)}


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def resolve_strict_config_validation(default: bool = False) -> bool:
    """Resolve strict validation mode from ``HSTAGS_STRICT_CONFIG`` env."""
    return _env_flag("HSTAGS_STRICT_CONFIG", default=default)


def _fail(msg: str, strict: bool) -> None:
    if strict:
        raise ConfigValidationError(msg)
    logger.warning("%s; ignoring", msg)


def _normalize_extension(ext: str) -> str:
    ext = ext.strip()
    if ext and not ext.startswith("."):
        ext = "." + ext
    return ext


def _load_payload(path: str, strict: bool) -> dict[str, Any]:
    config_path = Path(path)
    try:
        text = config_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        msg = f"Config file not found: {path}"
        if strict:
            raise ConfigValidationError(msg) from exc
        logger.warning("%s; continuing with defaults", msg)
        return {}

    try:
        if config_path.suffix.lower() == ".json":
            payload = json.loads(text)
        else:
            payload = yaml.safe_load(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        msg = f"Failed to parse config at {path}: {exc}"
        if strict:
            raise ConfigValidationError(msg) from exc
        logger.warning("%s; continuing with defaults", msg)
        return {}

    if payload is None:
        return {}
    if not isinstance(payload, dict):
        _fail(f"Unexpected config payload type: {type(payload).__name__}", strict)
        return {}
    return payload


def _coerce_settings(payload: dict[str, Any], strict: bool) -> dict[str, Any]:
    settings: dict[str, Any] = {}
    for key, value in payload.items():
        if key not in _KNOWN_KEYS:
            _fail(f"Unknown config key '{key}'", strict)
            continue
        if key in _BOOL_KEYS:
            if not isinstance(value, bool):
                _fail(f"Config key '{key}' must be a boolean", strict)
                continue
            settings[key] = value
        elif key in _LIST_KEYS:
            if isinstance(value, str):
                value = [value]
            if not isinstance(value, list) or not all(
                isinstance(item, str) for item in value
            ):
                _fail(f"Config key '{key}' must be a list of strings", strict)
                continue
            if key == "extensions":
                value = [_normalize_extension(v) for v in value]
            settings[key] = tuple(v for v in value if v)
        elif key == "output_format":
            if value not in OUTPUT_FORMATS:
                _fail(
                    f"output_format must be one of {sorted(OUTPUT_FORMATS)}, "
                    f"got {value!r}",
                    strict,
                )
                continue
            settings[key] = value
    return settings


def _env_overrides() -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    if os.getenv("HSTAGS_SORT") is not None:
        overrides["sort_output"] = _env_flag("HSTAGS_SORT")
    raw_extensions = os.getenv("HSTAGS_EXTENSIONS")
    if raw_extensions:
        extensions = tuple(
            _normalize_extension(ext)
            for ext in raw_extensions.split(",")
            if ext.strip()
        )
        if extensions:
            overrides["extensions"] = extensions
    return overrides


def load_tags_config(
    path: Optional[str] = None,
    strict: bool = False,
) -> TagsConfig:
    """Load tagging configuration.

    Args:
        path: Optional YAML or ``.json`` config file.
        strict: Raise on missing files, parse errors, unknown keys and
            invalid values instead of warning.

    Returns:
        The resolved TagsConfig, with environment overrides applied.

    Raises:
        ConfigValidationError: In strict mode, on any invalid input.
    """
    config = TagsConfig()
    if path is not None:
        payload = _load_payload(path, strict)
        config = replace(config, **_coerce_settings(payload, strict))
    return replace(config, **_env_overrides())
