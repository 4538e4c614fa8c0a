"""Configuration management with XDG paths and precedence resolution.

This module resolves the effective :class:`~openapi_slicer.models.SlicerConfig`:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.openapi-slicer/`` on macOS and Windows. See :func:`get_config_dir`
  and :func:`get_data_dir`.
* **User config** -- ``<config_dir>/config.json``.
* **Project config** -- ``./openapi-slicer.json`` in the working directory.
* **Precedence resolution** -- :func:`resolve_config` merges CLI flags,
  environment variables, project-local config, and user config into the
  final effective configuration.
"""

from __future__ import annotations

import json
import os
import platform
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from openapi_slicer.exceptions import ConfigError
from openapi_slicer.models import SlicerConfig

_APP_NAME = "openapi-slicer"
_CONFIG_FILENAME = "config.json"
_PROJECT_CONFIG_FILENAME = "openapi-slicer.json"

_ENV_PREFIX = "OPENAPI_SLICER_"
_ENV_FIELDS = ("strict", "indent", "format")

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory without creating it.

    On Linux/BSD: ``$XDG_CONFIG_HOME/openapi-slicer/`` (default
    ``~/.config/openapi-slicer/``). On macOS/Windows: ``~/.openapi-slicer/``.
    """
    if _is_xdg_platform():
        return _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    return _fallback_base_dir()


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/openapi-slicer/`` (default
    ``~/.local/share/openapi-slicer/``). On macOS/Windows:
    ``~/.openapi-slicer/``, shared with the config directory.

    Returns:
        Absolute path to the data directory (guaranteed to exist).
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Config files ---


def _read_json_config(path: Path, label: str) -> Optional[dict[str, Any]]:
    """Read a JSON config file, returning ``None`` when it does not exist.

    Raises:
        ConfigError: If the file contains invalid JSON or is not an object.
    """
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid {label} config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid {label} config at {path}: expected a JSON object")
    return data


def load_user_config() -> Optional[dict[str, Any]]:
    """Load ``<config_dir>/config.json``, or ``None`` if absent."""
    return _read_json_config(get_config_dir() / _CONFIG_FILENAME, "user")


def load_project_config() -> Optional[dict[str, Any]]:
    """Load ``./openapi-slicer.json``, or ``None`` if absent.

    Project-local config sits between the user config and environment
    variables in the precedence chain, so a repository can pin e.g.
    ``"strict": true`` for everyone working on it.
    """
    return _read_json_config(Path.cwd() / _PROJECT_CONFIG_FILENAME, "project")


def _env_overrides() -> dict[str, Any]:
    """Collect ``OPENAPI_SLICER_*`` environment overrides.

    Raises:
        ConfigError: If ``OPENAPI_SLICER_STRICT`` is not a recognised boolean.
    """
    overrides: dict[str, Any] = {}
    for name in _ENV_FIELDS:
        value = os.environ.get(_ENV_PREFIX + name.upper())
        if value is None:
            continue
        if name == "strict":
            lowered = value.strip().lower()
            if lowered in _TRUE_VALUES:
                overrides["strict"] = True
            elif lowered in _FALSE_VALUES:
                overrides["strict"] = False
            else:
                raise ConfigError(
                    f"Invalid boolean for {_ENV_PREFIX}STRICT: {value!r}"
                )
        elif name == "format":
            overrides["output_format"] = value.strip().lower()
        else:
            overrides[name] = value.strip()
    return overrides


# --- Precedence resolution ---


def resolve_config(
    cli_strict: Optional[bool] = None,
    cli_indent: Optional[int] = None,
    cli_format: Optional[str] = None,
) -> SlicerConfig:
    """Resolve config with full precedence chain.

    Precedence (high to low):
        1. CLI flags (``cli_strict``, ``cli_indent``, ``cli_format``)
        2. Environment variables (``OPENAPI_SLICER_STRICT``,
           ``OPENAPI_SLICER_INDENT``, ``OPENAPI_SLICER_FORMAT``)
        3. Project config (``./openapi-slicer.json``)
        4. User config (``~/.config/openapi-slicer/config.json``)
        5. Defaults

    Returns:
        The validated :class:`~openapi_slicer.models.SlicerConfig`.

    Raises:
        ConfigError: If any layer contains invalid JSON or values.
    """
    merged: dict[str, Any] = {}

    # 4. User config
    user = load_user_config()
    if user is not None:
        merged.update(user)

    # 3. Project-local config
    project = load_project_config()
    if project is not None:
        merged.update(project)

    # 2. Environment variables
    merged.update(_env_overrides())

    # 1. CLI flags (highest precedence)
    if cli_strict is not None:
        merged["strict"] = cli_strict
    if cli_indent is not None:
        merged["indent"] = cli_indent
    if cli_format is not None:
        merged["output_format"] = cli_format

    try:
        return SlicerConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
