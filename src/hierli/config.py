"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles all persistent configuration for hierli:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.hierli/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **Global config** -- A single :class:`~hierli.models.GlobalConfig` JSON
  file holding the default path prefix, seed verbs and output format.
* **Project config** -- An optional ``./hierli.json`` pinning the prefix and
  seed verbs for the API in the current directory.
* **Precedence resolution** -- :func:`resolve_config` merges CLI flags,
  environment variables, project config, and global config into the
  effective configuration.

File writes use a temp-file-then-rename strategy (:func:`_atomic_write`) so
a crash never leaves a half-written config behind.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

from hierli.exceptions import ConfigError
from hierli.models import GlobalConfig, HierarchyConfig

_APP_NAME = "hierli"
_CONFIG_FILENAME = "config.json"
_PROJECT_CONFIG_FILENAME = "hierli.json"

ENV_PREFIX = "HIERLI_PREFIX"
ENV_SEED_VERBS = "HIERLI_SEED_VERBS"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True on platforms following the XDG Base Directory spec (Linux/BSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from *env_var*, falling back under ``$HOME``."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    return Path.home().joinpath(*default_segments)


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/hierli/`` (default ``~/.config/hierli/``).
    On macOS/Windows: ``~/.hierli/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/hierli/`` (default ``~/.local/share/hierli/``).
    On macOS/Windows: ``~/.hierli/data/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "data"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write *data* to *path* through a sibling temp file and ``os.replace``.

    The temp file is removed again if anything fails before the rename.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None and os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise


# --- Global config ---


def _global_config_path() -> Path:
    return get_config_dir() / _CONFIG_FILENAME


def load_global_config() -> GlobalConfig:
    """Load the global configuration, or defaults if the file does not exist.

    Raises:
        ConfigError: If the file exists but contains invalid JSON or fails
            Pydantic validation.
    """
    path = _global_config_path()
    if not path.is_file():
        return GlobalConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return GlobalConfig.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    """Persist *config* atomically to the config directory."""
    data = config.model_dump(mode="json")
    _atomic_write(_global_config_path(), json.dumps(data, indent=2) + "\n")


# --- Project-local config ---


def load_project_config() -> Optional[dict[str, Any]]:
    """Load ``./hierli.json`` from the working directory.

    The file may set ``prefix`` and ``seed_verbs``, e.g.::

        {"prefix": "/api/atlas/v2/", "seed_verbs": ["get", "list", "pause"]}

    Returns:
        The parsed JSON object, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file is not a valid JSON object.
    """
    path = Path.cwd() / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Project config at {path} must be a JSON object")
    return data


# --- Precedence resolution ---


def _split_verbs(value: str) -> list[str]:
    return [verb.strip() for verb in value.split(",") if verb.strip()]


def resolve_config(
    cli_prefix: Optional[str] = None,
    cli_seed_verbs: Optional[list[str]] = None,
    cli_format: Optional[str] = None,
) -> GlobalConfig:
    """Resolve the effective configuration.

    Precedence (high to low):
        1. CLI flags (``cli_prefix``, ``cli_seed_verbs``, ``cli_format``)
        2. Environment variables (``HIERLI_PREFIX``, ``HIERLI_SEED_VERBS``
           as a comma-separated list)
        3. Project config (``./hierli.json``)
        4. User config (``~/.config/hierli/config.json``)
        5. Defaults

    Returns:
        The merged :class:`~hierli.models.GlobalConfig`.

    Raises:
        ConfigError: If any layer holds an invalid value.
    """
    config = load_global_config()
    hierarchy = config.hierarchy.model_dump()

    project = load_project_config()
    if project is not None:
        for key in ("prefix", "seed_verbs"):
            if key in project:
                hierarchy[key] = project[key]

    env_prefix = os.environ.get(ENV_PREFIX)
    if env_prefix:
        hierarchy["prefix"] = env_prefix
    env_verbs = os.environ.get(ENV_SEED_VERBS)
    if env_verbs:
        hierarchy["seed_verbs"] = _split_verbs(env_verbs)

    if cli_prefix is not None:
        hierarchy["prefix"] = cli_prefix
    if cli_seed_verbs:
        hierarchy["seed_verbs"] = list(cli_seed_verbs)

    try:
        config = config.model_copy(
            update={"hierarchy": HierarchyConfig.model_validate(hierarchy)}
        )
    except ValueError as exc:
        raise ConfigError(f"Invalid hierarchy settings: {exc}") from exc

    if cli_format is not None:
        config.output.format = cli_format

    return config
