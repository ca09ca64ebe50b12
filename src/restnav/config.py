"""Where restnav keeps its settings and how one run picks its profile.

On Linux and the BSDs the layout follows XDG; elsewhere everything lives
under ``~/.restnav``::

    <config>/config.json            GlobalConfig
    <config>/profiles/<name>.json   one Profile per API account
    <data>/logs/crash-*.log         written by the CLI on unexpected errors
    ./restnav.json                  {"default_profile": "<name>"}, per project

:func:`resolve_config` picks the profile for a run. The first of these that
names one wins: the ``--profile`` flag, ``RESTNAV_PROFILE``, the project
file, ``default_profile`` in the global config, and finally the only saved
profile when exactly one exists. ``--base-url`` and ``RESTNAV_BASE_URL``
then override the profile's host without touching the file on disk.

Auth tokens are never stored; a profile names a credential source instead
(:func:`resolve_credential`).
"""

from __future__ import annotations

import getpass
import json
import os
import platform
import sys
import tempfile
from pathlib import Path
from typing import Any, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from restnav.exceptions import ConfigError
from restnav.models import GlobalConfig, Profile

APP_NAME = "restnav"
PROJECT_FILE = "restnav.json"

ENV_PROFILE = "RESTNAV_PROFILE"
ENV_BASE_URL = "RESTNAV_BASE_URL"

_ModelT = TypeVar("_ModelT", bound=BaseModel)


# --- Directories ---


def _is_xdg_platform() -> bool:
    system = platform.system()
    return system == "Linux" or system.endswith("BSD")


def _app_dir(xdg_var: str, xdg_default: str, fallback: str = "") -> Path:
    if _is_xdg_platform():
        root = os.environ.get(xdg_var) or str(Path.home() / xdg_default)
        path = Path(root) / APP_NAME
    else:
        path = Path.home() / f".{APP_NAME}" / fallback
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_config_dir() -> Path:
    """``$XDG_CONFIG_HOME/restnav`` or ``~/.restnav``, created on demand."""
    return _app_dir("XDG_CONFIG_HOME", ".config")


def get_data_dir() -> Path:
    """``$XDG_DATA_HOME/restnav`` or ``~/.restnav/logs``, created on demand."""
    return _app_dir("XDG_DATA_HOME", ".local/share", "logs")


def get_profiles_dir() -> Path:
    path = get_config_dir() / "profiles"
    path.mkdir(exist_ok=True)
    return path


# --- JSON files ---


def _write_json(path: Path, payload: Any) -> None:
    """Replace *path* with *payload* through a rename, never a partial write."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(payload, fh, indent=2)
            fh.write("\n")
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp, path)
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise


def _read_json(path: Path, what: str) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except ValueError as exc:
        raise ConfigError(f"Invalid {what} at {path}: {exc}") from exc


def _load_model(model: type[_ModelT], path: Path, what: str) -> _ModelT:
    try:
        return model.model_validate(_read_json(path, what))
    except ValidationError as exc:
        raise ConfigError(f"Invalid {what} at {path}: {exc}") from exc


# --- Global config ---


def _global_config_path() -> Path:
    return get_config_dir() / "config.json"


def load_global_config() -> GlobalConfig:
    """The saved global config, or defaults when nothing is saved yet.

    Raises:
        ConfigError: If the file is not valid JSON or fails validation.
    """
    path = _global_config_path()
    if not path.is_file():
        return GlobalConfig()
    return _load_model(GlobalConfig, path, "global config")


def save_global_config(config: GlobalConfig) -> None:
    _write_json(_global_config_path(), config.model_dump(mode="json"))


def set_global_value(key: str, value: str) -> GlobalConfig:
    """Set one dotted key (``output.format``) in the global config and save it.

    *value* is coerced to the type of the field it replaces, so
    ``auto_select_single_profile false`` stores a boolean.

    Raises:
        ConfigError: For an unknown key, a value of the wrong type, or a
            result that fails validation. Nothing is saved in that case.
    """
    data = load_global_config().model_dump(mode="json")
    *parents, leaf = key.split(".")
    target = data
    for part in parents:
        target = target.get(part)
        if not isinstance(target, dict):
            raise ConfigError(f"Invalid config key: {key}")
    if leaf not in target:
        raise ConfigError(f"Unknown config key: {key}")

    target[leaf] = _coerce(key, target[leaf], value)
    try:
        config = GlobalConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid value for {key}: {exc}") from exc
    save_global_config(config)
    return config


def _coerce(key: str, current: Any, value: str) -> Any:
    if isinstance(current, bool):
        return value.lower() in ("true", "1", "yes")
    if isinstance(current, int):
        try:
            return int(value)
        except ValueError:
            raise ConfigError(f"Expected integer for {key}, got: {value}") from None
    return value


# --- Profiles ---


def _profile_path(name: str) -> Path:
    if not name or name.startswith(".") or "/" in name or "\\" in name:
        raise ConfigError(f"Invalid profile name: {name!r}")
    return get_profiles_dir() / f"{name}.json"


def list_profiles() -> list[str]:
    return sorted(p.stem for p in get_profiles_dir().glob("*.json") if p.is_file())


def profile_exists(name: str) -> bool:
    return _profile_path(name).is_file()


def load_profile(name: str) -> Profile:
    """Raises :class:`ConfigError` if the profile is missing or invalid."""
    path = _profile_path(name)
    if not path.is_file():
        raise ConfigError(f"Profile '{name}' not found at {path}")
    return _load_model(Profile, path, f"profile '{name}'")


def save_profile(profile: Profile) -> Path:
    path = _profile_path(profile.name)
    _write_json(path, profile.model_dump(mode="json"))
    return path


def delete_profile(name: str) -> None:
    path = _profile_path(name)
    if not path.is_file():
        raise ConfigError(f"Profile '{name}' not found at {path}")
    path.unlink()


# --- Project pin ---


def load_project_config() -> Optional[dict[str, Any]]:
    """Contents of ``./restnav.json``, or ``None`` when there is none."""
    path = Path.cwd() / PROJECT_FILE
    if not path.is_file():
        return None
    data = _read_json(path, "project config")
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected an object")
    return data


def pin_project_profile(name: str) -> Path:
    """Make *name* the default profile for the current directory."""
    path = Path.cwd() / PROJECT_FILE
    _write_json(path, {"default_profile": name})
    return path


# --- Resolution ---


def resolve_config(
    cli_profile: Optional[str] = None,
    cli_base_url: Optional[str] = None,
) -> tuple[GlobalConfig, Optional[Profile]]:
    """Return the global config and the profile this run should use.

    The returned profile is a copy; host overrides never reach the saved
    file. ``None`` means no source named a profile.
    """
    global_cfg = load_global_config()
    project = load_project_config() or {}
    name = next(
        (
            candidate
            for candidate in (
                cli_profile,
                os.environ.get(ENV_PROFILE),
                project.get("default_profile"),
                global_cfg.default_profile,
            )
            if candidate
        ),
        None,
    )
    if name is None and global_cfg.auto_select_single_profile:
        saved = list_profiles()
        if len(saved) == 1:
            name = saved[0]
    if name is None:
        return global_cfg, None

    profile = load_profile(name)
    base_url = cli_base_url or os.environ.get(ENV_BASE_URL)
    if base_url:
        profile = profile.model_copy(update={"base_url": base_url})
    return global_cfg, profile


# --- Credentials ---


def resolve_credential(source: str) -> str:
    """Read a secret from ``env:VAR``, ``file:/path`` or ``prompt``.

    Raises:
        ConfigError: If the variable is unset, the file is unreadable,
            ``prompt`` is used without a TTY, or the scheme is unknown.
    """
    if source == "prompt":
        if not sys.stdin.isatty():
            raise ConfigError("Cannot prompt for credentials: stdin is not a TTY (source: prompt)")
        return getpass.getpass("Auth token: ")

    scheme, _, target = source.partition(":")
    if scheme == "env" and target:
        value = os.environ.get(target)
        if value is None:
            raise ConfigError(f"Environment variable '{target}' is not set (source: {source})")
        return value
    if scheme == "file" and target:
        path = Path(target).expanduser()
        try:
            return path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            raise ConfigError(f"Credential file not found: {path} (source: {source})") from None
        except OSError as exc:
            raise ConfigError(f"Cannot read credential file {path}: {exc}") from exc
    raise ConfigError(f"Unknown credential source format: {source}")


def resolve_auth_token(profile: Profile) -> Optional[str]:
    """The profile's auth token, or ``None`` when it names no source."""
    if not profile.auth_token_source:
        return None
    return resolve_credential(profile.auth_token_source)
