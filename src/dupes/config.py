"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

config.py
Defaults for CLI options, read from a TOML file and DUPES_* environment variables.

Precedence: command-line flag > environment > config file > built-in default.

Example ~/.dupes.toml:

    ignore_dotfiles = true
    max_size = "1GB"
    algorithm = "sha256"
    trash = true
"""
import os
import logging
import tomllib
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Optional, Mapping, Dict, Any

from dupes.core.models import ConfigError, DEFAULT_MAX_SIZE
from dupes.core.hasher import ALGORITHMS
from dupes.utils.convert_utils import ConvertUtils

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = ".dupes.toml"
ENV_PREFIX = "DUPES_"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class DupesConfig:
    ignore_dotfiles: bool = False
    find_only: bool = False
    max_size: int = DEFAULT_MAX_SIZE
    algorithm: str = "sha256"
    trash: bool = False
    stop_on_error: bool = False


def default_config_path() -> Path:
    return Path.home() / DEFAULT_CONFIG_NAME


def _to_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigError(f"Invalid boolean for '{key}': {value!r}")


def _coerce(key: str, value: Any) -> Any:
    if key == "max_size":
        if isinstance(value, bool):
            raise ConfigError(f"Invalid size for 'max_size': {value!r}")
        try:
            size = ConvertUtils.human_to_bytes(str(value))
        except ValueError as e:
            raise ConfigError(f"Invalid size for 'max_size': {e}") from e
        if size <= 0:
            raise ConfigError("'max_size' must be positive")
        return size
    if key == "algorithm":
        name = str(value).strip().lower()
        if name not in ALGORITHMS:
            raise ConfigError(
                f"Unknown algorithm '{value}'. Valid options: {', '.join(ALGORITHMS)}"
            )
        return name
    return _to_bool(key, value)


def _apply(config: DupesConfig, values: Mapping[str, Any], source: str) -> DupesConfig:
    known = {f.name for f in fields(DupesConfig)}
    updates: Dict[str, Any] = {}
    for key, value in values.items():
        key = key.replace("-", "_")
        if key not in known:
            raise ConfigError(f"Unknown option '{key}' in {source}")
        updates[key] = _coerce(key, value)
    return replace(config, **updates)


def read_config_file(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid config file {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e.strerror or e}") from e


def env_overrides(environ: Mapping[str, str]) -> Dict[str, str]:
    known = {f.name for f in fields(DupesConfig)}
    overrides = {}
    for name in known:
        env_name = ENV_PREFIX + name.upper()
        if env_name in environ:
            overrides[name] = environ[env_name]
    return overrides


def load_config(path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> DupesConfig:
    """
    Build the effective defaults.

    An explicit path must exist; the default ~/.dupes.toml is optional.

    Raises:
        ConfigError: On unreadable files, unknown keys or invalid values.
    """
    config = DupesConfig()
    environ = os.environ if environ is None else environ

    if path is not None:
        config_path = Path(path).expanduser()
        if not config_path.is_file():
            raise ConfigError(f"Config file not found: {path}")
    else:
        config_path = default_config_path()

    if config_path.is_file():
        logger.debug(f"Using config file: {config_path}")
        config = _apply(config, read_config_file(config_path), str(config_path))

    overrides = env_overrides(environ)
    if overrides:
        config = _apply(config, overrides, "environment")

    return config
