# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Resolver options: defaults, YAML options file and environment overrides.

Options Layers
--------------
1. **Built-in defaults** (ResolverConfig field defaults)
2. **Options file** (optional YAML mapping, e.g. settings-yaml.yaml)
3. **Environment variables** (highest priority)

Layers are combined with the same deep merge used for settings files.

Recognized Options
------------------
    base_path: instance            # root holding <instance>/ and _shared/
    shared_directory: _shared      # fallback directory name
    env_config_prefix: credentials # namespace for ${NAME} placeholders
    cache:
      enabled: true
      ttl: 86400                   # seconds
      prefix: settings             # cache key prefix
      directory: .settings-cache   # FileCache location

    credentials:                   # optional, read by the default provider
      API_KEY: "..."

Environment Overrides
---------------------
  - SETTINGS_YAML_BASE_PATH   -> base_path
  - SETTINGS_CACHE_ENABLED    -> cache.enabled (true/false/1/0/yes/no/on/off)
  - SETTINGS_CACHE_TTL        -> cache.ttl
  - SETTINGS_CACHE_DIRECTORY  -> cache.directory

Path Resolution
---------------
Relative ``base_path`` and ``cache.directory`` values from an options file
are resolved against the OPTIONS FILE location. Values from the
environment or from mappings without a root stay relative to the working
directory.

Error Handling
--------------
- FileNotFoundError: Options file doesn't exist
- ConfigError: YAML parse errors, non-mapping files, invalid option types
- All errors are chained with "from err" for better debugging
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
import os
from pathlib import Path
from typing import Any

import yaml

from settings_yaml.config.providers import (
    ChainConfigProvider,
    ConfigProvider,
    EnvironmentConfigProvider,
    MappingConfigProvider,
)
from settings_yaml.exceptions import ConfigError
from settings_yaml.merge import deep_merge

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

# -------------------------------
# Data types
# -------------------------------


@dataclass(frozen=True)
class CacheConfig:
    """Cache options for the resolver."""

    enabled: bool = True
    ttl: int = 86400
    prefix: str = "settings"
    directory: Path | None = None


@dataclass(frozen=True)
class ResolverConfig:
    """
    Options consumed by SettingsResolver.

    Attributes:
        base_path: Directory containing one subdirectory per instance plus
            the shared directory.
        shared_directory: Name of the shared defaults directory.
        cache: Cache options.
        env_config_prefix: Provider namespace used for ${NAME} lookups.
    """

    base_path: Path = field(default_factory=lambda: Path("instance"))
    shared_directory: str = "_shared"
    cache: CacheConfig = field(default_factory=CacheConfig)
    env_config_prefix: str = "credentials"

    @classmethod
    def from_mapping(
        cls, options: Mapping[str, Any], *, root: Path | None = None
    ) -> ResolverConfig:
        """
        Build a config from a plain mapping, validating option types.

        Unknown keys are ignored so an options file can carry other
        sections (such as ``credentials``).

        Raises
          ConfigError when an option has the wrong type.
        """
        cache_opts = options.get("cache") or {}
        if not isinstance(cache_opts, Mapping):
            raise ConfigError("option 'cache' must be a mapping")

        defaults = cls()
        base_path = _path_option(options, "base_path", root) or defaults.base_path
        cache = CacheConfig(
            enabled=_bool_option(cache_opts, "cache.enabled", True),
            ttl=_int_option(cache_opts, "cache.ttl", CacheConfig.ttl),
            prefix=_str_option(cache_opts, "cache.prefix", CacheConfig.prefix),
            directory=_path_option(cache_opts, "cache.directory", root),
        )
        return cls(
            base_path=base_path,
            shared_directory=_str_option(
                options, "shared_directory", defaults.shared_directory
            ),
            cache=cache,
            env_config_prefix=_str_option(
                options, "env_config_prefix", defaults.env_config_prefix
            ),
        )


# -------------------------------
# Option helpers
# -------------------------------


def _leaf(name: str) -> str:
    return name.rsplit(".", 1)[-1]


def _str_option(options: Mapping[str, Any], name: str, default: str) -> str:
    value = options.get(_leaf(name))
    if value is None:
        return default
    if not isinstance(value, str) or not value:
        raise ConfigError(f"option '{name}' must be a non-empty string, got {value!r}")
    return value


def _bool_option(options: Mapping[str, Any], name: str, default: bool) -> bool:
    value = options.get(_leaf(name))
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
    raise ConfigError(f"option '{name}' must be a boolean, got {value!r}")


def _int_option(options: Mapping[str, Any], name: str, default: int) -> int:
    value = options.get(_leaf(name))
    if value is None:
        return default
    if isinstance(value, bool):
        raise ConfigError(f"option '{name}' must be an integer, got {value!r}")
    try:
        number = int(value)
    except (TypeError, ValueError) as err:
        raise ConfigError(f"option '{name}' must be an integer, got {value!r}") from err
    if number < 0:
        raise ConfigError(f"option '{name}' must not be negative, got {number}")
    return number


def _path_option(
    options: Mapping[str, Any], name: str, root: Path | None
) -> Path | None:
    value = options.get(_leaf(name))
    if value is None:
        return None
    if not isinstance(value, (str, Path)) or not str(value):
        raise ConfigError(f"option '{name}' must be a path, got {value!r}")
    p = Path(value).expanduser()
    # Resolve only if the path is relative and we know where it came from
    if root is not None and not p.is_absolute():
        p = (root / p).resolve()
    return p


# -------------------------------
# YAML helpers
# -------------------------------


def load_options_file(p: Path) -> dict[str, Any]:
    """
    Load a YAML options file and return its top-level mapping.

    An empty file is an empty mapping.

    Raises:
      FileNotFoundError      - when file does not exist
      ConfigError            - for invalid YAML or a non-mapping document
    """
    if not p.exists():
        raise FileNotFoundError(f"file not found: {p}")
    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as err:
        raise ConfigError(f"Error parsing YAML: {p}: {err}") from err
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"top-level YAML must be a mapping (dict): {p}")
    return data


def environment_overrides(env: Mapping[str, str]) -> dict[str, Any]:
    """Translate SETTINGS_* environment variables into an options overlay."""
    overlay: dict[str, Any] = {}
    cache: dict[str, Any] = {}

    if env.get("SETTINGS_YAML_BASE_PATH"):
        overlay["base_path"] = env["SETTINGS_YAML_BASE_PATH"]
    if env.get("SETTINGS_CACHE_ENABLED"):
        cache["enabled"] = env["SETTINGS_CACHE_ENABLED"]
    if env.get("SETTINGS_CACHE_TTL"):
        cache["ttl"] = env["SETTINGS_CACHE_TTL"]
    if env.get("SETTINGS_CACHE_DIRECTORY"):
        cache["directory"] = env["SETTINGS_CACHE_DIRECTORY"]

    if cache:
        overlay["cache"] = cache
    return overlay


# -------------------------------
# Public API
# -------------------------------


def load_config(
    path: Path | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> ResolverConfig:
    """
    Load resolver options.

    Steps
      1) Read the options file (if given), resolving its relative paths
         against the file's directory.
      2) Overlay environment overrides.
      3) Validate into a ResolverConfig.

    Args:
      path: Optional YAML options file.
      env: Environment to read overrides from (default: os.environ).

    Raises
      FileNotFoundError if ``path`` is given but missing,
      ConfigError on YAML or validation errors.
    """
    env = os.environ if env is None else env

    file_config = ResolverConfig()
    if path is not None:
        path = path.resolve()
        file_config = ResolverConfig.from_mapping(
            load_options_file(path), root=path.parent
        )

    overlay = environment_overrides(env)
    if not overlay:
        return file_config

    merged = deep_merge(_as_mapping(file_config), overlay)
    return ResolverConfig.from_mapping(merged)


def default_provider(
    options: Mapping[str, Any] | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> ConfigProvider:
    """
    Provider used when the application does not supply one.

    Values from ``options`` (typically the parsed options file) win over
    environment variables.
    """
    return ChainConfigProvider(
        MappingConfigProvider(options or {}),
        EnvironmentConfigProvider(env),
    )


def _as_mapping(config: ResolverConfig) -> dict[str, Any]:
    cache: dict[str, Any] = {
        "enabled": config.cache.enabled,
        "ttl": config.cache.ttl,
        "prefix": config.cache.prefix,
    }
    if config.cache.directory is not None:
        cache["directory"] = str(config.cache.directory)
    return {
        "base_path": str(config.base_path),
        "shared_directory": config.shared_directory,
        "env_config_prefix": config.env_config_prefix,
        "cache": cache,
    }
