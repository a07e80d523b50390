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

"""Settings resolution with instance -> shared fallback.

Settings files live in one directory per instance, next to a shared
defaults directory:

    instance/
      _shared/theme.md      # defaults for every instance
      acme/theme.md         # overrides for "acme"

Resolving ``theme.md`` for ``acme``:

1. Return the cached result if caching applies and the entry is usable.
2. Parse ``_shared/theme.md`` (missing file -> empty metadata and body).
3. Parse ``acme/theme.md`` (missing file -> empty metadata and body).
4. Deep-merge the metadata, instance over shared.
5. Interpolate ``${NAME}`` placeholders from the credentials namespace.
6. Keep the instance body if it is non-empty, else the shared body.
7. Store the result in the cache (if caching applies) and return it.

Caching
-------
Caching is skipped entirely when any of these hold:
  - ``cache.enabled`` is false or no backend is configured
  - the backend is not persistent (MemoryCache)
  - the process is a test run (``testing=True``, or auto-detected from
    ``SETTINGS_YAML_TESTING`` / ``PYTEST_CURRENT_TEST``)

A cache entry that cannot be deserialized into complete settings is
forgotten and recomputed. A backend that raises (CacheError, OSError) is
bypassed for that call: the settings are computed from the source files.

Error Handling
--------------
- Missing settings files: not an error (empty fallback)
- FrontmatterError from the parser: propagated unchanged
- ConfigError: instance id or filename would escape the base path

Example:
    Basic usage:
        ```python
        from pathlib import Path
        from settings_yaml import SettingsResolver
        from settings_yaml.cache import FileCache
        from settings_yaml.config import ResolverConfig

        resolver = SettingsResolver(
            ResolverConfig(base_path=Path("instance")),
            cache=FileCache(Path(".settings-cache")),
        )
        theme = resolver.theme("acme")
        print(theme.get("colors.primary"))

        resolver.clear_cache("acme", ["theme.md"])
        ```
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import os
from pathlib import Path, PurePosixPath, PureWindowsPath
from typing import Any

import yaml

from settings_yaml.cache import (
    CacheBackend,
    FileCache,
    cache_key as build_cache_key,
    dumps_settings,
    loads_settings,
)
from settings_yaml.config import (
    ConfigProvider,
    ResolverConfig,
    default_provider,
    load_config,
)
from settings_yaml.exceptions import CacheError, ConfigError
from settings_yaml.frontmatter import FrontmatterParser, ParsedDocument
from settings_yaml.interpolate import EnvironmentInterpolator
from settings_yaml.logging import Logger, get_global_logger
from settings_yaml.merge import deep_merge
from settings_yaml.settings import Settings

__all__ = [
    "DEFAULT_FILES",
    "SettingsResolver",
    "get_default_resolver",
    "set_default_resolver",
]

# Well-known settings files, also the default set for clear_cache()
DEFAULT_FILES = ("theme.md", "main.md", "properties.md", "booking.md")

_TESTING_TRUE_VALUES = {"1", "true", "yes", "on"}


class SettingsResolver:
    """Resolves settings files for instances.

    Attributes:
        config: Resolver options.
        cache: Cache backend, or None when caching is not configured.

    Example:
        Resolve and read values:
            ```python
            resolver = SettingsResolver(ResolverConfig(base_path=Path("instance")))
            main = resolver.main("acme")
            main.get("site.name", "Untitled")
            ```
    """

    def __init__(
        self,
        config: ResolverConfig | None = None,
        *,
        provider: ConfigProvider | None = None,
        cache: CacheBackend | None = None,
        parser: FrontmatterParser | None = None,
        logger: Logger | None = None,
        testing: bool | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            config: Resolver options (defaults: ResolverConfig()).
            provider: Credentials lookup for placeholders. Defaults to
                environment variables (plus .env).
            cache: Cache backend. When omitted, a FileCache is created if
                ``config.cache.directory`` is set.
            parser: Settings document parser.
            logger: Logger; the global logger is used when omitted.
            testing: Force (True) or rule out (False) test-run mode.
                None auto-detects from the environment.
        """
        self.config = config or ResolverConfig()
        if cache is None and self.config.cache.directory is not None:
            cache = FileCache(self.config.cache.directory)
        self.cache = cache
        self._provider = provider if provider is not None else default_provider()
        self._parser = parser or FrontmatterParser()
        self._logger = logger
        self._testing = testing
        self._interpolator = EnvironmentInterpolator(
            self._provider, self.config.env_config_prefix
        )

    @property
    def logger(self) -> Logger:
        return self._logger if self._logger is not None else get_global_logger()

    # -------------------------------
    # Public API
    # -------------------------------

    def resolve(self, filename: str, instance_id: str) -> Settings:
        """Load settings with instance -> shared fallback.

        Args:
            filename: Settings file name relative to each instance directory
                (e.g., "theme.md").
            instance_id: Instance directory name.

        Returns:
            Resolved, read-only settings.

        Raises:
            ConfigError: If ``filename`` or ``instance_id`` is unsafe.
            FrontmatterError: If a settings file is malformed.
        """
        _check_instance_id(instance_id)
        _check_filename(filename)

        cache = self.cache
        if cache is None or not self.caching_active():
            return self.load_with_fallback(filename, instance_id)

        key = self.cache_key(instance_id, filename)
        settings = self._read_cache(cache, key)
        if settings is not None:
            return settings

        settings = self.load_with_fallback(filename, instance_id)
        self._write_cache(cache, key, settings)
        return settings

    # Alias for resolve()
    load = resolve

    def theme(self, instance_id: str) -> Settings:
        return self.resolve("theme.md", instance_id)

    def main(self, instance_id: str) -> Settings:
        return self.resolve("main.md", instance_id)

    def properties(self, instance_id: str) -> Settings:
        return self.resolve("properties.md", instance_id)

    def booking(self, instance_id: str) -> Settings:
        return self.resolve("booking.md", instance_id)

    def clear_cache(
        self, instance_id: str | None = None, files: Iterable[str] | None = None
    ) -> list[str]:
        """Forget cached settings for an instance.

        Args:
            instance_id: Instance to clear. Nothing is cleared when None.
            files: Files to clear. None means DEFAULT_FILES; an empty list
                clears nothing.

        Returns:
            The cache keys that were targeted.

        Note:
            Entries that do not exist are skipped silently. Entries of other
            instances, or of files not named, are never touched.
        """
        cache = self.cache
        if not instance_id or cache is None:
            return []

        if files is None:
            files = DEFAULT_FILES
        keys = [self.cache_key(instance_id, f) for f in files]
        for key in keys:
            if cache.forget(key):
                self.logger.verbose("CACHE", f"Forgot {key}")
        return keys

    def cache_key(self, instance_id: str, filename: str) -> str:
        return build_cache_key(self.config.cache.prefix, instance_id, filename)

    def is_testing(self) -> bool:
        """Return True when the process counts as a test run."""
        if self._testing is not None:
            return self._testing
        return _running_tests(os.environ)

    def caching_active(self) -> bool:
        """Return True when resolve() reads from and writes to the cache."""
        if not self.config.cache.enabled or self.cache is None:
            return False
        if not getattr(self.cache, "persistent", False):
            return False
        return not self.is_testing()

    # -------------------------------
    # Loading
    # -------------------------------

    def load_with_fallback(self, filename: str, instance_id: str) -> Settings:
        """Resolve settings straight from the source files (no cache)."""
        base_path = Path(self.config.base_path)
        shared_path = base_path / self.config.shared_directory / filename
        instance_path = base_path / instance_id / filename

        shared = self._load_document(shared_path)
        instance = self._load_document(instance_path)

        merged = deep_merge(shared.metadata, instance.metadata)
        self.logger.verbose(
            "MERGE",
            f"{filename} for {instance_id}: {len(merged)} top-level key(s)",
        )
        if self.logger.debug_enabled:
            self.logger.debug("MERGE", "--- Merged settings (before interpolation) ---")
            _debug_yaml(self.logger, merged)

        merged = self._interpolator.interpolate(merged)

        content = instance.content or shared.content
        return Settings(merged, content)

    def _load_document(self, path: Path) -> ParsedDocument:
        if not path.is_file():
            self.logger.verbose("LOAD", f"Not found, using empty settings: {path}")
            return ParsedDocument()
        self.logger.verbose("LOAD", f"Loading: {path}")
        return self._parser.parse_file(path)

    # -------------------------------
    # Cache helpers
    # -------------------------------

    def _read_cache(self, cache: CacheBackend, key: str) -> Settings | None:
        try:
            value = cache.get(key)
        except (CacheError, OSError) as err:
            self.logger.verbose("CACHE", f"Warning: cache read failed for {key}: {err}")
            self.logger.verbose("CACHE", "Continuing without cache")
            return None

        if value is None:
            self.logger.verbose("CACHE", f"Miss: {key}")
            return None

        try:
            settings = loads_settings(value)
        except CacheError as err:
            self.logger.verbose("CACHE", f"Discarding stale entry {key}: {err}")
            self._forget_quietly(cache, key)
            return None

        self.logger.verbose("CACHE", f"Hit: {key}")
        return settings

    def _write_cache(self, cache: CacheBackend, key: str, settings: Settings) -> None:
        try:
            cache.set(key, dumps_settings(settings), self.config.cache.ttl)
        except (CacheError, OSError) as err:
            self.logger.verbose("CACHE", f"Warning: cache write failed for {key}: {err}")
            return
        self.logger.verbose("CACHE", f"Stored {key} (ttl {self.config.cache.ttl}s)")

    def _forget_quietly(self, cache: CacheBackend, key: str) -> None:
        try:
            cache.forget(key)
        except (CacheError, OSError) as err:
            self.logger.verbose("CACHE", f"Warning: could not forget {key}: {err}")


# -------------------------------
# Default resolver
# -------------------------------

_default_resolver: SettingsResolver | None = None


def get_default_resolver() -> SettingsResolver:
    """Get the process-wide resolver, creating one from load_config() if unset.

    Note:
        Library code should receive a resolver explicitly; this is a
        convenience for applications and scripts.
    """
    global _default_resolver
    if _default_resolver is None:
        _default_resolver = SettingsResolver(load_config())
    return _default_resolver


def set_default_resolver(resolver: SettingsResolver | None) -> None:
    """Set (or with None, reset) the process-wide resolver."""
    global _default_resolver
    _default_resolver = resolver


# -------------------------------
# Helpers
# -------------------------------


def _running_tests(env: Mapping[str, str]) -> bool:
    flag = env.get("SETTINGS_YAML_TESTING", "").strip().lower()
    if flag in _TESTING_TRUE_VALUES:
        return True
    return "PYTEST_CURRENT_TEST" in env


def _unsafe_parts(name: str) -> bool:
    posix = PurePosixPath(name)
    windows = PureWindowsPath(name)
    return (
        posix.is_absolute()
        or windows.is_absolute()
        or bool(windows.drive)
        or ".." in posix.parts
        or ".." in windows.parts
    )


def _check_instance_id(instance_id: str) -> None:
    if not instance_id or "/" in instance_id or "\\" in instance_id or instance_id in (".", ".."):
        raise ConfigError(f"invalid instance id: {instance_id!r}")


def _check_filename(filename: str) -> None:
    if not filename or _unsafe_parts(filename):
        raise ConfigError(f"invalid settings filename: {filename!r}")


def _debug_yaml(logger: Logger, data: Mapping[str, Any]) -> None:
    text = yaml.safe_dump(dict(data), default_flow_style=False, sort_keys=False)
    for line in text.split("\n"):
        if line.strip():
            logger.debug("MERGE", "  " + line)
