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

"""Exception hierarchy for settings-yaml.

This module defines a custom exception hierarchy that allows library users
to distinguish between different types of errors:

- ConfigError: Resolver options and unsafe instance/file names
- FrontmatterError: Malformed settings documents (YAML parse, bad structure)
- CacheError: Corrupt cache payloads and cache backend failures

All exceptions inherit from SettingsYamlError, allowing users to catch all
settings-yaml errors with a single except clause if needed.

Example:
    Catching specific error types:
        ```python
        from settings_yaml import SettingsResolver
        from settings_yaml.exceptions import FrontmatterError

        try:
            settings = resolver.resolve("theme.md", "acme")
        except FrontmatterError as e:
            print(f"Broken settings file: {e}")
        ```

    Catching all settings-yaml errors:
        ```python
        from settings_yaml.exceptions import SettingsYamlError

        try:
            settings = resolver.resolve("theme.md", "acme")
        except SettingsYamlError as e:
            print(f"settings-yaml error: {e}")
        ```
"""

from __future__ import annotations

__all__ = [
    "SettingsYamlError",
    "ConfigError",
    "FrontmatterError",
    "CacheError",
]


class SettingsYamlError(Exception):
    """Base exception for all settings-yaml errors.

    All settings-yaml exceptions inherit from this class, allowing users
    to catch all of them with a single except clause if needed.
    """

    pass


class ConfigError(SettingsYamlError):
    """Raised for configuration-related errors.

    This exception is raised when there are problems with:

    - Resolver options (wrong types, unreadable options file)
    - Instance ids or filenames that would escape the base path

    Example:
        Catching configuration errors:
            ```python
            from settings_yaml.config import load_config
            from settings_yaml.exceptions import ConfigError

            try:
                config = load_config(Path("settings-yaml.yaml"))
            except ConfigError as e:
                print(f"Config error: {e}")
            ```
    """

    pass


class FrontmatterError(ConfigError):
    """Raised when a settings document cannot be parsed.

    The resolver never catches this error: a broken source document is
    reported to the caller as-is.
    """

    pass


class CacheError(SettingsYamlError):
    """Raised for cache payload and cache backend errors.

    The resolver recovers from both kinds: a corrupt payload is treated
    as a cache miss, and a failing backend is bypassed.
    """

    pass
