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

"""Read-only named configuration providers.

A provider answers ``get(name, default)`` for dotted names such as
``credentials.API_KEY``. The interpolator and the resolver receive a
provider at construction time instead of reaching into process-wide state.

Providers:

- MappingConfigProvider: Walks a nested mapping (e.g. a parsed YAML file)
- EnvironmentConfigProvider: Reads environment variables, optionally
  populated from a .env file
- ChainConfigProvider: Asks several providers in order, first hit wins

Example:
    Credentials from a YAML section with environment fallback:
        ```python
        from settings_yaml.config import (
            ChainConfigProvider,
            EnvironmentConfigProvider,
            MappingConfigProvider,
        )

        provider = ChainConfigProvider(
            MappingConfigProvider({"credentials": {"API_KEY": "abc"}}),
            EnvironmentConfigProvider(),
        )
        provider.get("credentials.API_KEY")  # "abc"
        provider.get("credentials.SMTP_PASSWORD")  # $CREDENTIALS_SMTP_PASSWORD
        ```
"""

from __future__ import annotations

from collections.abc import Mapping
import os
from pathlib import Path
from typing import Any, Protocol

from dotenv import load_dotenv

__all__ = [
    "ConfigProvider",
    "MappingConfigProvider",
    "EnvironmentConfigProvider",
    "ChainConfigProvider",
]


class ConfigProvider(Protocol):
    """Protocol for named configuration lookups."""

    def get(self, name: str, default: Any = None) -> Any:
        """Return the value stored under a dotted name.

        Args:
            name: Dotted configuration name (e.g., "credentials.API_KEY").
            default: Value returned when the name is not set.
        """
        ...


class MappingConfigProvider:
    """Looks up dotted names in a nested mapping.

    ``get("credentials.API_KEY")`` returns ``data["credentials"]["API_KEY"]``.
    A name that matches a top-level key verbatim (dots included) is found
    as well.
    """

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        self._data: Mapping[str, Any] = data or {}

    def get(self, name: str, default: Any = None) -> Any:
        if name in self._data:
            return self._data[name]

        node: Any = self._data
        for segment in name.split("."):
            if not isinstance(node, Mapping) or segment not in node:
                return default
            node = node[segment]
        return node


class EnvironmentConfigProvider:
    """Maps dotted names onto environment variables.

    The name is upper-cased and dots/dashes become underscores, so
    ``credentials.api-key`` reads ``CREDENTIALS_API_KEY``.

    Attributes:
        environ: Mapping the variables are read from.
    """

    def __init__(
        self,
        environ: Mapping[str, str] | None = None,
        dotenv_path: Path | None = None,
    ) -> None:
        """
        Args:
            environ: Variables to read. Defaults to os.environ, after loading
                a .env file (existing variables are not overridden).
            dotenv_path: Explicit .env file; python-dotenv searches upward
                from the working directory when omitted.
        """
        if environ is None:
            load_dotenv(dotenv_path)
            environ = os.environ
        self.environ = environ

    @staticmethod
    def variable_name(name: str) -> str:
        return name.replace(".", "_").replace("-", "_").upper()

    def get(self, name: str, default: Any = None) -> Any:
        return self.environ.get(self.variable_name(name), default)


class ChainConfigProvider:
    """Returns the first non-None answer from a sequence of providers."""

    def __init__(self, *providers: ConfigProvider) -> None:
        self.providers = providers

    def get(self, name: str, default: Any = None) -> Any:
        for provider in self.providers:
            value = provider.get(name)
            if value is not None:
                return value
        return default
