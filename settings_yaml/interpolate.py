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

"""Placeholder interpolation for settings trees.

String values may reference credentials with ``${NAME}`` tokens. Each token
is replaced with the value found at ``<prefix>.NAME`` in a configuration
provider, so settings files can be committed without secrets:

    api:
      url: "https://api.example.com?key=${API_KEY}&v=1"

Rules:
  - ``NAME`` is everything up to the next ``}``; there is no escaping, no
    nesting and no default-value syntax
  - all tokens in a string are replaced in one left-to-right pass
  - a missing value becomes the empty string (never an error)
  - non-string leaves (numbers, booleans, None) are returned unchanged

Example:
    Interpolate with an in-memory provider:

        >>> from settings_yaml.config import MappingConfigProvider
        >>> from settings_yaml.interpolate import EnvironmentInterpolator
        >>> provider = MappingConfigProvider({"credentials": {"API_KEY": "k-1"}})
        >>> EnvironmentInterpolator(provider).interpolate({"key": "${API_KEY}"})
        {'key': 'k-1'}
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
import re
from typing import Any

from settings_yaml.config.providers import ConfigProvider

__all__ = ["EnvironmentInterpolator", "interpolate", "PLACEHOLDER_PATTERN"]

# ${NAME}, where NAME runs up to the next closing brace
PLACEHOLDER_PATTERN = re.compile(r"\$\{([^}]+)\}")


def interpolate(data: Mapping[str, Any], lookup: Callable[[str], str | None]) -> dict[str, Any]:
    """Return a copy of ``data`` with every ``${NAME}`` token substituted.

    Args:
        data: Settings tree to process. Not modified.
        lookup: Called with each token name; a None result is substituted
            as the empty string.

    Returns:
        A new tree with the same shape as ``data``.
    """

    def _replace(match: re.Match[str]) -> str:
        value = lookup(match.group(1))
        return "" if value is None else str(value)

    def _process(value: Any) -> Any:
        if isinstance(value, Mapping):
            return {k: _process(v) for k, v in value.items()}
        if isinstance(value, list):
            return [_process(item) for item in value]
        if isinstance(value, str):
            return PLACEHOLDER_PATTERN.sub(_replace, value)
        return value

    return {k: _process(v) for k, v in data.items()}


class EnvironmentInterpolator:
    """Interpolates ``${NAME}`` tokens against a provider namespace.

    Attributes:
        config_prefix: Namespace prepended to every token name.
    """

    def __init__(self, provider: ConfigProvider, config_prefix: str = "credentials") -> None:
        self._provider = provider
        self.config_prefix = config_prefix

    def lookup(self, name: str) -> str:
        """Return the value stored at ``<config_prefix>.<name>``, or ""."""
        value = self._provider.get(f"{self.config_prefix}.{name}", "")
        return "" if value is None else str(value)

    def interpolate(self, data: Mapping[str, Any]) -> dict[str, Any]:
        return interpolate(data, self.lookup)
