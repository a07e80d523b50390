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

"""Cache backend protocol and settings (de)serialization.

Backends store opaque text values under string keys with a time-to-live.
Resolved settings are written as YAML documents of the form:

    schema_version: "2"
    data: {...}
    content: "..."

Values read back as the same types the settings parser produced
(dates and non-string keys included).

Reading a value back goes through :func:`loads_settings`, which refuses
anything that is not a complete payload of the current schema. The resolver
treats such a refusal as a cache miss.
"""

from __future__ import annotations

from typing import Protocol

import yaml

from settings_yaml.exceptions import CacheError
from settings_yaml.settings import Settings

__all__ = ["CacheBackend", "cache_key", "dumps_settings", "loads_settings"]


class CacheBackend(Protocol):
    """Protocol for cache backends.

    Attributes:
        persistent: False for process-local stubs. The resolver skips
            caching entirely when the backend is not persistent.
    """

    persistent: bool

    def get(self, key: str) -> str | None:
        """Return the live value stored under ``key``, or None."""
        ...

    def set(self, key: str, value: str, ttl: int) -> None:
        """Store ``value`` under ``key`` for ``ttl`` seconds (0 = no expiry)."""
        ...

    def forget(self, key: str) -> bool:
        """Remove ``key``. Returns True if an entry was removed."""
        ...


def cache_key(prefix: str, instance_id: str, filename: str) -> str:
    """Build the cache key for one instance and settings file."""
    return f"{prefix}:{instance_id}:{filename}"


def dumps_settings(settings: Settings) -> str:
    """Serialize settings into a cache value.

    Raises:
        CacheError: If the settings tree holds a value YAML cannot represent.
    """
    try:
        return yaml.safe_dump(
            settings.to_payload(),
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )
    except yaml.YAMLError as err:
        raise CacheError(f"cannot serialize settings: {err}") from err


def loads_settings(value: str | bytes) -> Settings:
    """Deserialize a cache value.

    Raises:
        CacheError: If the value is not valid YAML or not a complete
            settings payload.
    """
    try:
        payload = yaml.safe_load(value)
    except yaml.YAMLError as err:
        raise CacheError(f"cache payload is not valid YAML: {err}") from err
    return Settings.from_payload(payload)
