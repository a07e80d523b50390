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

"""Read-only handle over resolved settings.

A Settings object pairs the merged, interpolated metadata tree with the
selected markdown body. It has no mutation API: the tree is copied on the
way in and on the way out of ``all()``.

Example:
    Dotted lookups:
        ```python
        settings = resolver.theme("acme")

        settings.get("colors.primary")            # "#f00"
        settings.get("colors.accent", "#000")     # default when absent
        settings.has("layout.sidebar")            # False for missing or None
        settings.get("menu.items.0.label")        # list index segments
        settings.content                          # markdown body
        ```
"""

from __future__ import annotations

from collections.abc import Mapping
import copy
from typing import Any

from settings_yaml.exceptions import CacheError

__all__ = ["Settings", "PAYLOAD_SCHEMA_VERSION"]

PAYLOAD_SCHEMA_VERSION = "2"

_MISSING = object()


class Settings:
    """Resolved settings for one instance and file.

    Attributes:
        content: Markdown body selected for this file (instance body when
            non-empty, else the shared body).
    """

    __slots__ = ("_data", "_content")

    def __init__(self, data: Mapping[str, Any] | None = None, content: str = "") -> None:
        object.__setattr__(self, "_data", copy.deepcopy(dict(data or {})))
        object.__setattr__(self, "_content", content)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is read-only")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is read-only")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Settings):
            return NotImplemented
        return self._data == other._data and self._content == other._content

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Settings(keys={list(self._data)!r}, content={len(self._content)} chars)"

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value using dot notation.

        Args:
            key: Dotted path such as "colors.primary". Integer segments
                index into lists ("menu.items.0").
            default: Returned when the path is absent or its value is None.

        Returns:
            The stored value. Mappings and lists are returned as copies.
        """
        node: Any = self._data
        for segment in key.split("."):
            node = _child(node, segment)
            if node is _MISSING:
                return default
        if node is None:
            return default
        return copy.deepcopy(node)

    def has(self, key: str) -> bool:
        """Check if a key resolves to a non-None value."""
        return self.get(key) is not None

    def all(self) -> dict[str, Any]:
        """Get a copy of the full settings tree."""
        return copy.deepcopy(self._data)

    @property
    def content(self) -> str:
        return self._content

    def get_content(self) -> str:
        return self._content

    # -------------------------------
    # Cache payloads
    # -------------------------------

    def to_payload(self) -> dict[str, Any]:
        """Return the mapping stored in the cache."""
        return {
            "schema_version": PAYLOAD_SCHEMA_VERSION,
            "data": self.all(),
            "content": self._content,
        }

    @classmethod
    def from_payload(cls, payload: Any) -> Settings:
        """Rebuild settings from a cache payload.

        Raises:
            CacheError: If the payload is not a complete payload of the
                current schema version.
        """
        if not isinstance(payload, Mapping):
            raise CacheError(f"cache payload must be a mapping, got {type(payload).__name__}")
        if payload.get("schema_version") != PAYLOAD_SCHEMA_VERSION:
            raise CacheError(
                f"incompatible cache payload schema: {payload.get('schema_version')!r}"
            )
        data = payload.get("data")
        content = payload.get("content")
        if not isinstance(data, Mapping):
            raise CacheError("cache payload is missing its settings tree")
        if not isinstance(content, str):
            raise CacheError("cache payload is missing its content")
        return cls(data, content)


def _child(node: Any, segment: str) -> Any:
    if isinstance(node, Mapping):
        return node.get(segment, _MISSING)
    if isinstance(node, list) and segment.isdigit():
        index = int(segment)
        return node[index] if index < len(node) else _MISSING
    return _MISSING
