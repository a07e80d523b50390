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

"""Deep merging of settings trees.

Shared defaults are the base, instance settings are the overlay, and the
overlay always wins:

  - **Dicts**: Recursively merged (keys from overlay override base)
  - **Lists**: Completely replaced (NOT merged by position or appended)
  - **Scalars**: Overwritten (strings, numbers, booleans, None)
  - **Type mismatches**: dict vs scalar/list in either direction is a
    plain replacement

Example:
    Merge theme colors:

        >>> from settings_yaml.merge import deep_merge
        >>> shared = {"colors": {"primary": "#333", "secondary": "#666"}}
        >>> instance = {"colors": {"primary": "#f00"}}
        >>> deep_merge(shared, instance)
        {'colors': {'primary': '#f00', 'secondary': '#666'}}
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

__all__ = ["deep_merge"]


def deep_merge(
    base: Mapping[str, Any] | None, overlay: Mapping[str, Any] | None
) -> dict[str, Any]:
    """
    Deep-merge two settings trees with "overlay wins".

    Rules:
      - dict + dict -> deep merge
      - list + list -> overlay REPLACES base
      - everything else -> overlay overwrites base

    None is accepted for either side and treated as an empty mapping.
    This function does not mutate inputs; returns a new dict.
    """
    result: dict[str, Any] = dict(base or {})
    for k, v in (overlay or {}).items():
        if k in result and isinstance(result[k], Mapping) and isinstance(v, Mapping):
            result[k] = deep_merge(result[k], v)
        else:
            result[k] = v
    return result
