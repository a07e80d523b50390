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

"""Cache backends for resolved settings.

Public API:

- CacheBackend: Protocol (get / set with TTL / forget, plus ``persistent``)
- FileCache: Persistent entries on disk, one JSON file per key
- MemoryCache: Non-persistent in-process stub
- cache_key, dumps_settings, loads_settings: Key format and payload codec

Example:
    Basic usage:

        from pathlib import Path
        from settings_yaml.cache import FileCache, cache_key

        cache = FileCache(Path(".settings-cache"))
        cache.forget(cache_key("settings", "acme", "theme.md"))

"""

from .base import CacheBackend, cache_key, dumps_settings, loads_settings
from .file import FileCache
from .memory import MemoryCache

__all__ = [
    "CacheBackend",
    "FileCache",
    "MemoryCache",
    "cache_key",
    "dumps_settings",
    "loads_settings",
]
