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

"""In-process cache stub.

MemoryCache is not persistent: a resolver given one never caches, which
keeps test runs and one-shot scripts reading straight from the source
files. It is still a complete backend and can be exercised directly.
"""

from __future__ import annotations

from collections.abc import Callable
import threading
import time

__all__ = ["MemoryCache"]


class MemoryCache:
    """Dictionary-backed cache with expiry, safe for use from several threads."""

    persistent = False

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._entries: dict[str, tuple[str, float | None]] = {}
        self._lock = threading.Lock()
        self._clock = clock

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, key: str) -> str | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if expires_at is not None and self._clock() >= expires_at:
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: str, ttl: int) -> None:
        expires_at = self._clock() + ttl if ttl > 0 else None
        with self._lock:
            self._entries[key] = (value, expires_at)

    def forget(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None
