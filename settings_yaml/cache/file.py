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

"""File-backed cache with per-entry expiry.

Each key is stored in its own JSON file named after the SHA-256 of the key:

    {
      "expires_at": 1735689600.0,
      "key": "settings:acme:theme.md",
      "value": "..."
    }

Key Features:

- Survives process restarts (persistent backend)
- Atomic writes (.part file then rename), so readers never see partial entries
- Expired or unreadable entry files are removed on read and reported as misses
- Auto-creation of the cache directory
"""

from __future__ import annotations

from collections.abc import Callable
import hashlib
import json
from pathlib import Path
import time
from typing import Any

from settings_yaml.exceptions import CacheError

__all__ = ["FileCache"]


class FileCache:
    """Stores cache entries as JSON files in a directory.

    Attributes:
        directory: Directory holding the entry files.
        persistent: Always True.

    Example:
        Basic usage:
            ```python
            from pathlib import Path
            from settings_yaml.cache import FileCache

            cache = FileCache(Path(".settings-cache"))
            cache.set("settings:acme:theme.md", "...", ttl=3600)
            cache.get("settings:acme:theme.md")
            cache.forget("settings:acme:theme.md")
            ```
    """

    persistent = True

    def __init__(self, directory: Path, clock: Callable[[], float] = time.time) -> None:
        """Initialize the cache.

        Args:
            directory: Cache directory. Created on first write.
            clock: Returns the current time in seconds (injectable for tests).
        """
        self.directory = directory
        self._clock = clock

    def path_for(self, key: str) -> Path:
        digest = hashlib.sha256(key.encode("utf-8")).hexdigest()
        return self.directory / f"{digest}.json"

    def get(self, key: str) -> str | None:
        """Return the live value for ``key``.

        Raises:
            CacheError: If the entry file exists but cannot be read.
        """
        path = self.path_for(key)
        try:
            with open(path, encoding="utf-8") as f:
                entry = json.load(f)
        except FileNotFoundError:
            return None
        except (json.JSONDecodeError, UnicodeDecodeError):
            # Corrupted entry, drop it
            path.unlink(missing_ok=True)
            return None
        except OSError as err:
            raise CacheError(f"cannot read cache entry {path}: {err}") from err

        if not _is_valid_entry(entry, key):
            path.unlink(missing_ok=True)
            return None

        expires_at = entry.get("expires_at")
        if expires_at is not None and self._clock() >= expires_at:
            path.unlink(missing_ok=True)
            return None

        return entry["value"]

    def set(self, key: str, value: str, ttl: int) -> None:
        """Write ``value`` under ``key``.

        Raises:
            CacheError: If the entry cannot be written.
        """
        entry = {
            "key": key,
            "value": value,
            "expires_at": self._clock() + ttl if ttl > 0 else None,
        }
        path = self.path_for(key)
        tmp = path.with_suffix(path.suffix + ".part")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(entry, f, indent=2, sort_keys=True)
                f.write("\n")
            tmp.replace(path)
        except OSError as err:
            tmp.unlink(missing_ok=True)
            raise CacheError(f"cannot write cache entry {path}: {err}") from err

    def forget(self, key: str) -> bool:
        path = self.path_for(key)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as err:
            raise CacheError(f"cannot remove cache entry {path}: {err}") from err
        return True


def _is_valid_entry(entry: Any, key: str) -> bool:
    return (
        isinstance(entry, dict)
        and entry.get("key") == key
        and isinstance(entry.get("value"), str)
        and isinstance(entry.get("expires_at"), (int, float, type(None)))
    )
