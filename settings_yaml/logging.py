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

"""Diagnostic output for settings-yaml.

The resolver reports what it loads, merges and caches through a Logger
rather than printing. Nothing is shown until an application (or the CLI)
installs a logger that asks for output.

Levels:
- Verbose: file loads, merge summaries, cache hits, misses and failures
- Debug: verbose output plus a YAML dump of each merged tree (implies verbose)

Example:
    Enable verbose output for every resolver without its own logger:
        ```python
        from settings_yaml.logging import get_logger, set_global_logger

        set_global_logger(get_logger(verbose=True))
        ```

    Give one resolver its own logger:
        ```python
        resolver = SettingsResolver(config, logger=get_logger(debug=True))
        ```
"""

from __future__ import annotations

from typing import Protocol


class Logger(Protocol):
    """Protocol for logger implementations.

    Attributes:
        debug_enabled: True when debug messages are printed. The resolver
            checks it before building expensive debug output.
    """

    @property
    def debug_enabled(self) -> bool: ...

    def verbose(self, prefix: str, message: str) -> None:
        """Report a verbose message tagged with ``prefix`` ("LOAD", "CACHE")."""
        ...

    def debug(self, prefix: str, message: str) -> None:
        """Report a debug message tagged with ``prefix`` ("MERGE")."""
        ...


class DefaultLogger:
    """Prints ``[PREFIX] message`` lines to stdout."""

    def __init__(self, verbose: bool = False, debug: bool = False) -> None:
        self._verbose = verbose or debug
        self._debug = debug

    @property
    def debug_enabled(self) -> bool:
        return self._debug

    def verbose(self, prefix: str, message: str) -> None:
        if self._verbose:
            print(f"[{prefix}] {message}")

    def debug(self, prefix: str, message: str) -> None:
        if self._debug:
            print(f"[{prefix}] {message}")


class SilentLogger:
    """Discards everything."""

    @property
    def debug_enabled(self) -> bool:
        return False

    def verbose(self, prefix: str, message: str) -> None:
        pass

    def debug(self, prefix: str, message: str) -> None:
        pass


# Used by resolvers constructed without a logger
_global_logger: Logger = SilentLogger()


def get_logger(verbose: bool = False, debug: bool = False) -> Logger:
    """Create a stdout logger.

    Args:
        verbose: Print verbose messages.
        debug: Print debug messages as well (implies verbose).
    """
    return DefaultLogger(verbose=verbose, debug=debug)


def get_global_logger() -> Logger:
    return _global_logger


def set_global_logger(logger: Logger) -> None:
    """Replace the process-wide logger.

    Note:
        Resolvers given an explicit logger are not affected.
    """
    global _global_logger
    _global_logger = logger
