"""
Pytest configuration and shared fixtures for settings-yaml tests.

This module provides reusable fixtures and test utilities used across
the test suite.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import yaml

from settings_yaml.config import CacheConfig, MappingConfigProvider, ResolverConfig
from settings_yaml.logging import SilentLogger, set_global_logger
from settings_yaml.resolver import SettingsResolver, set_default_resolver


@pytest.fixture(autouse=True)
def reset_globals():
    """Restore the silent global logger and drop any default resolver."""
    yield
    set_global_logger(SilentLogger())
    set_default_resolver(None)


@pytest.fixture
def settings_root(tmp_path: Path) -> Path:
    """
    Provide a base path with an empty shared directory and one instance.

    Layout:
        <tmp>/instance/_shared/
        <tmp>/instance/test-instance/
    """
    root = tmp_path / "instance"
    (root / "_shared").mkdir(parents=True)
    (root / "test-instance").mkdir()
    return root


@pytest.fixture
def create_settings_file(settings_root: Path):
    """
    Factory fixture for writing settings documents under settings_root.

    Usage:
        create_settings_file("_shared/theme.md", {"colors": {...}}, "Body")
    """

    def _create(relative: str, frontmatter: dict[str, Any], content: str = "") -> Path:
        path = settings_root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        text = f"---\n{yaml.dump(frontmatter, sort_keys=False)}---\n\n{content}"
        path.write_text(text, encoding="utf-8")
        return path

    return _create


@pytest.fixture
def credentials() -> dict[str, Any]:
    """Provide the credentials namespace used by placeholder tests."""
    return {
        "credentials": {
            "API_KEY": "secret-key-123",
            "API_SECRET": "secret-secret",
            "EMPTY_VAR": "",
        }
    }


@pytest.fixture
def make_resolver(settings_root: Path, credentials: dict[str, Any]):
    """
    Factory fixture for resolvers rooted at settings_root.

    Caching is disabled unless a ``cache_config`` is passed.

    Usage:
        resolver = make_resolver()
        resolver = make_resolver(cache=FileCache(...), testing=False,
                                 cache_config=CacheConfig(ttl=60))
    """

    def _make(cache_config: CacheConfig | None = None, **kwargs: Any) -> SettingsResolver:
        config = ResolverConfig(
            base_path=settings_root,
            cache=cache_config or CacheConfig(enabled=False),
        )
        kwargs.setdefault("provider", MappingConfigProvider(credentials))
        return SettingsResolver(config, **kwargs)

    return _make
