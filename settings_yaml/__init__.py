"""
settings-yaml - Per-instance settings with shared defaults

Resolves settings stored as markdown files with YAML frontmatter, one
directory per instance (tenant) plus a shared defaults directory.

settings-yaml provides:
  - Deep merge of instance settings over shared defaults (dicts merge,
    lists and scalars are replaced)
  - ``${NAME}`` placeholder interpolation from a credentials namespace
  - Markdown body fallback (instance body, else shared body)
  - Optional TTL cache with stale-entry recovery
  - Read-only settings handles with dotted-path lookups

Quick Start
-----------
    from pathlib import Path
    from settings_yaml import ResolverConfig, SettingsResolver

    resolver = SettingsResolver(ResolverConfig(base_path=Path("instance")))
    theme = resolver.theme("acme")
    theme.get("colors.primary")

From the command line:

    $ settings-yaml show acme theme.md --base-path instance

Package Structure
-----------------
resolver : module
    SettingsResolver, the load orchestration.
settings : module
    Read-only Settings handle.
merge : module
    Deep merge of settings trees.
interpolate : module
    ``${NAME}`` placeholder interpolation.
frontmatter : module
    Markdown/YAML frontmatter parsing.
cache : package
    Cache backends and payload codec.
config : package
    Resolver options and configuration providers.
cli : module
    Command-line interface with argparse.

Project Information
-------------------
Author: Roger Cibrian
License: Apache-2.0
"""

__version__ = "0.1.0"
__author__ = "Roger Cibrian"
__license__ = "Apache-2.0"
__description__ = "Per-instance settings with shared defaults, from YAML frontmatter"

# Re-export commonly used names for convenience
from settings_yaml.config import ResolverConfig, load_config
from settings_yaml.merge import deep_merge
from settings_yaml.resolver import DEFAULT_FILES, SettingsResolver
from settings_yaml.settings import Settings

__all__ = [
    "__version__",
    "__author__",
    "__license__",
    "__description__",
    "DEFAULT_FILES",
    "ResolverConfig",
    "Settings",
    "SettingsResolver",
    "deep_merge",
    "load_config",
]
