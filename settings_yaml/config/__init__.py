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

"""Resolver options and configuration providers for settings-yaml.

Options are layered (built-in defaults, optional YAML options file,
environment variables) and validated into a frozen ResolverConfig.
Credentials referenced by ``${NAME}`` placeholders are served by a
configuration provider.

Public API:

- ResolverConfig, CacheConfig: Validated resolver options
- load_config: Load options from a YAML file plus environment overrides
- load_options_file: Read the raw options mapping
- default_provider: Options-file credentials with environment fallback
- ConfigProvider and its implementations

Example:
    Basic usage:

        from pathlib import Path
        from settings_yaml.config import load_config, load_options_file, default_provider

        path = Path("settings-yaml.yaml")
        config = load_config(path)
        provider = default_provider(load_options_file(path))

"""

from .loader import (
    CacheConfig,
    ResolverConfig,
    default_provider,
    load_config,
    load_options_file,
)
from .providers import (
    ChainConfigProvider,
    ConfigProvider,
    EnvironmentConfigProvider,
    MappingConfigProvider,
)

__all__ = [
    "CacheConfig",
    "ResolverConfig",
    "default_provider",
    "load_config",
    "load_options_file",
    "ConfigProvider",
    "ChainConfigProvider",
    "EnvironmentConfigProvider",
    "MappingConfigProvider",
]
