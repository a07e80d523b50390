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

"""Command-line interface for settings-yaml.

Commands:

    show: Print the resolved settings tree (YAML) and body of a file
    get: Print one value by dotted key
    clear-cache: Forget cached settings for an instance

Example:
    Show resolved theme settings:
        ```bash
        $ settings-yaml show acme theme.md --base-path instance
        ```

    Read one value:
        ```bash
        $ settings-yaml get acme theme.md colors.primary --config settings-yaml.yaml
        ```

    Clear cached entries:
        ```bash
        $ settings-yaml clear-cache acme theme.md main.md --config settings-yaml.yaml
        ```

Exit Codes:

- 0: Success
- 1: Error (configuration, malformed settings file, missing key)

Note:
    Options come from --config (YAML options file) and SETTINGS_* environment
    variables; --base-path and --no-cache override both. Credentials for
    ${NAME} placeholders are read from the options file's ``credentials``
    section, then from CREDENTIALS_* environment variables.

"""

from __future__ import annotations

import argparse
import dataclasses
from pathlib import Path
import sys
from typing import Any

import yaml

from settings_yaml import __version__
from settings_yaml.config import default_provider, load_config, load_options_file
from settings_yaml.exceptions import ConfigError, SettingsYamlError
from settings_yaml.logging import get_logger, set_global_logger
from settings_yaml.resolver import SettingsResolver


def _build_resolver(args: argparse.Namespace) -> SettingsResolver:
    """Create a resolver from the common command-line options.

    Raises:
        ConfigError: If the options file is missing or invalid.
    """
    config_path = Path(args.config).resolve() if args.config else None
    options: dict[str, Any] = {}
    if config_path is not None:
        try:
            options = load_options_file(config_path)
        except FileNotFoundError as err:
            raise ConfigError(f"Options file not found: {config_path}") from err

    config = load_config(config_path)
    if args.base_path:
        config = dataclasses.replace(config, base_path=Path(args.base_path).resolve())
    if args.no_cache:
        config = dataclasses.replace(
            config, cache=dataclasses.replace(config.cache, enabled=False)
        )

    return SettingsResolver(config, provider=default_provider(options))


def _format_value(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return yaml.safe_dump(value, default_flow_style=False, sort_keys=False).rstrip()
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _report_error(args: argparse.Namespace, err: Exception) -> int:
    print(f"Error: {err}")
    if args.verbose or args.debug:
        import traceback

        traceback.print_exc()
    return 1


def cmd_show(args: argparse.Namespace) -> int:
    """Handler for 'settings-yaml show' command.

    Prints the merged, interpolated settings as YAML, followed by the
    selected markdown body (if any) after a ``---`` separator.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    set_global_logger(get_logger(verbose=args.verbose, debug=args.debug))

    try:
        resolver = _build_resolver(args)
        settings = resolver.resolve(args.file, args.instance)
    except SettingsYamlError as err:
        return _report_error(args, err)

    data = settings.all()
    if data:
        print(yaml.safe_dump(data, default_flow_style=False, sort_keys=False).rstrip())
    else:
        print("{}")
    if settings.content:
        print("---")
        print(settings.content)
    return 0


def cmd_get(args: argparse.Namespace) -> int:
    """Handler for 'settings-yaml get' command.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Exit code (0 when the key has a value, 1 otherwise).
    """
    set_global_logger(get_logger(verbose=args.verbose, debug=args.debug))

    try:
        resolver = _build_resolver(args)
        settings = resolver.resolve(args.file, args.instance)
    except SettingsYamlError as err:
        return _report_error(args, err)

    if not settings.has(args.key):
        print(f"Error: key not set: {args.key}")
        return 1

    print(_format_value(settings.get(args.key)))
    return 0


def cmd_clear_cache(args: argparse.Namespace) -> int:
    """Handler for 'settings-yaml clear-cache' command.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    set_global_logger(get_logger(verbose=args.verbose, debug=args.debug))

    try:
        resolver = _build_resolver(args)
        if resolver.cache is None:
            print("No cache configured (set cache.directory); nothing to clear.")
            return 0
        keys = resolver.clear_cache(args.instance, args.files or None)
    except SettingsYamlError as err:
        return _report_error(args, err)

    for key in keys:
        print(f"Cleared: {key}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the settings-yaml CLI."""
    parser = argparse.ArgumentParser(
        prog="settings-yaml",
        description="Resolve per-instance settings with shared defaults",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"settings-yaml {__version__}",
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        default=None,
        help="YAML options file (base_path, cache, credentials, ...)",
    )
    common.add_argument(
        "--base-path",
        default=None,
        help="Directory containing instance and shared settings directories",
    )
    common.add_argument(
        "--no-cache",
        action="store_true",
        help="Read straight from the settings files",
    )
    common.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show which files are loaded and cache activity",
    )
    common.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Show merged settings before interpolation (implies --verbose)",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        required=True,
    )

    # 'show' command
    parser_show = subparsers.add_parser(
        "show",
        parents=[common],
        help="Print resolved settings and body for a file",
    )
    parser_show.add_argument("instance", help="Instance identifier")
    parser_show.add_argument("file", help="Settings file name (e.g., theme.md)")
    parser_show.set_defaults(func=cmd_show)

    # 'get' command
    parser_get = subparsers.add_parser(
        "get",
        parents=[common],
        help="Print one resolved value by dotted key",
    )
    parser_get.add_argument("instance", help="Instance identifier")
    parser_get.add_argument("file", help="Settings file name (e.g., theme.md)")
    parser_get.add_argument("key", help="Dotted key (e.g., colors.primary)")
    parser_get.set_defaults(func=cmd_get)

    # 'clear-cache' command
    parser_clear = subparsers.add_parser(
        "clear-cache",
        parents=[common],
        help="Forget cached settings for an instance",
    )
    parser_clear.add_argument("instance", help="Instance identifier")
    parser_clear.add_argument(
        "files",
        nargs="*",
        help="Files to clear (default: theme.md main.md properties.md booking.md)",
    )
    parser_clear.set_defaults(func=cmd_clear_cache)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the settings-yaml CLI.

    This function is registered as the 'settings-yaml' console script in
    pyproject.toml.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    exit_code = args.func(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
