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

"""Command-line interface for petripack.

This module provides the main CLI entry point for the petripack tool, which
packages Petriflow process definitions into application ZIP archives.

Commands:

    package: Package input directories into ZIP archives
    validate: Validate a configuration file without packaging

Example:
    Package using a configuration file:
        ```bash
        $ petripack package --config petripack.yaml
        ```

    Package a directory of applications without a configuration file:
        ```bash
        $ petripack package --input-dir processes --multi-application \\
            --output-dir dist --exclude ".*Test.*"
        ```

    Validate a configuration file:
        ```bash
        $ petripack validate petripack.yaml
        ```

Exit Codes:

- 0: Success
- 1: Error (configuration, packaging, or validation failure)

Note:
    The CLI uses argparse for command parsing. Command-line options override
    the values from the configuration file. Verbose mode shows full
    tracebacks on errors for debugging. Debug mode implies verbose mode and
    prints the merged configuration and every generated manifest.

"""

from __future__ import annotations

import argparse
from importlib.metadata import version
from pathlib import Path
import sys
from typing import Any

from petripack.config import load_effective_config
from petripack.core import package_all
from petripack.exceptions import ConfigError, PackagingError, PetripackError
from petripack.logging import get_logger, set_global_logger
from petripack.validation import validate_config


def _build_overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Translate CLI flags into a configuration override layer.

    Only flags that were actually given are included, so unset flags never
    hide values from the configuration file.
    """
    package: dict[str, Any] = {}

    if args.input_dir:
        if len(args.input_dir) == 1:
            package["input_directory"] = args.input_dir[0]
            package["input_directories"] = []
        else:
            package["input_directories"] = list(args.input_dir)
    if args.output_dir:
        package["output_directory"] = args.output_dir
    if args.multi_application:
        package["multi_application"] = True
    if args.exclude:
        package["exclude"] = list(args.exclude)
    if args.zip_prefix is not None:
        package["zip_prefix"] = args.zip_prefix

    for field in ("app_id", "app_name", "app_description", "app_version", "app_author"):
        value = getattr(args, field)
        if value is not None:
            package[field] = value

    return {"package": package} if package else {}


def cmd_package(args: argparse.Namespace) -> int:
    """Handler for 'petripack package' command.

    Loads the configuration (file, then command-line overrides), packages
    every input directory, and prints one line per written archive.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Exit code (0 for success, 1 for failure).

    """
    logger = get_logger(verbose=args.verbose, debug=args.debug)
    set_global_logger(logger)

    config_path = Path(args.config).resolve() if args.config else None

    print("=" * 70)
    print("PETRIFLOW PACKAGING")
    print("=" * 70)
    if config_path:
        print(f"Configuration: {config_path}")
    print()

    try:
        config = load_effective_config(
            config_path, overrides=_build_overrides(args), logger=logger
        )
        result = package_all(config, logger=logger)
    except (ConfigError, PackagingError) as err:
        print(f"Error: {err}")
        if args.verbose or args.debug:
            import traceback

            traceback.print_exc()
        return 1
    except PetripackError as err:
        # Catch any other petripack errors we might have missed
        print(f"Error: {err}")
        if args.verbose or args.debug:
            import traceback

            traceback.print_exc()
        return 1

    print()
    print("=" * 70)
    print("PACKAGE RESULTS")
    print("=" * 70)
    for item in result.inputs:
        print(f"Input Directory: {item.input_path}")
        print(f"Status:          {item.status}")
        for archive in item.archives:
            print(f"  {archive.zip_path} ({len(archive.processes)} process(es))")
        if item.error:
            print(f"  [X] {item.error}")
    print("=" * 70)
    print()

    if result.status != "success":
        print(f"[FAILED] {len(result.errors)} input directory(ies) failed.")
        return 1

    print(f"[SUCCESS] {len(result.archives)} archive(s) created successfully!")
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Handler for 'petripack validate' command.

    Validates configuration syntax, exclusion patterns and input directories
    without writing any archive.

    Args:
        args: Parsed command-line arguments containing the configuration
            path and verbose flag.

    Returns:
        Exit code (0 for valid configuration, 1 for invalid).

    """
    logger = get_logger(verbose=args.verbose, debug=False)
    set_global_logger(logger)

    config_path = Path(args.config).resolve()

    print(f"Validating configuration: {config_path}")
    print()

    result = validate_config(config_path, verbose=args.verbose)

    print("=" * 70)
    print("VALIDATION RESULTS")
    print("=" * 70)
    print(f"Config:      {result.config_path}")
    print(f"Status:      {result.status.upper()}")
    print(f"Inputs:      {result.input_count}")
    print()

    if result.warnings:
        print(f"Warnings ({len(result.warnings)}):")
        for warning in result.warnings:
            print(f"  [WARNING] {warning}")
        print()

    if result.errors:
        print(f"Errors ({len(result.errors)}):")
        for error in result.errors:
            print(f"  [X] {error}")
        print()

    print("=" * 70)

    if result.status == "valid":
        print()
        print("[SUCCESS] Configuration is valid!")
        return 0
    else:
        print()
        print(
            f"[FAILED] Configuration validation failed with {len(result.errors)} error(s)."
        )
        return 1


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the petripack CLI."""
    parser = argparse.ArgumentParser(
        prog="petripack",
        description="petripack - package Petriflow processes into application archives",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"petripack {version('petripack')}",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        required=True,
    )

    # 'package' command
    parser_package = subparsers.add_parser(
        "package",
        help="Package input directories into application ZIP archives",
        description="Create a ZIP archive with a generated manifest.xml for each application.",
    )
    parser_package.add_argument(
        "-c",
        "--config",
        default=None,
        help="Path to the YAML configuration file (optional)",
    )
    parser_package.add_argument(
        "--input-dir",
        action="append",
        default=None,
        help="Input directory; repeat to package several (default: src/main/resources/petriNets)",
    )
    parser_package.add_argument(
        "--output-dir",
        default=None,
        help="Directory for the ZIP archives (default: target/petriflow-zips)",
    )
    parser_package.add_argument(
        "--multi-application",
        action="store_true",
        help="Package each subdirectory of the input directory as its own application",
    )
    parser_package.add_argument("--app-id", default=None, help="Manifest application id")
    parser_package.add_argument("--app-name", default=None, help="Manifest application name")
    parser_package.add_argument(
        "--app-description", default=None, help="Manifest application description"
    )
    parser_package.add_argument(
        "--app-version", default=None, help="Manifest application version"
    )
    parser_package.add_argument(
        "--app-author", default=None, help="Manifest application author"
    )
    parser_package.add_argument(
        "--exclude",
        action="append",
        default=None,
        help="Regex excluding processes whose name matches it completely; repeatable",
    )
    parser_package.add_argument(
        "--zip-prefix",
        default=None,
        help="Archive name prefix (single-application mode only)",
    )
    parser_package.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show progress and high-level status updates",
    )
    parser_package.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Show detailed debugging output (implies --verbose)",
    )
    parser_package.set_defaults(func=cmd_package)

    # 'validate' command
    parser_validate = subparsers.add_parser(
        "validate",
        help="Validate a configuration file (no archives written)",
        description="Check the configuration YAML, exclusion patterns and input directories.",
    )
    parser_validate.add_argument(
        "config",
        help="Path to the YAML configuration file",
    )
    parser_validate.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show validation progress and details",
    )
    parser_validate.set_defaults(func=cmd_validate)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the petripack CLI.

    This function is registered as the 'petripack' console script in
    pyproject.toml.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    exit_code = args.func(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
