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

"""Core orchestration for petripack.

This module ties discovery, filtering, naming, manifest generation and
archive assembly together for every configured input directory.

Two Packaging Modes:

- **Single-application mode** (default): the whole input directory tree is
    one application. Every process XML found recursively goes into one
    archive named <zip_prefix>_<dir name>.zip (or <dir name>.zip without a
    prefix).

- **Multi-application mode**: each immediate subdirectory of the input
    directory is its own application and archive (<subdir>.zip). Process
    XML files lying directly in the input directory are packaged as one
    extra application named "root" (root.zip). The zip prefix is not used
    in this mode.

Metadata Defaults:

Each manifest field takes the explicit value when it is non-empty, and
otherwise falls back per application:

- app_id, app_name: the application's base name
- app_description: "Petriflow application <base name>"
- app_version: the project version
- app_author: the caller-resolved default author, else "unknown"

Design Principles:

- Input directories and applications are processed strictly in order
- Exclusion patterns are compiled once, before anything is written
- A failing input directory does not prevent the others from being packaged
- Error handling uses exceptions; the CLI layer formats them for display

Example:
    Programmatic usage:
        ```python
        from pathlib import Path
        from petripack.config import load_effective_config
        from petripack.core import package_all

        result = package_all(load_effective_config(Path("petripack.yaml")))
        for archive in result.archives:
            print(f"{archive.zip_path}: {', '.join(archive.processes)}")
        ```

"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
import re

from petripack.build import build_application
from petripack.config.loader import PackageConfig
from petripack.discovery import (
    find_application_dirs,
    find_process_files,
    find_root_process_files,
)
from petripack.exceptions import ConfigError, PackagingError, PetripackError
from petripack.filtering import compile_exclusion_patterns
from petripack.logging import Logger, get_global_logger
from petripack.models import AppMetadata, ApplicationUnit, PackageRequest
from petripack.results import ArchiveResult, InputResult, RunResult

ROOT_APPLICATION = "root"
UNKNOWN_AUTHOR = "unknown"
DESCRIPTION_PREFIX = "Petriflow application "


def get_or_default(user_input: str | None, default: str | None) -> str:
    """Return user_input if it is non-empty, else default (or "")."""
    if user_input:
        return user_input
    return default if default is not None else ""


def resolve_metadata(request: PackageRequest, base_name: str) -> AppMetadata:
    """Apply the per-field fallback chain for one application.

    Args:
        request: Request carrying the user-supplied values.
        base_name: Application directory (or group) name.

    Returns:
        AppMetadata with every field resolved to a string.
    """
    meta = request.metadata
    return AppMetadata(
        app_id=get_or_default(meta.app_id, base_name),
        app_name=get_or_default(meta.app_name, base_name),
        app_description=get_or_default(
            meta.app_description, DESCRIPTION_PREFIX + base_name
        ),
        app_version=get_or_default(meta.app_version, request.project_version),
        app_author=get_or_default(
            meta.app_author, request.default_author or UNKNOWN_AUTHOR
        ),
    )


def single_zip_name(base_name: str, zip_prefix: str | None) -> str:
    """Archive file name for single-application mode."""
    if zip_prefix:
        return f"{zip_prefix}_{base_name}.zip"
    return f"{base_name}.zip"


def make_request(config: PackageConfig, input_path: Path) -> PackageRequest:
    """Build the PackageRequest for one configured input directory."""
    return PackageRequest(
        input_path=input_path,
        output_directory=config.resolved_output_directory,
        multi_application=config.multi_application,
        exclude=config.exclude,
        zip_prefix=config.zip_prefix,
        metadata=config.metadata,
        project_version=config.project.version,
        default_author=config.project.first_developer,
    )


def _validate_directories(request: PackageRequest, logger: Logger) -> None:
    """Check the input directory and create the output directory.

    Raises:
        ConfigError: If the input directory is missing or not a directory,
            or the output directory cannot be created.
    """
    input_path = request.input_path
    if not input_path.exists() or not input_path.is_dir():
        raise ConfigError(f"Input directory does not exist: {input_path.absolute()}")

    output_directory = request.output_directory
    if not output_directory.is_dir():
        try:
            output_directory.mkdir(parents=True, exist_ok=True)
        except OSError as err:
            raise ConfigError(
                f"Could not create output directory: {output_directory.absolute()}"
            ) from err
        logger.verbose("PACKAGE", f"Created output directory: {output_directory}")


def _make_unit(
    request: PackageRequest,
    root: Path,
    base_name: str,
    files: Sequence[Path],
    zip_name: str,
) -> ApplicationUnit:
    return ApplicationUnit(
        root=root,
        base_name=base_name,
        metadata=resolve_metadata(request, base_name),
        files=tuple(files),
        output_zip=request.output_directory / zip_name,
    )


def _package_multi(
    request: PackageRequest,
    patterns: Sequence[re.Pattern[str]],
    logger: Logger,
) -> list[ArchiveResult]:
    input_path = request.input_path
    archives: list[ArchiveResult] = []

    logger.verbose(
        "PACKAGE", f"Searching subdirectories for applications in: {input_path.absolute()}"
    )
    app_dirs = find_application_dirs(input_path)
    for app_dir in app_dirs:
        base_name = app_dir.name
        logger.verbose("PACKAGE", "-" * 68)
        logger.verbose("PACKAGE", f"Processing app directory: {base_name}")
        unit = _make_unit(
            request, app_dir, base_name, find_process_files(app_dir), f"{base_name}.zip"
        )
        archives.append(build_application(unit, patterns, logger=logger))

    root_files = find_root_process_files(input_path)
    if root_files:
        logger.verbose("PACKAGE", "-" * 68)
        logger.verbose(
            "PACKAGE",
            f"Processing root directory XML files as extra application: {ROOT_APPLICATION}",
        )
        unit = _make_unit(
            request, input_path, ROOT_APPLICATION, root_files, f"{ROOT_APPLICATION}.zip"
        )
        archives.append(build_application(unit, patterns, logger=logger))

    if not app_dirs and not root_files:
        logger.warning(
            "PACKAGE", f"No subdirectories or root XMLs found in {input_path.absolute()}"
        )

    return archives


def _package_single(
    request: PackageRequest,
    patterns: Sequence[re.Pattern[str]],
    logger: Logger,
) -> ArchiveResult:
    input_path = request.input_path
    base_name = input_path.name
    logger.verbose(
        "PACKAGE", "Processing single application (all XML files in input directory)..."
    )
    unit = _make_unit(
        request,
        input_path,
        base_name,
        find_process_files(input_path),
        single_zip_name(base_name, request.zip_prefix),
    )
    return build_application(unit, patterns, logger=logger)


def package_input_directory(
    request: PackageRequest,
    patterns: Sequence[re.Pattern[str]] | None = None,
    logger: Logger | None = None,
) -> InputResult:
    """Package every application found in one input directory.

    Args:
        request: The input directory and its packaging options.
        patterns: Pre-compiled exclusion patterns. Compiled from
            request.exclude when None.
        logger: Logger for progress output. Defaults to the global logger.

    Returns:
        InputResult dataclass with the following fields:

            - input_path (Path): The input directory.
            - archives (list[ArchiveResult]): Archives written, in order.
            - status (str): "success", or "empty" when multi-application
                mode found neither subdirectories nor root XML files.
            - error (None): Always None; failures raise instead.

    Raises:
        ConfigError: If the input directory is missing or not a directory,
            the output directory cannot be created, or an exclusion pattern
            is invalid.
        PackagingError: If the directory cannot be walked, two processes
            flatten to the same name, a file name is not valid UTF-8, or an
            archive cannot be written. Archives written before the failure
            remain.
    """
    if logger is None:
        logger = get_global_logger()
    if patterns is None:
        patterns = compile_exclusion_patterns(request.exclude)

    logger.verbose("PACKAGE", f"Input directory: {request.input_path.absolute()}")
    logger.verbose("PACKAGE", f"Output directory: {request.output_directory.absolute()}")
    logger.verbose("PACKAGE", f"multiApplication: {request.multi_application}")
    logger.verbose("PACKAGE", f"Exclude regex patterns: {list(request.exclude)}")

    _validate_directories(request, logger)

    try:
        if request.multi_application:
            archives = _package_multi(request, patterns, logger)
        else:
            archives = [_package_single(request, patterns, logger)]
    except (OSError, UnicodeError) as err:
        raise PackagingError(
            f"Error while zipping petriflow apps in {request.input_path}: {err}"
        ) from err

    status = "success" if archives else "empty"
    return InputResult(input_path=request.input_path, archives=archives, status=status)


def package_all(config: PackageConfig, logger: Logger | None = None) -> RunResult:
    """Package every configured input directory.

    This is the main entry point for the 'petripack package' command.

    1. Compile the exclusion patterns (a bad pattern aborts before any
       archive is written)
    2. For each input directory, in order, build a PackageRequest and
       package it
    3. Record a failing input directory and continue with the next one

    Args:
        config: Resolved packaging configuration.
        logger: Logger for progress output. Defaults to the global logger.

    Returns:
        RunResult with one InputResult per input directory. Its status is
            "failed" if any input directory failed, else "success".

    Raises:
        ConfigError: If an exclusion pattern is not a valid regular expression.

    Example:
        ```python
        result = package_all(config)
        if result.status != "success":
            for error in result.errors:
                print(f"Error: {error}")
        ```
    """
    if logger is None:
        logger = get_global_logger()

    patterns = compile_exclusion_patterns(config.exclude)
    input_paths = config.input_paths
    inputs: list[InputResult] = []

    for index, input_path in enumerate(input_paths, start=1):
        logger.step(index, len(input_paths), f"Packaging {input_path}...")
        request = make_request(config, input_path)
        try:
            result = package_input_directory(request, patterns, logger=logger)
        except PetripackError as err:
            logger.verbose("PACKAGE", f"[FAILED] {input_path}: {err}")
            result = InputResult(
                input_path=input_path, archives=[], status="failed", error=str(err)
            )
        inputs.append(result)

    status = "failed" if any(item.status == "failed" for item in inputs) else "success"
    return RunResult(inputs=inputs, status=status)
