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

"""Configuration validation module.

This module checks a petripack configuration file without writing any
archive. It is useful as a quick pre-flight step in CI pipelines.

Validation Checks:

- YAML syntax is valid and the document is a mapping
- 'project' and 'package' sections are mappings when present
- Known fields have the expected types
- Every exclusion pattern is a valid regular expression
- Every input directory exists and is a directory

Unknown keys, and manifest fields that YAML reads as numbers or dates
(e.g. an unquoted `version: 1.10`), are reported as warnings.

Example:
    Validate a configuration and handle results:
        ```python
        from pathlib import Path
        from petripack.validation import validate_config

        result = validate_config(Path("petripack.yaml"))
        if result.status == "valid":
            print(f"Configuration is valid with {result.input_count} input(s)")
        else:
            for error in result.errors:
                print(f"Error: {error}")
        ```

"""

from __future__ import annotations

from pathlib import Path

import yaml

from petripack.config.loader import (
    PACKAGE_KEYS,
    PROJECT_KEYS,
    load_effective_config,
    non_string_metadata,
)
from petripack.exceptions import ConfigError
from petripack.filtering import compile_exclusion_patterns
from petripack.logging import SilentLogger, get_global_logger
from petripack.results import ValidationResult

__all__ = ["validate_config"]


def _invalid(config_path: Path, errors: list[str], warnings: list[str]) -> ValidationResult:
    return ValidationResult(
        status="invalid",
        errors=errors,
        warnings=warnings,
        input_count=0,
        config_path=str(config_path),
    )


def validate_config(config_path: Path, verbose: bool = False) -> ValidationResult:
    """Validate a configuration file without packaging anything.

    Args:
        config_path: Path to the YAML configuration file.
        verbose: If True, print validation progress. Default is False.

    Returns:
        ValidationResult with status "valid" or "invalid", the error and
            warning messages, the number of configured input directories,
            and the validated path.
    """
    logger = get_global_logger()
    errors: list[str] = []
    warnings: list[str] = []

    if verbose:
        logger.verbose("VALIDATE", f"Validating configuration: {config_path}")

    if not config_path.exists():
        errors.append(f"Configuration file not found: {config_path}")
        return _invalid(config_path, errors, warnings)

    try:
        with open(config_path, encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as err:
        errors.append(f"Invalid YAML syntax: {err}")
        return _invalid(config_path, errors, warnings)
    except OSError as err:
        errors.append(f"Failed to read configuration file: {err}")
        return _invalid(config_path, errors, warnings)

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        errors.append("Configuration must be a YAML dictionary/mapping")
        return _invalid(config_path, errors, warnings)

    for key in raw:
        if key not in ("project", "package"):
            warnings.append(f"Unknown top-level key: {key}")

    for section_name, known in (("project", PROJECT_KEYS), ("package", PACKAGE_KEYS)):
        section = raw.get(section_name)
        if section is None:
            continue
        if not isinstance(section, dict):
            errors.append(f"Section '{section_name}' must be a mapping")
            continue
        for key in section:
            if key not in known:
                warnings.append(f"Unknown key in '{section_name}': {key}")

    if errors:
        return _invalid(config_path, errors, warnings)

    warnings.extend(non_string_metadata(raw))

    if verbose:
        logger.verbose("VALIDATE", "[OK] YAML structure is valid")

    try:
        config = load_effective_config(config_path, logger=SilentLogger())
    except ConfigError as err:
        errors.append(str(err))
        return _invalid(config_path, errors, warnings)

    try:
        compile_exclusion_patterns(config.exclude)
    except ConfigError as err:
        errors.append(str(err))

    for input_path in config.input_paths:
        if not input_path.is_dir():
            errors.append(f"Input directory does not exist: {input_path}")
        elif verbose:
            logger.verbose("VALIDATE", f"[OK] Input directory: {input_path}")

    if config.zip_prefix and config.multi_application:
        warnings.append("zip_prefix is ignored when multi_application is enabled")

    status = "valid" if not errors else "invalid"
    if verbose:
        if status == "valid":
            logger.verbose("VALIDATE", "[OK] Configuration is valid!")
        else:
            logger.verbose("VALIDATE", f"[ERROR] Configuration has {len(errors)} error(s)")

    return ValidationResult(
        status=status,
        errors=errors,
        warnings=warnings,
        input_count=len(config.input_paths),
        config_path=str(config_path),
    )
