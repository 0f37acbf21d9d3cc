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

"""Public API return types for petripack.

This module defines dataclasses for return values from public API functions:
building a single archive, packaging an input directory, a complete run over
all configured input directories, and configuration validation.

All dataclasses are frozen (immutable) to prevent accidental mutation of
return values.

Example:
    Using result types:
        ```python
        from petripack.config import load_effective_config
        from petripack.core import package_all

        result = package_all(load_effective_config(Path("petripack.yaml")))
        for archive in result.archives:
            print(archive.zip_path, archive.processes)
        ```

Note:
    Only public API return types belong in this module. Domain types
    (PackageRequest, ApplicationUnit, ProcessEntry) live in petripack.models.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ArchiveResult:
    """Result from writing one application archive.

    Attributes:
        base_name: Application directory (or group) name.
        app_id: Application identifier written into the manifest.
        zip_path: Path to the created ZIP archive.
        processes: Included process names, in manifest order.
        excluded: Process names dropped by exclusion patterns.
        status: Always "success" for a written archive.
    """

    base_name: str
    app_id: str
    zip_path: Path
    processes: list[str]
    excluded: list[str]
    status: str


@dataclass(frozen=True)
class InputResult:
    """Result from packaging one input directory.

    Attributes:
        input_path: The input directory.
        archives: Archives written for this directory.
        status: "success", "empty" (multi-application mode found nothing),
            or "failed".
        error: Error message when status is "failed".
    """

    input_path: Path
    archives: list[ArchiveResult]
    status: str
    error: str | None = None


@dataclass(frozen=True)
class RunResult:
    """Result from packaging every configured input directory.

    Attributes:
        inputs: One InputResult per input directory, in configuration order.
        status: "success" if every input directory succeeded, else "failed".
    """

    inputs: list[InputResult]
    status: str

    @property
    def archives(self) -> list[ArchiveResult]:
        """All archives written during the run, in order."""
        return [archive for item in self.inputs for archive in item.archives]

    @property
    def errors(self) -> list[str]:
        """Error messages of the failed input directories."""
        return [item.error for item in self.inputs if item.error]


@dataclass(frozen=True)
class ValidationResult:
    """Result from validating a configuration file.

    Attributes:
        status: Validation status ("valid" or "invalid").
        errors: List of error messages (empty if valid).
        warnings: List of warning messages.
        input_count: Number of input directories configured.
        config_path: String path to the validated configuration file.
    """

    status: str
    errors: list[str]
    warnings: list[str]
    input_count: int
    config_path: str
