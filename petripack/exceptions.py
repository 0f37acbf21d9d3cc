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

"""Exception hierarchy for petripack.

This module defines a small exception hierarchy that allows callers to
distinguish between the two ways a packaging run can fail:

- ConfigError: Configuration problems (missing input directory, output
    directory that cannot be created, malformed exclusion regex, invalid
    YAML configuration)
- PackagingError: I/O problems while reading process files or writing
    archives

Both inherit from PetripackError, so a build step can catch every petripack
failure with a single except clause.

Example:
    Catching specific error types:
        ```python
        from petripack.core import package_all
        from petripack.exceptions import ConfigError, PackagingError

        try:
            result = package_all(config)
        except ConfigError as e:
            print(f"Configuration error: {e}")
        except PackagingError as e:
            print(f"Packaging error: {e}")
        ```
"""

from __future__ import annotations

__all__ = [
    "PetripackError",
    "ConfigError",
    "PackagingError",
]


class PetripackError(Exception):
    """Base exception for all petripack errors."""

    pass


class ConfigError(PetripackError):
    """Raised for configuration-related errors.

    This exception is raised when there are problems with:

    - The input directory (missing or not a directory)
    - The output directory (cannot be created)
    - Exclusion patterns (invalid regular expression)
    - The YAML configuration file (missing, unparsable, wrong structure)

    Example:
        Catching configuration errors:
            ```python
            from petripack.exceptions import ConfigError

            try:
                config = load_effective_config(Path("petripack.yaml"))
            except ConfigError as e:
                print(f"Config error: {e}")
            ```
    """

    pass


class PackagingError(PetripackError):
    """Raised for archive-writing errors.

    This exception is raised when a process file cannot be read or the ZIP
    archive cannot be written (disk full, permission denied, file removed
    while the directory was being walked). A partially written archive may
    remain on disk, but it is never reported as a successful result.
    """

    pass
