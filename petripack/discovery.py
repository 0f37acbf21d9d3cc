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

"""Process file discovery for petripack.

Functions here only look at the filesystem and return ordered lists of
paths; they never log. Order is whatever the directory traversal yields and
is not sorted.

A process file is any non-directory whose path ends with ".xml", except a
file named manifest.xml (compared case-insensitively), which is reserved for
the generated manifest.

Example:
    Single-application discovery:
        ```python
        from pathlib import Path
        from petripack.discovery import find_process_files

        files = find_process_files(Path("src/main/resources/petriNets"))
        ```

    Multi-application discovery:
        ```python
        from petripack.discovery import (
            find_application_dirs,
            find_root_process_files,
        )

        for app_dir in find_application_dirs(root):
            files = find_process_files(app_dir)
        loose = find_root_process_files(root)
        ```
"""

from __future__ import annotations

import os
from pathlib import Path

from petripack.manifest import MANIFEST_ENTRY

__all__ = [
    "is_process_file",
    "find_process_files",
    "find_root_process_files",
    "find_application_dirs",
]


def _raise_walk_error(err: OSError) -> None:
    raise err


def is_process_file(path: Path) -> bool:
    """Return True if path is a process XML file.

    Args:
        path: Candidate path.

    Returns:
        True for a non-directory ending in ".xml" that is not manifest.xml.
    """
    if path.is_dir():
        return False
    if not str(path).endswith(".xml"):
        return False
    return path.name.lower() != MANIFEST_ENTRY


def find_process_files(root: Path) -> list[Path]:
    """Recursively collect every process file under root.

    Args:
        root: Application root directory.

    Returns:
        Process file paths in traversal order.

    Raises:
        OSError: If a directory cannot be listed during the walk.
    """
    found: list[Path] = []
    for dirpath, _dirnames, filenames in os.walk(root, onerror=_raise_walk_error):
        for name in filenames:
            candidate = Path(dirpath) / name
            if is_process_file(candidate):
                found.append(candidate)
    return found


def find_root_process_files(root: Path) -> list[Path]:
    """Collect process files sitting directly in root (non-recursive).

    Args:
        root: Input directory.

    Returns:
        Process file paths in listing order.
    """
    return [p for p in root.iterdir() if is_process_file(p)]


def find_application_dirs(root: Path) -> list[Path]:
    """List the immediate subdirectories of root.

    In multi-application mode each one becomes a separate application.

    Args:
        root: Input directory.

    Returns:
        Subdirectory paths in listing order.
    """
    return [p for p in root.iterdir() if p.is_dir()]
