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

"""Domain types for petripack.

These dataclasses describe one packaging run as it flows through the
pipeline:

- PackageRequest: one per configured input directory
- ApplicationUnit: one per archive to be written
- ProcessEntry: one per process XML file found under an application root

All types are frozen; a request is never modified once processing of its
input directory has started.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class AppMetadata:
    """Application metadata written into the manifest.

    On a PackageRequest the fields hold the caller-supplied values and may
    be None or empty. On an ApplicationUnit every field has been resolved
    against its fallback.
    """

    app_id: str | None = None
    app_name: str | None = None
    app_description: str | None = None
    app_version: str | None = None
    app_author: str | None = None


@dataclass(frozen=True)
class PackageRequest:
    """Everything needed to package one input directory.

    Attributes:
        input_path: Directory holding the process XML files.
        output_directory: Directory that receives the ZIP archives.
        multi_application: Treat each immediate subdirectory as its own
            application instead of packaging the whole tree as one.
        exclude: Regular expressions matched against process names.
        zip_prefix: Prefix for the archive name (single-application mode only).
        metadata: User-supplied manifest values.
        project_version: Fallback for the manifest version.
        default_author: Fallback for the manifest author, already resolved
            by the caller (None when the project declares no developers).
    """

    input_path: Path
    output_directory: Path
    multi_application: bool = False
    exclude: tuple[str, ...] = ()
    zip_prefix: str = ""
    metadata: AppMetadata = field(default_factory=AppMetadata)
    project_version: str | None = None
    default_author: str | None = None


@dataclass(frozen=True)
class ProcessEntry:
    """A single process XML file and the names derived from its location.

    Attributes:
        path: Absolute path of the source file.
        relative_path: Path relative to the application root.
        flat_name: Relative path segments joined with "_"; used as the
            archive entry name under processes/.
        process_name: flat_name without its ".xml" suffix; used for
            exclusion matching and as the manifest allowedNets value.
    """

    path: Path
    relative_path: Path
    flat_name: str
    process_name: str


@dataclass(frozen=True)
class ApplicationUnit:
    """One application that becomes one ZIP archive.

    Attributes:
        root: Application root that process names are derived against.
        base_name: Directory (or group) name used for defaults and naming.
        metadata: Fully resolved manifest values.
        files: Discovered process XML files, in traversal order.
        output_zip: Destination archive path.
    """

    root: Path
    base_name: str
    metadata: AppMetadata
    files: tuple[Path, ...]
    output_zip: Path
