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

"""ZIP archive assembly for Petriflow applications.

Archive layout:

    manifest.xml                  generated manifest (UTF-8)
    processes/<flat name>.xml     one entry per included process file

Design Principles:
    - manifest.xml is always the first entry
    - Process entries follow in inclusion order, with the raw source bytes
    - Entry names must be unique and encodable as UTF-8; both are checked
      before the archive file is opened
    - Any read or write failure raises PackagingError; a partially written
      file may be left behind but is never reported as success

Example:
    ```python
    from petripack.build.archive import write_archive

    write_archive(entries, manifest_xml, Path("target/petriflow-zips/app.zip"))
    ```
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
import shutil
import zipfile

from petripack.exceptions import PackagingError
from petripack.logging import Logger, get_global_logger
from petripack.manifest import MANIFEST_ENTRY
from petripack.models import ProcessEntry

PROCESSES_DIR = "processes"


def process_entry_name(entry: ProcessEntry) -> str:
    """Return the archive entry name for a process file."""
    return f"{PROCESSES_DIR}/{entry.flat_name}"


def _check_entry_names(entries: Sequence[ProcessEntry], output_zip: Path) -> None:
    """Reject entries that would collide or cannot be stored in the archive.

    Nested paths are flattened, so "a_b.xml" and "a/b.xml" both become
    processes/a_b.xml.

    Raises:
        PackagingError: On a duplicate or non-UTF-8 entry name.
    """
    seen: dict[str, ProcessEntry] = {}
    for entry in entries:
        entry_name = process_entry_name(entry)
        try:
            entry_name.encode("utf-8")
        except UnicodeEncodeError as err:
            raise PackagingError(
                f"Cannot store {entry.path} in {output_zip}: "
                "file name is not valid UTF-8"
            ) from err
        first = seen.get(entry_name)
        if first is not None:
            raise PackagingError(
                f"Duplicate archive entry {entry_name} in {output_zip}: "
                f"{first.path} and {entry.path}"
            )
        seen[entry_name] = entry


def write_archive(
    entries: Sequence[ProcessEntry],
    manifest_xml: str,
    output_zip: Path,
    logger: Logger | None = None,
) -> Path:
    """Write the manifest and process files into a ZIP archive.

    Args:
        entries: Included process entries, in archive order.
        manifest_xml: Generated manifest text.
        output_zip: Destination archive path. Overwritten if it exists.
        logger: Logger for progress output. Defaults to the global logger.

    Returns:
        The archive path.

    Raises:
        PackagingError: If two entries share a name, a name or the manifest
            cannot be encoded as UTF-8, a process file cannot be read, or
            the archive cannot be written.
    """
    if logger is None:
        logger = get_global_logger()

    _check_entry_names(entries, output_zip)
    try:
        manifest_bytes = manifest_xml.encode("utf-8")
    except UnicodeEncodeError as err:
        raise PackagingError(
            f"Failed to write archive {output_zip}: manifest is not valid UTF-8: {err}"
        ) from err

    try:
        with zipfile.ZipFile(output_zip, "w", zipfile.ZIP_DEFLATED) as zf:
            zf.writestr(MANIFEST_ENTRY, manifest_bytes)
            logger.verbose("BUILD", f"Added: {MANIFEST_ENTRY}")

            for entry in entries:
                entry_name = process_entry_name(entry)
                with entry.path.open("rb") as src, zf.open(entry_name, "w") as dst:
                    shutil.copyfileobj(src, dst)
                logger.verbose("BUILD", f"Added: {entry_name}")
    except (OSError, UnicodeError, zipfile.BadZipFile, zipfile.LargeZipFile) as err:
        raise PackagingError(f"Failed to write archive {output_zip}: {err}") from err

    return output_zip
