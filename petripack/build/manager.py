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

"""Build manager for a single Petriflow application archive.

This module turns one ApplicationUnit into one ZIP archive: it names and
filters the discovered process files, renders manifest.xml, and writes the
archive.

Private Helpers:
    - _select_processes: Split discovered files into included and excluded

Design Principles:
    - The manifest allowedNets list and the processes/ entries are built
      from the same included list, so they always agree
    - Excluded processes produce no output and are reported as warnings
    - The manifest is regenerated on every run

Example:
    from petripack.build import build_application

    result = build_application(unit, patterns)
    print(f"Built: {result.zip_path}")
"""

from __future__ import annotations

from collections.abc import Sequence
import re

from petripack.build.archive import write_archive
from petripack.filtering import is_excluded
from petripack.logging import Logger, get_global_logger
from petripack.manifest import generate_manifest_xml
from petripack.models import ApplicationUnit, ProcessEntry
from petripack.naming import make_process_entry
from petripack.results import ArchiveResult


def _select_processes(
    unit: ApplicationUnit,
    patterns: Sequence[re.Pattern[str]],
    logger: Logger,
) -> tuple[list[ProcessEntry], list[str]]:
    """Name every discovered file and drop the excluded ones.

    Args:
        unit: Application being built.
        patterns: Compiled exclusion patterns.
        logger: Logger for exclusion warnings.

    Returns:
        A tuple (included, excluded) where included holds the ProcessEntry
            objects to archive, in discovery order, and excluded holds the
            names of the dropped processes.
    """
    included: list[ProcessEntry] = []
    excluded: list[str] = []

    for path in unit.files:
        entry = make_process_entry(unit.root, path)
        if is_excluded(entry.process_name, patterns):
            logger.warning("FILTER", f"Excluding process by pattern: {entry.process_name}")
            excluded.append(entry.process_name)
        else:
            included.append(entry)

    return included, excluded


def build_application(
    unit: ApplicationUnit,
    patterns: Sequence[re.Pattern[str]],
    logger: Logger | None = None,
) -> ArchiveResult:
    """Build the ZIP archive for one application.

    Args:
        unit: Application to package, with resolved metadata and the
            discovered process files.
        patterns: Compiled exclusion patterns.
        logger: Logger for progress output. Defaults to the global logger.

    Returns:
        ArchiveResult dataclass with the following fields:

            - base_name (str): Application directory (or group) name.
            - app_id (str): Application identifier written into the manifest.
            - zip_path (Path): Path to the written archive.
            - processes (list[str]): Included process names, in manifest order.
            - excluded (list[str]): Process names dropped by exclusion patterns.
            - status (str): Always "success".

    Raises:
        PackagingError: If the archive cannot be written.
    """
    if logger is None:
        logger = get_global_logger()

    meta = unit.metadata
    logger.verbose("BUILD", f"Zipping application: {unit.base_name}")
    logger.verbose("BUILD", f" - Source directory: {unit.root.absolute()}")
    logger.verbose("BUILD", f" - Output zip: {unit.output_zip.absolute()}")
    logger.verbose("BUILD", " - Manifest values:")
    logger.verbose("BUILD", f"      appId: {meta.app_id}")
    logger.verbose("BUILD", f"      appName: {meta.app_name}")
    logger.verbose("BUILD", f"      appDescription: {meta.app_description}")
    logger.verbose("BUILD", f"      appVersion: {meta.app_version}")
    logger.verbose("BUILD", f"      appAuthor: {meta.app_author}")

    included, excluded = _select_processes(unit, patterns, logger)
    process_names = [entry.process_name for entry in included]

    logger.verbose("BUILD", f"Found {len(process_names)} INCLUDED process XML files:")
    for name in process_names:
        logger.verbose("BUILD", f"   - {name}")

    manifest_xml = generate_manifest_xml(
        process_names,
        app_id=meta.app_id,
        app_name=meta.app_name,
        description=meta.app_description,
        version=meta.app_version,
        author=meta.app_author,
    )
    logger.debug("MANIFEST", f"Manifest XML:\n{manifest_xml}")

    zip_path = write_archive(included, manifest_xml, unit.output_zip, logger=logger)
    logger.verbose("BUILD", f"[OK] ZIP created: {zip_path.absolute()}")

    return ArchiveResult(
        base_name=unit.base_name,
        app_id=meta.app_id or "",
        zip_path=zip_path,
        processes=process_names,
        excluded=excluded,
        status="success",
    )
