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

"""Name derivation for process files.

Archives store every process under a flat processes/ directory, so nested
paths are flattened by joining their segments with "_":

    orders/billing/Invoice.xml  ->  orders_billing_Invoice.xml  (flat name)
                                ->  orders_billing_Invoice      (process name)

A segment that itself contains "_" makes the flattening ambiguous; this is
accepted.
"""

from __future__ import annotations

from pathlib import Path

from petripack.models import ProcessEntry

XML_SUFFIX = ".xml"


def strip_xml_suffix(name: str) -> str:
    """Remove one trailing ".xml" (case-sensitive) from name."""
    if name.endswith(XML_SUFFIX):
        return name[: -len(XML_SUFFIX)]
    return name


def flatten_name(root: Path, file: Path) -> str:
    """Flatten the path of file relative to root into a single file name.

    Args:
        root: Application root.
        file: A file located under root.

    Returns:
        The relative path segments joined with "_", or the bare file name
        when file sits directly under root.

    Example:
        ```python
        flatten_name(Path("app"), Path("app/a/b/c.xml"))  # "a_b_c.xml"
        flatten_name(Path("app"), Path("app/c.xml"))      # "c.xml"
        ```
    """
    return "_".join(file.relative_to(root).parts)


def derive_process_name(root: Path, file: Path) -> str:
    """Return the flattened name of file without its ".xml" suffix."""
    return strip_xml_suffix(flatten_name(root, file))


def make_process_entry(root: Path, file: Path) -> ProcessEntry:
    """Build a ProcessEntry for file under root."""
    flat_name = flatten_name(root, file)
    return ProcessEntry(
        path=file.absolute(),
        relative_path=file.relative_to(root),
        flat_name=flat_name,
        process_name=strip_xml_suffix(flat_name),
    )
