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

"""manifest.xml generation for Petriflow application archives.

The manifest is a Petriflow "cases" document describing the application
(id, name, description, version, author) and listing the processes it
contains in a caseRef data field. The runtime that imports the archive
reads this exact layout, so the document is produced from a fixed text
template rather than an XML serializer:

- Output is byte-identical for identical inputs
- Process names appear in allowedNets in the order given
- Every value is escaped for & < > " ' (ampersand first)

Example:
    ```python
    from petripack.manifest import generate_manifest_xml

    xml = generate_manifest_xml(
        ["Invoice", "Payment"],
        app_id="billing",
        app_name="Billing",
        description="Petriflow application billing",
        version="1.0.0",
        author="unknown",
    )
    ```
"""

from __future__ import annotations

from collections.abc import Iterable

__all__ = [
    "MANIFEST_ENTRY",
    "SCHEMA_LOCATION",
    "escape_xml",
    "generate_manifest_xml",
]

MANIFEST_ENTRY = "manifest.xml"

SCHEMA_LOCATION = "https://github.com/netgrif/petriflow/blob/PF-78/petriflow.schema.xsd"

_VALUE_INDENT = " " * 16

_MANIFEST_TEMPLATE = """\
<cases xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance"
       xsi:noNamespaceSchemaLocation="{schema_location}">
    <case>
        <title>{title}</title>
        <dataField type="text">
            <id>app_id</id>
            <value>{app_id}</value>
            <version>1</version>
        </dataField>
        <dataField type="text">
            <id>name</id>
            <value>{app_name}</value>
            <version>1</version>
        </dataField>
        <dataField type="text">
            <id>description</id>
            <value>{description}</value>
            <version>1</version>
        </dataField>
        <dataField type="text">
            <id>version</id>
            <value>{version}</value>
            <version>1</version>
        </dataField>
        <dataField type="text">
            <id>author</id>
            <value>{author}</value>
            <version>1</version>
        </dataField>
        <dataField type="caseRef">
            <id>processes</id>
            <allowedNets>
{allowed_nets}
            </allowedNets>
            <version>1</version>
        </dataField>
    </case>
</cases>
"""


def escape_xml(value: str | None) -> str:
    """Escape the five XML special characters.

    Args:
        value: Text to escape. None is treated as an empty string.

    Returns:
        The escaped text.

    Example:
        >>> escape_xml('Tom & "Jerry"')
        'Tom &amp; &quot;Jerry&quot;'
    """
    if value is None:
        return ""
    return (
        value.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&apos;")
    )


def generate_manifest_xml(
    process_names: Iterable[str],
    app_id: str | None,
    app_name: str | None,
    description: str | None,
    version: str | None,
    author: str | None,
) -> str:
    """Render manifest.xml for one application.

    Args:
        process_names: Included process names, in archive order.
        app_id: Application identifier.
        app_name: Application name; also used as the case title.
        description: Application description.
        version: Application version.
        author: Application author.

    Returns:
        The manifest document text, ending with a newline.
    """
    allowed_nets = "\n".join(
        f"{_VALUE_INDENT}<value>{escape_xml(name)}</value>" for name in process_names
    )
    return _MANIFEST_TEMPLATE.format(
        schema_location=SCHEMA_LOCATION,
        title=escape_xml(app_name),
        app_id=escape_xml(app_id),
        app_name=escape_xml(app_name),
        description=escape_xml(description),
        version=escape_xml(version),
        author=escape_xml(author),
        allowed_nets=allowed_nets,
    )
