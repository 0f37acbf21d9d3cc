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

"""Regex-based process exclusion.

A process is excluded when its name matches one of the configured patterns
as a whole string. A pattern that only matches part of the name does not
exclude it:

    is_excluded("UnitTest", [re.compile(".*Test.*")])  # True
    is_excluded("UnitTest", [re.compile("Test")])      # False

Patterns are compiled once, before any archive is written, so a malformed
pattern fails the run up front.
"""

from __future__ import annotations

from collections.abc import Iterable
import re

from petripack.exceptions import ConfigError

__all__ = ["compile_exclusion_patterns", "is_excluded"]


def compile_exclusion_patterns(patterns: Iterable[str] | None) -> list[re.Pattern[str]]:
    """Compile exclusion patterns.

    Args:
        patterns: Regular expression strings; None or empty excludes nothing.

    Returns:
        Compiled patterns, in configuration order.

    Raises:
        ConfigError: If a pattern is not a valid regular expression.
    """
    if not patterns:
        return []

    compiled: list[re.Pattern[str]] = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern))
        except re.error as err:
            raise ConfigError(f"Invalid exclude pattern {pattern!r}: {err}") from err
    return compiled


def is_excluded(process_name: str, patterns: Iterable[re.Pattern[str]]) -> bool:
    """Return True if any pattern matches process_name completely."""
    return any(pattern.fullmatch(process_name) for pattern in patterns)
