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

"""Console output for petripack.

Packaging code reports progress through a small Logger protocol instead of
printing directly, so the CLI decides how chatty a run is and tests can
record messages.

Every line carries a bracketed prefix naming the stage that produced it:

    [1/2] Packaging /work/petriNets...          step (input directory)
    [CONFIG] Loading: /work/petripack.yaml      configuration layers
    [PACKAGE] Processing app directory: app1    orchestration
    [BUILD] Added: processes/Invoice.xml        archive assembly
    [WARNING] [FILTER] Excluding process ...    exclusion and empty inputs
    [MANIFEST] Manifest XML: ...                generated manifest (debug)

Steps and warnings are always shown. Verbose lines need --verbose and
debug lines need --debug, which also turns on verbose output.

Library functions take an optional ``logger`` argument and otherwise use
the module-global logger, which is silent until the CLI installs one with
set_global_logger().
"""

from __future__ import annotations

from typing import Protocol


class Logger(Protocol):
    """What packaging code needs from a logger."""

    def step(self, step: int, total: int, message: str) -> None:
        """Report the start of input directory ``step`` of ``total``."""
        ...

    def verbose(self, prefix: str, message: str) -> None: ...

    def debug(self, prefix: str, message: str) -> None: ...

    def warning(self, prefix: str, message: str) -> None:
        """Report something the user should see even in quiet runs."""
        ...


class DefaultLogger:
    """Logger that prints prefixed lines to stdout.

    Args:
        verbose: Show [PACKAGE]/[BUILD]/[CONFIG] progress lines.
        debug: Also show the merged configuration and every manifest.
    """

    def __init__(self, verbose: bool = False, debug: bool = False) -> None:
        self._verbose = verbose or debug
        self._debug = debug

    @staticmethod
    def _emit(prefix: str, message: str) -> None:
        print(f"[{prefix}] {message}")

    def step(self, step: int, total: int, message: str) -> None:
        print(f"[{step}/{total}] {message}")

    def verbose(self, prefix: str, message: str) -> None:
        if self._verbose:
            self._emit(prefix, message)

    def debug(self, prefix: str, message: str) -> None:
        if self._debug:
            self._emit(prefix, message)

    def warning(self, prefix: str, message: str) -> None:
        self._emit("WARNING", f"[{prefix}] {message}")


class SilentLogger:
    """Logger that drops everything; the default for library use."""

    def step(self, step: int, total: int, message: str) -> None:
        pass

    def verbose(self, prefix: str, message: str) -> None:
        pass

    def debug(self, prefix: str, message: str) -> None:
        pass

    def warning(self, prefix: str, message: str) -> None:
        pass


_global_logger: Logger = SilentLogger()


def get_logger(verbose: bool = False, debug: bool = False) -> Logger:
    """Return a stdout logger for the given --verbose/--debug flags."""
    return DefaultLogger(verbose=verbose, debug=debug)


def get_global_logger() -> Logger:
    """Return the logger used when a function is called without one."""
    return _global_logger


def set_global_logger(logger: Logger) -> None:
    """Install ``logger`` for calls that do not pass one explicitly."""
    global _global_logger
    _global_logger = logger
