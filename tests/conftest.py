"""
Pytest configuration and shared fixtures for petripack tests.

This module provides reusable fixtures and test utilities used across
the test suite.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any
import zipfile

import pytest
import yaml

PROCESS_XML = '<?xml version="1.0" encoding="UTF-8"?>\n<document><id>{name}</id></document>\n'


class RecordingLogger:
    """Logger that records every message instead of printing it."""

    def __init__(self) -> None:
        self.steps: list[tuple[int, int, str]] = []
        self.messages: list[tuple[str, str, str]] = []

    def step(self, step: int, total: int, message: str) -> None:
        self.steps.append((step, total, message))

    def verbose(self, prefix: str, message: str) -> None:
        self.messages.append(("verbose", prefix, message))

    def debug(self, prefix: str, message: str) -> None:
        self.messages.append(("debug", prefix, message))

    def warning(self, prefix: str, message: str) -> None:
        self.messages.append(("warning", prefix, message))

    @property
    def warnings(self) -> list[str]:
        return [message for level, _, message in self.messages if level == "warning"]


@pytest.fixture
def tmp_test_dir(tmp_path: Path) -> Path:
    """
    Provide a temporary directory for test artifacts.

    Automatically cleaned up after test completion.
    """
    return tmp_path


@pytest.fixture
def recording_logger() -> RecordingLogger:
    """Provide a logger that records messages for assertions."""
    return RecordingLogger()


@pytest.fixture
def make_tree(tmp_test_dir: Path):
    """
    Factory fixture for creating directory trees of process files.

    Usage:
        root = make_tree("petriNets", ["Invoice.xml", "sub/Payment.xml"])
    """

    def _create(name: str, files: list[str]) -> Path:
        root = tmp_test_dir / name
        root.mkdir(parents=True, exist_ok=True)
        for rel in files:
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(PROCESS_XML.format(name=Path(rel).stem), encoding="utf-8")
        return root

    return _create


@pytest.fixture
def create_yaml_file(tmp_test_dir: Path):
    """
    Factory fixture for creating temporary YAML files.

    Usage:
        yaml_path = create_yaml_file("petripack.yaml", {"package": {...}})
    """

    def _create(filename: str, data: dict[str, Any]) -> Path:
        path = tmp_test_dir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.dump(data, f)
        return path

    return _create


def read_archive(zip_path: Path) -> dict[str, bytes]:
    """Return the entries of a ZIP archive as {name: content}, in order."""
    with zipfile.ZipFile(zip_path) as zf:
        return {name: zf.read(name) for name in zf.namelist()}


def allowed_nets(manifest: bytes | str) -> list[str]:
    """Extract the allowedNets values from manifest text."""
    if isinstance(manifest, bytes):
        manifest = manifest.decode("utf-8")
    block = manifest.split("<allowedNets>")[1].split("</allowedNets>")[0]
    return [
        line.strip()[len("<value>") : -len("</value>")]
        for line in block.splitlines()
        if line.strip()
    ]
