"""
Tests for petripack.discovery module.

Tests process file discovery including:
- Recursive discovery for single-application mode
- Flat root listing and subdirectory enumeration for multi-application mode
- manifest.xml and non-XML filtering
"""

from __future__ import annotations

import pytest

from petripack.discovery import (
    find_application_dirs,
    find_process_files,
    find_root_process_files,
    is_process_file,
)

pytestmark = pytest.mark.unit


class TestIsProcessFile:
    """Tests for is_process_file."""

    def test_xml_file_is_process(self, tmp_path):
        """Test a plain .xml file is a process file."""
        f = tmp_path / "Order.xml"
        f.write_text("<document/>")
        assert is_process_file(f)

    @pytest.mark.parametrize("name", ["manifest.xml", "MANIFEST.xml", "Manifest.XML"])
    def test_manifest_is_not_process(self, tmp_path, name):
        """Test manifest.xml is skipped regardless of case."""
        f = tmp_path / name
        f.write_text("<cases/>")
        assert not is_process_file(f)

    def test_other_extension_is_not_process(self, tmp_path):
        """Test non-XML files are skipped."""
        f = tmp_path / "notes.txt"
        f.write_text("notes")
        assert not is_process_file(f)

    def test_upper_case_extension_is_not_process(self, tmp_path):
        """Test the .xml suffix match is case-sensitive."""
        f = tmp_path / "Order.XML"
        f.write_text("<document/>")
        assert not is_process_file(f)

    def test_directory_named_xml_is_not_process(self, tmp_path):
        """Test a directory ending in .xml is skipped."""
        d = tmp_path / "folder.xml"
        d.mkdir()
        assert not is_process_file(d)


class TestFindProcessFiles:
    """Tests for recursive discovery."""

    def test_finds_nested_files(self, make_tree):
        """Test every XML in the tree is found."""
        root = make_tree("app", ["Invoice.xml", "a/Payment.xml", "a/b/Refund.xml"])

        found = find_process_files(root)

        assert sorted(p.relative_to(root).as_posix() for p in found) == [
            "Invoice.xml",
            "a/Payment.xml",
            "a/b/Refund.xml",
        ]

    def test_skips_manifest_and_other_files(self, make_tree):
        """Test manifest.xml and non-XML files are skipped at every level."""
        root = make_tree("app", ["Invoice.xml", "manifest.xml", "sub/Manifest.xml"])
        (root / "README.md").write_text("readme")

        found = find_process_files(root)

        assert [p.name for p in found] == ["Invoice.xml"]

    def test_empty_directory(self, tmp_path):
        """Test an empty tree yields no files."""
        assert find_process_files(tmp_path) == []

    def test_order_is_stable(self, make_tree):
        """Test repeated walks return the same order."""
        root = make_tree("app", ["c.xml", "a.xml", "x/b.xml"])
        assert find_process_files(root) == find_process_files(root)


class TestMultiApplicationDiscovery:
    """Tests for root listing and subdirectory enumeration."""

    def test_application_dirs(self, make_tree):
        """Test only immediate subdirectories are listed."""
        root = make_tree("apps", ["app1/Order.xml", "app2/deep/Shipment.xml", "Loose.xml"])

        dirs = find_application_dirs(root)

        assert sorted(d.name for d in dirs) == ["app1", "app2"]

    def test_root_files_are_not_recursive(self, make_tree):
        """Test root listing ignores files in subdirectories."""
        root = make_tree("apps", ["app1/Order.xml", "Loose.xml", "manifest.xml"])

        files = find_root_process_files(root)

        assert [f.name for f in files] == ["Loose.xml"]

    def test_nothing_found(self, tmp_path):
        """Test an empty input directory yields nothing."""
        assert find_application_dirs(tmp_path) == []
        assert find_root_process_files(tmp_path) == []
