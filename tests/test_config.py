"""
Tests for petripack.config.loader module.

Tests configuration loading including:
- Built-in defaults
- YAML file and override layering
- Path resolution against the config file and basedir
- Project property fallbacks
- Error handling for malformed files
"""

from __future__ import annotations

from pathlib import Path

import pytest

from petripack.config.loader import (
    OUTPUT_SUBDIRECTORY,
    ProjectInfo,
    _deep_merge_dicts,
    load_effective_config,
)
from petripack.exceptions import ConfigError

pytestmark = pytest.mark.unit


class TestDefaults:
    """Tests for configuration without a file."""

    def test_defaults_only(self, tmp_path, monkeypatch):
        """Test defaults resolve against the working directory."""
        monkeypatch.chdir(tmp_path)

        config = load_effective_config()

        cwd = tmp_path.resolve()
        assert config.input_directory == cwd / "src" / "main" / "resources" / "petriNets"
        assert config.input_paths == [config.input_directory]
        assert config.output_directory is None
        assert config.resolved_output_directory == cwd / "target" / OUTPUT_SUBDIRECTORY
        assert config.multi_application is False
        assert config.exclude == ()
        assert config.zip_prefix == ""
        assert config.config_path is None

    def test_metadata_unset(self, tmp_path, monkeypatch):
        """Test app_* values stay None with no project properties."""
        monkeypatch.chdir(tmp_path)

        config = load_effective_config()

        assert config.app_id is None
        assert config.app_author is None
        assert config.metadata.app_name is None


class TestConfigLoading:
    """Tests for loading a YAML file."""

    def test_load_package_section(self, create_yaml_file, tmp_test_dir):
        """Test package options are read from the file."""
        path = create_yaml_file(
            "petripack.yaml",
            {
                "package": {
                    "input_directory": "nets",
                    "output_directory": "dist",
                    "multi_application": True,
                    "exclude": [".*Test.*"],
                    "zip_prefix": "release",
                }
            },
        )

        config = load_effective_config(path)

        base = tmp_test_dir.resolve()
        assert config.input_directory == base / "nets"
        assert config.output_directory == base / "dist"
        assert config.resolved_output_directory == base / "dist"
        assert config.multi_application is True
        assert config.exclude == (".*Test.*",)
        assert config.zip_prefix == "release"
        assert config.config_path == path.resolve()

    def test_paths_resolve_against_config_file(self, create_yaml_file, tmp_test_dir):
        """Test basedir is relative to the config file, not the cwd."""
        path = create_yaml_file(
            "conf/petripack.yaml",
            {"project": {"basedir": ".."}, "package": {"input_directory": "nets"}},
        )

        config = load_effective_config(path)

        assert config.project.basedir == tmp_test_dir.resolve()
        assert config.input_directory == tmp_test_dir.resolve() / "nets"

    def test_build_directory_drives_output(self, create_yaml_file, tmp_test_dir):
        """Test the default output directory follows build_directory."""
        path = create_yaml_file(
            "petripack.yaml", {"project": {"build_directory": "build"}}
        )

        config = load_effective_config(path)

        assert config.resolved_output_directory == (
            tmp_test_dir.resolve() / "build" / OUTPUT_SUBDIRECTORY
        )

    def test_absolute_paths_kept(self, create_yaml_file, tmp_test_dir):
        """Test absolute paths are not re-based."""
        target = tmp_test_dir / "elsewhere"
        path = create_yaml_file(
            "petripack.yaml", {"package": {"input_directory": str(target)}}
        )

        config = load_effective_config(path)

        assert config.input_directory == target.resolve()

    def test_input_directories(self, create_yaml_file, tmp_test_dir):
        """Test input_directories replaces input_directory when non-empty."""
        path = create_yaml_file(
            "petripack.yaml",
            {"package": {"input_directory": "single", "input_directories": ["a", "b"]}},
        )

        config = load_effective_config(path)

        base = tmp_test_dir.resolve()
        assert config.input_paths == [base / "a", base / "b"]

    def test_numeric_values_become_strings(self, create_yaml_file):
        """Test scalar YAML values such as versions are read as strings."""
        path = create_yaml_file("petripack.yaml", {"project": {"version": 2.5}})

        config = load_effective_config(path)

        assert config.project.version == "2.5"
        assert config.app_version == "2.5"

    def test_unquoted_version_warns(self, tmp_test_dir, recording_logger):
        """Test a version YAML reads as a number is flagged, quoted ones are not."""
        path = tmp_test_dir / "petripack.yaml"
        path.write_text(
            "project:\n  version: 1.10\n  name: '2.0'\npackage:\n  app_version: 3\n"
        )

        config = load_effective_config(path, logger=recording_logger)

        assert config.project.version == "1.1"
        assert recording_logger.warnings == [
            "Field 'project.version' is not a string (1.1 as float); "
            "quote it in YAML to keep its exact text",
            "Field 'package.app_version' is not a string (3 as int); "
            "quote it in YAML to keep its exact text",
        ]

    def test_string_metadata_does_not_warn(self, create_yaml_file, recording_logger):
        """Test string-valued metadata produces no warnings."""
        path = create_yaml_file(
            "petripack.yaml", {"project": {"version": "1.10"}, "package": {"app_id": "x"}}
        )

        config = load_effective_config(path, logger=recording_logger)

        assert config.app_version == "1.10"
        assert recording_logger.warnings == []

    def test_missing_file_raises(self, tmp_test_dir):
        """Test a missing config file raises ConfigError."""
        with pytest.raises(ConfigError, match="not found"):
            load_effective_config(tmp_test_dir / "missing.yaml")


class TestProjectFallbacks:
    """Tests for app_* fallbacks to project properties."""

    def test_project_properties_fill_metadata(self, create_yaml_file):
        """Test each unset app_* option takes its project property."""
        path = create_yaml_file(
            "petripack.yaml",
            {
                "project": {
                    "artifact_id": "billing-app",
                    "name": "Billing",
                    "description": "Billing processes",
                    "version": "1.4.0",
                    "developers": [{"name": "Jane Doe"}, {"name": "John Roe"}],
                }
            },
        )

        config = load_effective_config(path)

        assert config.app_id == "billing-app"
        assert config.app_name == "Billing"
        assert config.app_description == "Billing processes"
        assert config.app_version == "1.4.0"
        assert config.app_author == "Jane Doe"

    def test_explicit_values_win(self, create_yaml_file):
        """Test explicit app_* options override project properties."""
        path = create_yaml_file(
            "petripack.yaml",
            {
                "project": {"artifact_id": "billing-app", "developers": ["Jane Doe"]},
                "package": {"app_id": "custom", "app_author": "Team"},
            },
        )

        config = load_effective_config(path)

        assert config.app_id == "custom"
        assert config.app_author == "Team"

    def test_empty_explicit_value_falls_back(self, create_yaml_file):
        """Test an empty string counts as unset."""
        path = create_yaml_file(
            "petripack.yaml",
            {"project": {"name": "Billing"}, "package": {"app_name": ""}},
        )

        assert load_effective_config(path).app_name == "Billing"

    def test_developer_strings(self):
        """Test developers may be plain strings."""
        project = ProjectInfo(developers=("Jane Doe", "John Roe"))
        assert project.first_developer == "Jane Doe"

    @pytest.mark.parametrize("developers", [(), ("",), ("   ",)])
    def test_no_usable_developer(self, developers):
        """Test a missing or blank first developer yields None."""
        assert ProjectInfo(developers=developers).first_developer is None


class TestConfigMerging:
    """Tests for layering and deep merge behavior."""

    def test_overrides_win_over_file(self, create_yaml_file, tmp_test_dir):
        """Test overrides replace file values while keeping the rest."""
        path = create_yaml_file(
            "petripack.yaml",
            {"package": {"input_directory": "nets", "zip_prefix": "file"}},
        )

        config = load_effective_config(
            path, overrides={"package": {"zip_prefix": "cli"}}
        )

        assert config.zip_prefix == "cli"
        assert config.input_directory == tmp_test_dir.resolve() / "nets"

    def test_list_replacement(self, create_yaml_file):
        """Test lists are replaced, not concatenated."""
        path = create_yaml_file("petripack.yaml", {"package": {"exclude": ["a", "b"]}})

        config = load_effective_config(path, overrides={"package": {"exclude": ["c"]}})

        assert config.exclude == ("c",)

    def test_dict_deep_merge(self):
        """Test nested dicts merge and inputs are not mutated."""
        base = {"package": {"a": 1, "b": 2}, "project": {"x": 1}}
        overlay = {"package": {"b": 3}}

        merged = _deep_merge_dicts(base, overlay)

        assert merged == {"package": {"a": 1, "b": 3}, "project": {"x": 1}}
        assert base["package"]["b"] == 2

    def test_verbose_logging(self, create_yaml_file, recording_logger):
        """Test loading reports the file and the merged layers."""
        path = create_yaml_file("petripack.yaml", {"package": {}})

        load_effective_config(path, logger=recording_logger)

        verbose = [m for level, _, m in recording_logger.messages if level == "verbose"]
        assert any(m.startswith("Loading: ") for m in verbose)
        assert "Deep merging 2 layer(s)" in verbose


class TestErrorHandling:
    """Tests for malformed configuration files."""

    def test_invalid_yaml_raises(self, tmp_test_dir):
        """Test a YAML syntax error raises ConfigError."""
        path = tmp_test_dir / "bad.yaml"
        path.write_text("package: [unclosed\n")

        with pytest.raises(ConfigError, match="Error parsing YAML"):
            load_effective_config(path)

    def test_empty_yaml_raises(self, tmp_test_dir):
        """Test an empty file raises ConfigError."""
        path = tmp_test_dir / "empty.yaml"
        path.write_text("")

        with pytest.raises(ConfigError, match="empty"):
            load_effective_config(path)

    def test_non_dict_yaml_raises(self, tmp_test_dir):
        """Test a top-level list raises ConfigError."""
        path = tmp_test_dir / "list.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigError, match="mapping"):
            load_effective_config(path)

    def test_section_must_be_mapping(self, create_yaml_file):
        """Test a scalar section raises ConfigError."""
        path = create_yaml_file("petripack.yaml", {"package": "nets"})

        with pytest.raises(ConfigError, match="Section 'package'"):
            load_effective_config(path)

    @pytest.mark.parametrize(
        "package,field",
        [
            ({"multi_application": "yes"}, "multi_application"),
            ({"exclude": ".*Test.*"}, "exclude"),
            ({"exclude": [1, 2]}, "exclude"),
            ({"app_id": ["a"]}, "app_id"),
        ],
    )
    def test_wrong_field_type(self, create_yaml_file, package, field):
        """Test fields with the wrong type raise ConfigError."""
        path = create_yaml_file("petripack.yaml", {"package": package})

        with pytest.raises(ConfigError, match=field):
            load_effective_config(path)

    def test_developers_must_be_list(self, create_yaml_file):
        """Test a non-list developers value raises ConfigError."""
        path = create_yaml_file("petripack.yaml", {"project": {"developers": "Jane"}})

        with pytest.raises(ConfigError, match="developers"):
            load_effective_config(path)


def test_project_info_defaults_to_cwd(tmp_path, monkeypatch):
    """Test ProjectInfo paths default to the working directory."""
    monkeypatch.chdir(tmp_path)
    project = ProjectInfo()
    assert project.basedir == Path.cwd()
    assert project.build_directory == Path.cwd() / "target"
