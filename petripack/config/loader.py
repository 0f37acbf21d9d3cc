"""
Configuration loading and merging for petripack.

A packaging run is configured by a YAML file with two sections: the
project the archives belong to, and the packaging options themselves.

    project:
      artifact_id: billing-app
      name: Billing
      description: Billing processes
      version: 1.4.0
      developers:
        - name: Jane Doe
      basedir: .
      build_directory: target

    package:
      input_directory: src/main/resources/petriNets
      input_directories: []
      output_directory: target/petriflow-zips
      multi_application: false
      app_id: null
      app_name: null
      app_description: null
      app_version: null
      app_author: null
      exclude: [".*Test.*"]
      zip_prefix: ""

Configuration Layers
--------------------
1. **Built-in defaults** (DEFAULT_CONFIG)
2. **Configuration file** (optional; petripack.yaml)
3. **Overrides** (CLI flags or programmatic callers)

Merge Behavior
--------------
The loader performs deep merging with "last wins" semantics:
  - **Dicts**: Recursively merged (keys from overlay override base)
  - **Lists**: Completely replaced (NOT appended/extended)
  - **Scalars**: Overwritten (strings, numbers, booleans)

Path Resolution
---------------
project.basedir is resolved against the CONFIG FILE location (or the
working directory when no file is used). Every other relative path is
resolved against basedir:
  - project.build_directory
  - package.input_directory, package.input_directories
  - package.output_directory (default: <build_directory>/petriflow-zips)

Project Properties
------------------
Unset app_* options fall back to project properties: app_id to
artifact_id, app_name to name, app_description to description,
app_version to version, and app_author to the first developer's name.
Values still unset after that are filled per application at packaging
time (see petripack.core).

Error Handling
--------------
- ConfigError: missing file, YAML parse errors, empty files, wrong types
- All errors are chained with "from err" for better debugging
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from petripack.exceptions import ConfigError
from petripack.logging import Logger, get_global_logger
from petripack.models import AppMetadata

DEFAULT_INPUT_DIRECTORY = "src/main/resources/petriNets"
DEFAULT_BUILD_DIRECTORY = "target"
OUTPUT_SUBDIRECTORY = "petriflow-zips"

DEFAULT_CONFIG: dict[str, Any] = {
    "project": {
        "artifact_id": None,
        "name": None,
        "description": None,
        "version": None,
        "developers": [],
        "basedir": ".",
        "build_directory": DEFAULT_BUILD_DIRECTORY,
    },
    "package": {
        "input_directory": DEFAULT_INPUT_DIRECTORY,
        "input_directories": [],
        "output_directory": None,
        "multi_application": False,
        "app_id": None,
        "app_name": None,
        "app_description": None,
        "app_version": None,
        "app_author": None,
        "exclude": [],
        "zip_prefix": "",
    },
}

PROJECT_KEYS = frozenset(DEFAULT_CONFIG["project"])
PACKAGE_KEYS = frozenset(DEFAULT_CONFIG["package"])

# Fields copied verbatim into manifest.xml
METADATA_KEYS: dict[str, tuple[str, ...]] = {
    "project": ("artifact_id", "name", "description", "version"),
    "package": ("app_id", "app_name", "app_description", "app_version", "app_author"),
}

# -------------------------------
# Data types
# -------------------------------


@dataclass(frozen=True)
class ProjectInfo:
    """Project-level properties the packaging options fall back to."""

    artifact_id: str | None = None
    name: str | None = None
    description: str | None = None
    version: str | None = None
    developers: tuple[str, ...] = ()
    basedir: Path = field(default_factory=Path.cwd)
    build_directory: Path = field(default_factory=lambda: Path.cwd() / "target")

    @property
    def first_developer(self) -> str | None:
        """Name of the first listed developer, or None."""
        for name in self.developers[:1]:
            if name and name.strip():
                return name
        return None


@dataclass(frozen=True)
class PackageConfig:
    """Fully resolved packaging configuration.

    Attributes:
        project: Project properties.
        input_directory: Single input directory.
        input_directories: Input directories; override input_directory
            when non-empty.
        output_directory: Directory receiving the archives.
        multi_application: Package each subdirectory separately.
        app_id: Manifest application id (None when unset).
        app_name: Manifest application name (None when unset).
        app_description: Manifest description (None when unset).
        app_version: Manifest version (None when unset).
        app_author: Manifest author (None when unset).
        exclude: Regular expressions excluding processes by name.
        zip_prefix: Archive name prefix (single-application mode only).
        config_path: The YAML file the configuration came from, if any.
    """

    project: ProjectInfo
    input_directory: Path
    input_directories: tuple[Path, ...] = ()
    output_directory: Path | None = None
    multi_application: bool = False
    app_id: str | None = None
    app_name: str | None = None
    app_description: str | None = None
    app_version: str | None = None
    app_author: str | None = None
    exclude: tuple[str, ...] = ()
    zip_prefix: str = ""
    config_path: Path | None = None

    @property
    def input_paths(self) -> list[Path]:
        """Input directories to process, in order."""
        if self.input_directories:
            return list(self.input_directories)
        return [self.input_directory]

    @property
    def resolved_output_directory(self) -> Path:
        """Output directory, defaulting to <build_directory>/petriflow-zips."""
        if self.output_directory is not None:
            return self.output_directory
        return self.project.build_directory / OUTPUT_SUBDIRECTORY

    @property
    def metadata(self) -> AppMetadata:
        """User-supplied manifest values."""
        return AppMetadata(
            app_id=self.app_id,
            app_name=self.app_name,
            app_description=self.app_description,
            app_version=self.app_version,
            app_author=self.app_author,
        )


# -------------------------------
# YAML helpers
# -------------------------------


def _load_yaml_file(p: Path) -> Any:
    """Load a YAML file and return the parsed Python object.

    Raises:
        ConfigError: When the file does not exist, is not valid YAML, or is empty.
    """
    if not p.exists():
        raise ConfigError(f"Configuration file not found: {p}")
    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as err:
        raise ConfigError(f"Error parsing YAML: {p}: {err}") from err
    except OSError as err:
        raise ConfigError(f"Failed to read configuration file: {p}: {err}") from err
    if data is None:
        raise ConfigError(f"YAML file is empty: {p}")
    return data


# -------------------------------
# Merge logic
# -------------------------------


def _deep_merge_dicts(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """
    Deep-merge two dicts with "overlay wins".

    Rules:
      - dict + dict -> deep merge
      - list + list -> overlay REPLACES base (not concatenated)
      - everything else -> overlay overwrites base

    This function does not mutate inputs; returns a new dict.
    """
    result: dict[str, Any] = dict(base)
    for k, v in overlay.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = _deep_merge_dicts(result[k], v)
        else:
            result[k] = v
    return result


# -------------------------------
# Field coercion
# -------------------------------


def _section(cfg: dict[str, Any], name: str) -> dict[str, Any]:
    value = cfg.get(name)
    if not isinstance(value, dict):
        raise ConfigError(f"Section '{name}' must be a mapping")
    return value


def _optional_str(section: dict[str, Any], key: str) -> str | None:
    """Return a scalar option as a string, or None when unset."""
    value = section.get(key)
    if value is None:
        return None
    if isinstance(value, (dict, list)):
        raise ConfigError(f"Field '{key}' must be a string")
    return str(value)


def non_string_metadata(cfg: dict[str, Any]) -> list[str]:
    """Describe manifest fields whose YAML value is a number, bool or date.

    YAML reads ``version: 1.10`` as the float 1.1, so such values would
    not reach the manifest as written. Quoting them keeps the exact text.

    Args:
        cfg: Raw or merged configuration mapping.

    Returns:
        One message per affected field, in section and field order.
    """
    messages: list[str] = []
    for section_name, keys in METADATA_KEYS.items():
        section = cfg.get(section_name)
        if not isinstance(section, dict):
            continue
        for key in keys:
            value = section.get(key)
            if value is None or isinstance(value, (str, dict, list)):
                continue
            messages.append(
                f"Field '{section_name}.{key}' is not a string ({value!r} as "
                f"{type(value).__name__}); quote it in YAML to keep its exact text"
            )
    return messages


def _str_list(section: dict[str, Any], key: str) -> list[str]:
    value = section.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"Field '{key}' must be a list of strings")
    return value


def _developer_names(raw: Any) -> tuple[str, ...]:
    """Extract developer names from a list of strings or {name: ...} mappings."""
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise ConfigError("Field 'developers' must be a list")
    names: list[str] = []
    for dev in raw:
        if isinstance(dev, dict):
            name = dev.get("name")
            names.append(str(name) if name is not None else "")
        elif isinstance(dev, str):
            names.append(dev)
        else:
            raise ConfigError("Field 'developers' entries must be strings or mappings")
    return tuple(names)


def _first_set(*values: str | None) -> str | None:
    """Return the first value that is neither None nor empty."""
    for value in values:
        if value:
            return value
    return None


# -------------------------------
# Path resolution
# -------------------------------


def _resolve_path(raw: str | Path, base: Path) -> Path:
    p = Path(raw).expanduser()
    if not p.is_absolute():
        p = base / p
    return p.resolve()


def _build_project(section: dict[str, Any], config_dir: Path) -> ProjectInfo:
    basedir = _resolve_path(_optional_str(section, "basedir") or ".", config_dir)
    build_directory = _resolve_path(
        _optional_str(section, "build_directory") or DEFAULT_BUILD_DIRECTORY, basedir
    )
    return ProjectInfo(
        artifact_id=_optional_str(section, "artifact_id"),
        name=_optional_str(section, "name"),
        description=_optional_str(section, "description"),
        version=_optional_str(section, "version"),
        developers=_developer_names(section.get("developers")),
        basedir=basedir,
        build_directory=build_directory,
    )


def _build_package_config(
    section: dict[str, Any], project: ProjectInfo, config_path: Path | None
) -> PackageConfig:
    basedir = project.basedir

    multi_application = section.get("multi_application", False)
    if not isinstance(multi_application, bool):
        raise ConfigError("Field 'multi_application' must be a boolean")

    raw_output = _optional_str(section, "output_directory")
    output_directory = _resolve_path(raw_output, basedir) if raw_output else None

    return PackageConfig(
        project=project,
        input_directory=_resolve_path(
            _optional_str(section, "input_directory") or DEFAULT_INPUT_DIRECTORY, basedir
        ),
        input_directories=tuple(
            _resolve_path(p, basedir) for p in _str_list(section, "input_directories")
        ),
        output_directory=output_directory,
        multi_application=multi_application,
        app_id=_first_set(_optional_str(section, "app_id"), project.artifact_id),
        app_name=_first_set(_optional_str(section, "app_name"), project.name),
        app_description=_first_set(
            _optional_str(section, "app_description"), project.description
        ),
        app_version=_first_set(_optional_str(section, "app_version"), project.version),
        app_author=_first_set(
            _optional_str(section, "app_author"), project.first_developer
        ),
        exclude=tuple(_str_list(section, "exclude")),
        zip_prefix=_optional_str(section, "zip_prefix") or "",
        config_path=config_path,
    )


# -------------------------------
# Public API
# -------------------------------


def load_effective_config(
    config_path: Path | None = None,
    *,
    overrides: dict[str, Any] | None = None,
    logger: Logger | None = None,
) -> PackageConfig:
    """
    Load and merge the effective packaging configuration.

    Steps
      1) Start from DEFAULT_CONFIG.
      2) Merge the YAML configuration file, if given.
      3) Merge caller overrides (e.g. CLI flags), if given.
      4) Resolve project paths against the config file directory.
      5) Resolve package paths against project.basedir.
      6) Fill unset app_* options from project properties.

    Args:
        config_path: YAML configuration file. None uses defaults only.
        overrides: Nested dict ({"project": {...}, "package": {...}})
            merged on top of the file.
        logger: Logger for progress output. Defaults to the global logger.

    Returns:
        The resolved PackageConfig.

    Raises:
        ConfigError: If the file is missing or invalid, or a field has the
            wrong type.
    """
    if logger is None:
        logger = get_global_logger()

    merged = _deep_merge_dicts({}, DEFAULT_CONFIG)
    layers_merged = 1

    config_dir = Path.cwd()
    if config_path is not None:
        config_path = config_path.resolve()
        config_dir = config_path.parent
        logger.verbose("CONFIG", f"Loading: {config_path}")
        file_obj = _load_yaml_file(config_path)
        if not isinstance(file_obj, dict):
            raise ConfigError(f"Top-level YAML must be a mapping (dict): {config_path}")
        merged = _deep_merge_dicts(merged, file_obj)
        layers_merged += 1

    if overrides:
        merged = _deep_merge_dicts(merged, overrides)
        layers_merged += 1

    logger.verbose("CONFIG", f"Deep merging {layers_merged} layer(s)")
    logger.debug(
        "CONFIG",
        "--- Final Merged Configuration ---\n"
        + yaml.safe_dump(merged, default_flow_style=False, sort_keys=False),
    )

    for message in non_string_metadata(merged):
        logger.warning("CONFIG", message)

    project = _build_project(_section(merged, "project"), config_dir)
    return _build_package_config(_section(merged, "package"), project, config_path)
