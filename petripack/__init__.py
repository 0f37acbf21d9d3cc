"""
petripack - Petriflow application packager

A Python-based build tool that packages directories of Petriflow process
definitions (XML) into distributable application ZIP archives, each with a
generated manifest.xml describing the application and its processes.

petripack provides:
  - Single-application packaging (whole directory tree -> one archive)
  - Multi-application packaging (one archive per subdirectory, plus root.zip
    for loose XML files)
  - Flattened process naming for nested directories
  - Regex-based process exclusion
  - Layered YAML configuration with project-level defaults

Quick Start
-----------
Package the default input directory:

    $ petripack package

Package with a configuration file:

    $ petripack package --config petripack.yaml

For full CLI documentation:

    $ petripack --help

Package Structure
-----------------
cli : module
    Command-line interface with argparse.
core : module
    Orchestration over input directories and applications.
config : package
    YAML configuration loading and merging.
discovery : module
    Process file discovery.
naming : module
    Flattened file and process names.
filtering : module
    Regex-based process exclusion.
manifest : module
    manifest.xml generation.
build : package
    Per-application archive building.

Public API
----------
The primary interface is the CLI, but key functions are exported for
programmatic use:

    from petripack.config import load_effective_config
    from petripack.core import package_all, package_input_directory
    from petripack.validation import validate_config

For more details, see the individual module docstrings.
"""

__version__ = "0.1.0"
__license__ = "Apache-2.0"
__description__ = "Package Petriflow process definitions into application archives"

# Re-export commonly used functions for convenience
from petripack.config import load_effective_config
from petripack.core import package_all, package_input_directory
from petripack.exceptions import ConfigError, PackagingError, PetripackError
from petripack.results import ArchiveResult, InputResult, RunResult, ValidationResult
from petripack.validation import validate_config

__all__ = [
    "__version__",
    "__license__",
    "__description__",
    "load_effective_config",
    "package_all",
    "package_input_directory",
    "validate_config",
    "ArchiveResult",
    "InputResult",
    "RunResult",
    "ValidationResult",
    "PetripackError",
    "ConfigError",
    "PackagingError",
]
