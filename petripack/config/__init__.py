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

"""Configuration loading for petripack.

This module loads the packaging configuration from YAML with a layered
approach:

  - Built-in defaults
  - The project's configuration file (petripack.yaml)
  - Overrides supplied by the caller (CLI flags)

The loader performs deep merging where dicts are merged recursively and
lists/scalars are replaced (last wins). Relative paths are resolved against
the project base directory.

Public API:

- load_effective_config: Load and merge the packaging configuration
- PackageConfig: Resolved configuration
- ProjectInfo: Project-level properties

Example:
    Basic usage:

        from pathlib import Path
        from petripack.config import load_effective_config

        config = load_effective_config(Path("petripack.yaml"))
        print(config.input_paths)

"""

from .loader import PackageConfig, ProjectInfo, load_effective_config

__all__ = ["PackageConfig", "ProjectInfo", "load_effective_config"]
