"""
Archive building for petripack.

This module handles turning one discovered Petriflow application into a
ZIP archive: process naming and exclusion, manifest generation, and
archive assembly.

Public API:

build_application : function
    Build the archive for one ApplicationUnit.
write_archive : function
    Write manifest.xml and process files into a ZIP archive.

Example:
    from petripack.build import build_application
    from petripack.filtering import compile_exclusion_patterns

    result = build_application(unit, compile_exclusion_patterns([".*Test.*"]))

    print(f"Built: {result.zip_path}")
"""

from .archive import write_archive
from .manager import build_application

__all__ = ["build_application", "write_archive"]
