"""Source tree discovery."""

from __future__ import annotations

from dependency_dashboard.scanner.discovery import ModuleIndex, discover_files, discover_modules
from dependency_dashboard.scanner.language_map import (
    EXT_TO_LANGUAGE,
    SOURCE_EXTENSIONS,
    strip_source_extension,
)

__all__ = [
    "EXT_TO_LANGUAGE",
    "SOURCE_EXTENSIONS",
    "ModuleIndex",
    "discover_files",
    "discover_modules",
    "strip_source_extension",
]
