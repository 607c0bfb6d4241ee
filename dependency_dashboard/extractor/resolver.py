"""Resolve relative import specifiers to root-relative module ids."""

from __future__ import annotations

import os
from pathlib import Path

from dependency_dashboard.exceptions import ResolutionError
from dependency_dashboard.scanner.language_map import SOURCE_EXTENSIONS, strip_source_extension


def is_relative_specifier(specifier: str | None) -> bool:
    return bool(specifier) and specifier.startswith(".")


def resolve_import_path(
    specifier: str,
    current_file: str,
    root: Path | str,
    extensions: tuple[str, ...] = SOURCE_EXTENSIONS,
) -> str | None:
    """Turn ``specifier`` imported from ``current_file`` into a module id.

    ``current_file`` is relative to ``root``.  Returns None for external
    (non-relative) specifiers.  The result is relative to ``root``,
    ``/``-separated and has any recognized extension stripped; it may point
    outside the root (``../x``) or at a file that does not exist.

    Raises ResolutionError when the specifier cannot be turned into a path.
    """
    if not is_relative_specifier(specifier):
        return None
    if "\x00" in specifier:
        raise ResolutionError(specifier, current_file, "embedded null byte")

    try:
        root_dir = os.path.abspath(root)
        current_dir = os.path.dirname(os.path.join(root_dir, current_file))
        resolved = os.path.normpath(os.path.join(current_dir, specifier))
        relative = os.path.relpath(resolved, root_dir)
    except (TypeError, ValueError) as e:
        raise ResolutionError(specifier, current_file, str(e)) from e

    return strip_source_extension(relative.replace("\\", "/"), extensions)
