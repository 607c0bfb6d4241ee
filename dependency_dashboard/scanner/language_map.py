"""Shared extension-to-language mapping for discovery and path resolution."""

from __future__ import annotations

from dependency_dashboard.models import Language

EXT_TO_LANGUAGE: dict[str, Language] = {
    ".js": Language.JAVASCRIPT,
    ".jsx": Language.JAVASCRIPT,
    ".mjs": Language.JAVASCRIPT,
    ".cjs": Language.JAVASCRIPT,
    ".ts": Language.TYPESCRIPT,
    ".tsx": Language.TYPESCRIPT,
}

SOURCE_EXTENSIONS: tuple[str, ...] = (".js", ".ts", ".jsx", ".tsx", ".mjs", ".cjs")


def strip_source_extension(path: str, extensions: tuple[str, ...] = SOURCE_EXTENSIONS) -> str:
    """Drop a trailing recognized source extension, if any."""
    for ext in extensions:
        if path.endswith(ext):
            return path[: -len(ext)]
    return path


def language_for(extension: str) -> Language:
    return EXT_TO_LANGUAGE.get(extension, Language.JAVASCRIPT)
