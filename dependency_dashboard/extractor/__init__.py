"""Import extraction: find import occurrences and resolve them to module ids."""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

from dependency_dashboard.exceptions import ResolutionError
from dependency_dashboard.extractor.base import BaseImportExtractor
from dependency_dashboard.extractor.js_imports import (
    NO_SPECIFIC_ITEMS,
    RegexImportExtractor,
    format_import_details,
)
from dependency_dashboard.extractor.resolver import is_relative_specifier, resolve_import_path
from dependency_dashboard.models import ImportEdge, ImportMatch, ModuleFile
from dependency_dashboard.scanner.discovery import ModuleIndex

logger = logging.getLogger(__name__)

_default_extractor = RegexImportExtractor()


def get_default_extractor() -> BaseImportExtractor:
    return _default_extractor


def iter_resolved_imports(
    source: str,
    current_file: str,
    root,
    extractor: BaseImportExtractor | None = None,
    log: logging.Logger | None = None,
) -> Iterator[tuple[str, ImportMatch]]:
    """Yield ``(resolved_path, match)`` for every relative import in ``source``.

    External specifiers are skipped.  A specifier that fails to resolve is
    logged and skipped; extraction continues with the next match.
    """
    log = log or logger
    extractor = extractor or _default_extractor

    for match in extractor.extract(source):
        if not is_relative_specifier(match.specifier):
            log.debug("%s: skipping external package %s", current_file, match.specifier)
            continue
        try:
            resolved = resolve_import_path(match.specifier, current_file, root)
        except ResolutionError as e:
            log.warning("Warning: %s", e)
            continue
        if resolved:
            yield resolved, match


def edges_from_resolved(
    resolved_imports: Iterable[tuple[str, ImportMatch]],
    module: ModuleFile,
    index: ModuleIndex,
    log: logging.Logger | None = None,
) -> list[ImportEdge]:
    """Turn already resolved imports of ``module`` into edges between indexed modules."""
    log = log or logger
    edges: list[ImportEdge] = []
    for resolved, match in resolved_imports:
        target = index.lookup(resolved)
        if target is None:
            log.debug("%s: %s resolved to %s, not a known module", module.relative_path, match.specifier, resolved)
            continue
        if target == module.module_id:
            continue
        edges.append(ImportEdge(source=module.module_id, target=target, detail=match.detail))
    return edges


def extract_edges(
    source: str,
    module: ModuleFile,
    index: ModuleIndex,
    extractor: BaseImportExtractor | None = None,
    log: logging.Logger | None = None,
) -> list[ImportEdge]:
    """Resolve the imports of ``module`` to edges between indexed modules."""
    log = log or logger
    resolved_imports = iter_resolved_imports(source, module.relative_path, index.root, extractor, log)
    return edges_from_resolved(resolved_imports, module, index, log)


__all__ = [
    "edges_from_resolved",
    "NO_SPECIFIC_ITEMS",
    "BaseImportExtractor",
    "RegexImportExtractor",
    "extract_edges",
    "format_import_details",
    "get_default_extractor",
    "is_relative_specifier",
    "iter_resolved_imports",
    "resolve_import_path",
]
