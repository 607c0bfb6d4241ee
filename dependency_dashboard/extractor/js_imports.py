"""JavaScript/TypeScript import extraction using a single regex pattern."""

from __future__ import annotations

import re

from dependency_dashboard.extractor.base import BaseImportExtractor
from dependency_dashboard.models import ImportKind, ImportMatch

# One pattern for both surface forms:
#   import <clause> from '<path>'    and    require('<path>')
# Clause groups: 1+2 default and named, 3 named, 4 default, 5 namespace,
# 6 two bare identifiers.  7 is the from-specifier, 8 the require-specifier.
_IMPORT_RE = re.compile(
    r"""(?:import\s+"""
    r"""(?:(\w+)\s*,\s*(\{[^}]*\})|(\{[^}]*\})|(\w+)|(\*\s+as\s+\w+)|(\w+\s*,\s*\w+))?"""
    r"""\s+from\s+['"`]([^'"`]+)['"`]"""
    r"""|require\s*\(\s*['"`]([^'"`]+)['"`]\))"""
)

_AS_RE = re.compile(r"\s+as\s+")

NO_SPECIFIC_ITEMS = "Module import (no specific items)"


def _named_list(named_imports: str) -> list[str]:
    names: list[str] = []
    for part in named_imports.replace("{", "").replace("}", "").split(","):
        part = part.strip()
        if not part:
            continue
        pieces = _AS_RE.split(part)
        names.append(f"{pieces[0]} as {pieces[1]}" if len(pieces) > 1 else pieces[0])
    return names


def format_import_details(
    default_and_named: str | None = None,
    named_imports: str | None = None,
    default_import: str | None = None,
    namespace_import: str | None = None,
    multiple_imports: str | None = None,
) -> str:
    """Render the one-line description of what an import statement pulls in."""
    if default_and_named and named_imports:
        return (
            f"Default import: {default_and_named.strip()}, "
            f"Named imports: {', '.join(_named_list(named_imports))}"
        )
    if named_imports:
        return f"Named imports: {', '.join(_named_list(named_imports))}"
    if default_import:
        return f"Default import: {default_import}"
    if namespace_import:
        return f"Namespace import: {namespace_import}"
    if multiple_imports:
        return f"Multiple imports: {multiple_imports}"
    return NO_SPECIFIC_ITEMS


def _classify(m: re.Match) -> ImportKind:
    if m.group(8) is not None:
        return ImportKind.REQUIRE
    if m.group(1) and m.group(2):
        return ImportKind.DEFAULT_AND_NAMED
    if m.group(3):
        return ImportKind.NAMED
    if m.group(4):
        return ImportKind.DEFAULT
    if m.group(5):
        return ImportKind.NAMESPACE
    if m.group(6):
        return ImportKind.MULTIPLE
    return ImportKind.BARE


class RegexImportExtractor(BaseImportExtractor):
    """Recognizes ``import ... from '...'`` and ``require('...')``."""

    def extract(self, source: str) -> list[ImportMatch]:
        matches: list[ImportMatch] = []
        for m in _IMPORT_RE.finditer(source):
            specifier = m.group(7) or m.group(8)
            if not specifier:
                continue
            detail = format_import_details(
                default_and_named=m.group(1),
                named_imports=m.group(2) or m.group(3),
                default_import=m.group(4),
                namespace_import=m.group(5),
                multiple_imports=m.group(6),
            )
            matches.append(ImportMatch(
                specifier=specifier,
                detail=detail,
                kind=_classify(m),
                offset=m.start(),
            ))
        return matches
