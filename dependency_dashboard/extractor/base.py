"""Abstract base import extractor."""

from __future__ import annotations

import abc
from pathlib import Path

from dependency_dashboard.models import ImportMatch


class BaseImportExtractor(abc.ABC):
    """Finds import occurrences in raw source text.

    Implementations return every match in source order.  Nothing downstream
    depends on how the matches are found, so a tokenizer or a real parser can
    replace the regex implementation without touching the graph code.
    """

    @abc.abstractmethod
    def extract(self, source: str) -> list[ImportMatch]:
        """Return the import occurrences found in ``source``."""

    def read_source(self, path: Path) -> str:
        return path.read_text(encoding="utf-8", errors="replace")
