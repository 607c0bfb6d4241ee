"""Module discovery: walk a source tree and index the recognized source files."""

from __future__ import annotations

import fnmatch
import logging
from pathlib import Path

from dependency_dashboard.exceptions import DiscoveryError
from dependency_dashboard.models import AnalysisConfig, ModuleFile
from dependency_dashboard.scanner.language_map import (
    SOURCE_EXTENSIONS,
    language_for,
    strip_source_extension,
)

logger = logging.getLogger(__name__)


class ModuleIndex:
    """Two-level lookup of discovered modules.

    ``files`` maps each canonical module id (extension stripped) to the first
    physical file discovered for it.  ``aliases`` maps every spelling of a
    module (with or without extension) to its canonical id.  Later files that
    collide on an id are kept in ``collisions`` and never read.
    """

    def __init__(self, root: Path):
        self.root = root
        self.files: dict[str, ModuleFile] = {}
        self.aliases: dict[str, str] = {}
        self.source_files: list[ModuleFile] = []
        self.collisions: list[ModuleFile] = []

    def add(self, module: ModuleFile) -> None:
        self.source_files.append(module)
        if module.module_id in self.files:
            self.collisions.append(module)
        else:
            self.files[module.module_id] = module
            # a canonical id outranks an earlier file's extension-bearing spelling
            self.aliases[module.module_id] = module.module_id
        self.aliases.setdefault(module.relative_path, module.module_id)

    def lookup(self, spelling: str | None) -> str | None:
        """Return the canonical module id for any spelling, or None."""
        if not spelling:
            return None
        return self.aliases.get(spelling)

    def get(self, module_id: str) -> ModuleFile | None:
        return self.files.get(module_id)

    def spellings(self) -> list[str]:
        return list(self.aliases)

    def __contains__(self, spelling: object) -> bool:
        return spelling in self.aliases

    def __iter__(self):
        return iter(self.files.values())

    def __len__(self) -> int:
        return len(self.files)


def discover_files(root: Path, skip_dirs: list[str] | None = None) -> list[Path]:
    """Recursively list every non-hidden file under ``root`` in sorted order.

    Entries starting with ``.`` and entries matching ``skip_dirs`` are pruned.
    A directory that cannot be listed raises DiscoveryError.
    """
    skip = skip_dirs if skip_dirs is not None else ["node_modules"]
    files: list[Path] = []
    _walk(root, skip, files)
    return files


def _walk(directory: Path, skip_dirs: list[str], out: list[Path]) -> None:
    try:
        entries = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as e:
        raise DiscoveryError(directory, e) from e

    for entry in entries:
        if entry.name.startswith("."):
            continue
        if any(fnmatch.fnmatch(entry.name, pattern) for pattern in skip_dirs):
            continue
        if entry.is_dir():
            _walk(entry, skip_dirs, out)
        else:
            out.append(entry)


def discover_modules(
    root: Path,
    config: AnalysisConfig | None = None,
    log: logging.Logger | None = None,
) -> ModuleIndex:
    """Discover source modules under ``root`` and build a ModuleIndex."""
    log = log or logger
    config = config or AnalysisConfig(source_dir=root)
    extensions = tuple(config.extensions) or SOURCE_EXTENSIONS
    index = ModuleIndex(root)

    for path in discover_files(root, config.skip_dirs):
        if path.suffix not in extensions:
            continue
        relative = path.relative_to(root).as_posix()
        index.add(ModuleFile(
            module_id=strip_source_extension(relative, extensions),
            relative_path=relative,
            absolute_path=path,
            extension=path.suffix,
            language=language_for(path.suffix),
        ))

    for shadowed in index.collisions:
        log.info(
            "Module id %s already backed by %s; ignoring %s",
            shadowed.module_id,
            index.files[shadowed.module_id].relative_path,
            shadowed.relative_path,
        )
    if config.verbose:
        log.debug("Module files keys: %s", index.spellings())
    return index
