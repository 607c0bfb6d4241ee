"""Data models for the dependency-dashboard analysis run."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass, field
from pathlib import Path


class Language(enum.Enum):
    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"


class Direction(enum.Enum):
    OUTGOING = "outgoing"
    INCOMING = "incoming"


class Severity(enum.Enum):
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


class ImportKind(enum.Enum):
    DEFAULT_AND_NAMED = "default_and_named"
    NAMED = "named"
    DEFAULT = "default"
    NAMESPACE = "namespace"
    MULTIPLE = "multiple"
    BARE = "bare"
    REQUIRE = "require"


@dataclass(frozen=True)
class ModuleFile:
    """A discovered source file."""
    module_id: str
    relative_path: str  # with extension, "/"-separated
    absolute_path: Path
    extension: str
    language: Language


@dataclass(frozen=True)
class ImportMatch:
    """One raw import occurrence found in a file's text."""
    specifier: str
    detail: str
    kind: ImportKind
    offset: int = 0


@dataclass(frozen=True)
class ImportEdge:
    """A resolved edge: ``source`` imports ``target``."""
    source: str
    target: str
    detail: str


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() not in ("", "0", "false", "no")


@dataclass
class AnalysisConfig:
    """Configuration for an analysis run."""
    source_dir: Path = field(default_factory=lambda: Path("."))
    skip_dirs: list[str] = field(default_factory=lambda: ["node_modules"])
    extensions: tuple[str, ...] = (".js", ".ts", ".jsx", ".tsx", ".mjs", ".cjs")
    max_chain_length: int = 10
    top_n: int = 10
    deep_threshold: int = 5
    verbose: bool = False

    @classmethod
    def from_env(cls, **overrides) -> AnalysisConfig:
        """Build a config, taking the verbose flag from ``VERBOSE``."""
        overrides.setdefault("verbose", _env_flag("VERBOSE"))
        return cls(**overrides)
