"""Custom exceptions for dependency-dashboard."""

from __future__ import annotations

from pathlib import Path


class DependencyDashboardError(Exception):
    """Base exception for dependency-dashboard."""
    pass


class DiscoveryError(DependencyDashboardError):
    """A directory under the scan root could not be listed."""

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Could not list directory {path}: {cause.strerror or cause}")


class ResolutionError(DependencyDashboardError):
    """An import specifier could not be resolved to a module id."""

    def __init__(self, specifier: str, current_file: str, reason: str = "") -> None:
        self.specifier = specifier
        self.current_file = current_file
        self.reason = reason
        super().__init__(
            f"Could not resolve import path {specifier} from {current_file}: {reason}".rstrip(": ")
        )
