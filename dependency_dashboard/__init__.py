"""dependency-dashboard: module import graphs, circular dependencies and chain depth."""

from __future__ import annotations

from dependency_dashboard.models import AnalysisConfig
from dependency_dashboard.pipeline import analyze_folder, analyze_single_file

__version__ = "0.1.0"

__all__ = ["AnalysisConfig", "analyze_folder", "analyze_single_file", "__version__"]
