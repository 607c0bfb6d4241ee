"""JSON API over the analysis pipeline."""

from dependency_dashboard.web.app import create_app

__all__ = ["create_app"]
