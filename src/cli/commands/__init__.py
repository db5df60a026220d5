"""CLI command modules."""

from .analytics import analytics, classify
from .export import export
from .journal import journal
from .serve import serve

__all__ = [
    "journal",
    "analytics",
    "classify",
    "export",
    "serve",
]
