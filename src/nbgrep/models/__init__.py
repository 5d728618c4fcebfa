"""Data models for nbgrep."""

from nbgrep.models.notebook import CELL_TYPES, Cell, Document, Output
from nbgrep.models.search import (
    AnnotatedMatch,
    CandidateLine,
    DEFAULT_OUTPUT_TYPES,
    FileResult,
    Match,
    MAX_LINE_INFO,
    Origin,
    SearchConfig,
)

__all__ = [
    "CELL_TYPES",
    "Cell",
    "Output",
    "Document",
    "Origin",
    "SearchConfig",
    "CandidateLine",
    "Match",
    "AnnotatedMatch",
    "FileResult",
    "DEFAULT_OUTPUT_TYPES",
    "MAX_LINE_INFO",
]
