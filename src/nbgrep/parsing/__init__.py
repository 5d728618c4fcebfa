"""Notebook parsing and line extraction."""

from nbgrep.parsing.extractors import LineExtractor
from nbgrep.parsing.notebook import NotebookParser

__all__ = ["NotebookParser", "LineExtractor"]
