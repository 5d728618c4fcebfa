"""Matching, annotation and the per-file search pipeline."""

from nbgrep.search.annotator import MatchAnnotator
from nbgrep.search.matcher import Matcher
from nbgrep.search.runner import NotebookSearcher

__all__ = ["Matcher", "MatchAnnotator", "NotebookSearcher"]
