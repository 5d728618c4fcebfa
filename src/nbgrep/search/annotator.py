"""Positional labels for matches."""

from pathlib import Path

from nbgrep.models import MAX_LINE_INFO, AnnotatedMatch, Match


class MatchAnnotator:
    """Label matches with their position in the notebook.

    Levels of detail:
        0: no label
        1: cell and line number, e.g. 'c.2 l.1'
        2: adds the execution counter when the cell has one, e.g. 'c.2 [5] l.1'
        3: adds where in the cell the line is, e.g. 'c.2 [5] (output text/plain) l.1'
        4: same facts as 3, written out, e.g.
           'Cell #2 (exec. 5) in output type text/plain, line 1'

    Cell and line numbers are reported 1-based.
    """

    def __init__(self, line_info: int = 0):
        """Initialize the annotator.

        Args:
            line_info: Level of detail; values above 4 are treated as 4
        """
        if line_info < 0:
            raise ValueError(f"line_info must be >= 0, got {line_info}")
        self.line_info = min(line_info, MAX_LINE_INFO)

    def label(self, match: Match) -> str:
        """Build the positional label for a match."""
        level = self.line_info
        if level == 0:
            return ""

        cell_no = match.cell_index + 1
        line_no = match.line_index + 1
        count = match.cell.execution_count

        if level == 1:
            return f"c.{cell_no} l.{line_no}"

        exec_str = f" [{count}]" if count is not None else ""
        if level == 2:
            return f"c.{cell_no}{exec_str} l.{line_no}"
        if level == 3:
            return f"c.{cell_no}{exec_str} ({match.origin.tag}) l.{line_no}"

        exec_phrase = f" (exec. {count})" if count is not None else ""
        return f"Cell #{cell_no}{exec_phrase} {match.origin.phrase}, line {line_no}"

    def annotate(self, match: Match, path: Path | str) -> AnnotatedMatch:
        """Attach a label and file path to a match."""
        return AnnotatedMatch(path=Path(path), match=match, label=self.label(match))
