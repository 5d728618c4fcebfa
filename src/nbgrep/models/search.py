"""Data models for search configuration and results."""

import re
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from nbgrep import PatternError
from nbgrep.models.notebook import CELL_TYPES, Cell, CellType

MAX_LINE_INFO = 4

DEFAULT_OUTPUT_TYPES: frozenset[str] = frozenset({"text/plain"})


class Origin(BaseModel):
    """Where a searched line came from within its cell.

    Attributes:
        kind: source, text (a text-like output kind) or data (an opaque output kind)
        mime: Output MIME type, None for source lines
    """

    kind: Literal["source", "text", "data"]
    mime: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_source(cls) -> "Origin":
        return cls(kind="source")

    @classmethod
    def text_output(cls, mime: str) -> "Origin":
        return cls(kind="text", mime=mime)

    @classmethod
    def data_output(cls, mime: str) -> "Origin":
        return cls(kind="data", mime=mime)

    @property
    def is_text(self) -> bool:
        """False for opaque data outputs, whose content should not be printed."""
        return self.kind != "data"

    @property
    def tag(self) -> str:
        """Terse origin tag, e.g. 'source' or 'output text/plain'."""
        if self.kind == "source":
            return "source"
        if self.kind == "text":
            return f"output {self.mime}"
        return f"data {self.mime}"

    @property
    def phrase(self) -> str:
        """Readable origin phrase, e.g. 'in output type text/plain'."""
        if self.kind == "source":
            return "in source"
        if self.kind == "text":
            return f"in output type {self.mime}"
        return f"in data output type {self.mime}"


class SearchConfig(BaseModel):
    """Resolved search options, shared read-only by every file in a run.

    Attributes:
        pattern: Compiled search pattern (case folding already applied)
        ignore_case: Whether the pattern was compiled case-insensitively
        invert_match: Report lines that do not match instead of lines that do
        cell_types: Cell kinds to search
        include_source: Search cell sources
        output_types: Output MIME types to search
        line_info: Verbosity of positional labels, 0-4
    """

    pattern: re.Pattern
    ignore_case: bool = False
    invert_match: bool = False
    cell_types: frozenset[CellType] = frozenset(CELL_TYPES)
    include_source: bool = True
    output_types: frozenset[str] = DEFAULT_OUTPUT_TYPES
    line_info: int = Field(default=0, ge=0, le=MAX_LINE_INFO)

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @field_validator("line_info", mode="before")
    @classmethod
    def clamp_line_info(cls, v: int) -> int:
        """Levels above the maximum are treated as the maximum."""
        v = int(v)
        return min(v, MAX_LINE_INFO) if v >= 0 else v

    @classmethod
    def create(cls, pattern: str, ignore_case: bool = False, **options) -> "SearchConfig":
        """Compile a pattern and build a config around it.

        Args:
            pattern: Regular expression as given by the user
            ignore_case: Match case-insensitively
            **options: Remaining SearchConfig fields

        Returns:
            SearchConfig: The resolved configuration

        Raises:
            PatternError: If the pattern does not compile
        """
        flags = re.IGNORECASE if ignore_case else 0
        try:
            compiled = re.compile(pattern, flags)
        except re.error as e:
            raise PatternError(f"The search pattern was not valid: {e}") from e

        return cls(pattern=compiled, ignore_case=ignore_case, **options)


class CandidateLine(BaseModel):
    """One line of text eligible for matching.

    Attributes:
        cell: Cell the line belongs to
        cell_index: 0-based position of the cell in the document
        origin: Source or output the line came from
        line_index: 0-based position of the line within its origin
        text: The line, without its line ending
    """

    cell: Cell
    cell_index: int
    origin: Origin
    line_index: int
    text: str

    model_config = ConfigDict(frozen=True)


class Match(BaseModel):
    """A candidate line selected by the matcher.

    Attributes:
        cell: Cell the line belongs to
        cell_index: 0-based cell position
        origin: Source or output the line came from
        line_index: 0-based line position within its origin
        text: The full line
        spans: (start, end) offsets of each pattern occurrence, empty for
            inverted matches and opaque data
    """

    cell: Cell
    cell_index: int
    origin: Origin
    line_index: int
    text: str
    spans: tuple[tuple[int, int], ...] = ()

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_candidate(
        cls, candidate: CandidateLine, spans: tuple[tuple[int, int], ...] = ()
    ) -> "Match":
        return cls(
            cell=candidate.cell,
            cell_index=candidate.cell_index,
            origin=candidate.origin,
            line_index=candidate.line_index,
            text=candidate.text,
            spans=spans,
        )


class AnnotatedMatch(BaseModel):
    """A match with its positional label and file."""

    path: Path
    match: Match
    label: str = ""

    model_config = ConfigDict(frozen=True)

    @property
    def text(self) -> str:
        return self.match.text


class FileResult(BaseModel):
    """Outcome of searching one file.

    Attributes:
        path: File that was searched
        matches: Annotated matches in document order
        error: Error message if the file could not be searched
        error_kind: "parse" or "io" when error is set
    """

    path: Path
    matches: list[AnnotatedMatch] = Field(default_factory=list)
    error: Optional[str] = None
    error_kind: Optional[Literal["parse", "io"]] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def has_matches(self) -> bool:
        return bool(self.matches)
