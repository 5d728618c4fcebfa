"""Data models for parsed notebook documents."""

import re
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

CellType = Literal["markdown", "code", "raw"]

CELL_TYPES: tuple[str, ...] = ("markdown", "code", "raw")

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def _break_lines(text: str) -> list[str]:
    """Split on CR, LF and CRLF only; a trailing break does not start a new line."""
    lines = _LINE_BREAK.split(text)
    if lines[-1] == "":
        lines.pop()
    return lines


def split_lines(value: Any) -> tuple[str, ...]:
    """Normalize a notebook multiline string into lines without terminators.

    Notebooks store multiline text either as a single string or as a list of
    strings, one per line. Both forms are accepted here.

    Args:
        value: String or list of strings from the notebook JSON

    Returns:
        tuple[str, ...]: Lines with their line endings removed

    Raises:
        ValueError: If the value is neither a string nor a list of strings
    """
    if isinstance(value, str):
        return tuple(_break_lines(value))

    if isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
        lines: list[str] = []
        for element in value:
            lines.extend(_break_lines(element) or [""])
        return tuple(lines)

    raise ValueError("expected a string or a list of strings")


def is_line_content(value: Any) -> bool:
    """Return True if a value can be read as text lines."""
    if isinstance(value, str):
        return True
    return isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value)


class Output(BaseModel):
    """One output record attached to a code cell.

    Attributes:
        output_type: nbformat output type (execute_result, display_data, stream, error)
        data: Mapping of MIME type to content, in stored order. Values are kept
            verbatim, so non-text content (dicts, base64 strings) stays opaque.
    """

    output_type: str = "execute_result"
    data: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def fold_stream_text(cls, values: Any) -> Any:
        """Expose stream text as text/plain so it is searched like other plain text."""
        if not isinstance(values, dict):
            return values

        values = dict(values)
        if values.get("data") is None:
            values["data"] = {}

        # Non-mapping data is left for field validation to reject
        if (
            values.get("output_type") == "stream"
            and "text" in values
            and isinstance(values["data"], dict)
        ):
            data = dict(values["data"])
            data.setdefault("text/plain", values["text"])
            values["data"] = data

        return values

    def lines(self, mime: str) -> tuple[str, ...]:
        """Return the content stored under a MIME type as lines.

        Args:
            mime: MIME type key

        Returns:
            tuple[str, ...]: Lines of the content

        Raises:
            KeyError: If the MIME type is absent
            ValueError: If the content is not text
        """
        return split_lines(self.data[mime])


class Cell(BaseModel):
    """A single notebook cell.

    Attributes:
        cell_type: markdown, code, or raw
        source: Source lines without line endings
        execution_count: Execution counter, only for executed code cells
        outputs: Outputs in stored order, always empty for non-code cells
    """

    cell_type: CellType
    source: tuple[str, ...]
    execution_count: Optional[int] = Field(default=None, ge=0)
    outputs: tuple[Output, ...] = ()

    model_config = ConfigDict(frozen=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def drop_code_only_fields(cls, values: Any) -> Any:
        """Ignore execution counters and outputs on markdown and raw cells."""
        if isinstance(values, dict) and values.get("cell_type") != "code":
            values = {k: v for k, v in values.items() if k not in ("outputs", "execution_count")}
        return values

    @field_validator("source", mode="before")
    @classmethod
    def normalize_source(cls, v: Any) -> tuple[str, ...]:
        """Accept string or list-of-lines source."""
        return split_lines(v)

    @field_validator("outputs", mode="before")
    @classmethod
    def normalize_outputs(cls, v: Any) -> Any:
        if v is None:
            return ()
        return v


class Document(BaseModel):
    """A parsed notebook.

    Attributes:
        cells: Cells in document order
        nbformat: Major format version the notebook was stored in
        filepath: Path the notebook was read from, if any
    """

    cells: tuple[Cell, ...]
    nbformat: int = 4
    filepath: Optional[Path] = None

    model_config = ConfigDict(frozen=True, extra="ignore")
