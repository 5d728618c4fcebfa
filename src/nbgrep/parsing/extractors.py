"""Extraction of searchable lines from parsed notebooks."""

import logging
from typing import Iterator

from nbgrep.models import CandidateLine, Cell, Document, Origin, Output, SearchConfig
from nbgrep.models.notebook import is_line_content

logger = logging.getLogger(__name__)


def is_text_type(mime: str) -> bool:
    """Return True for output kinds whose content is human-readable text."""
    return mime.startswith("text/")


class LineExtractor:
    """Produce the lines of a notebook that a search should look at.

    Lines come out in a fixed order: cells in document order, and within a
    cell its source lines followed by each output's selected data, one data
    kind at a time in stored order.
    """

    def __init__(self, config: SearchConfig):
        """Initialize the extractor.

        Args:
            config: Search configuration selecting cell and output kinds
        """
        self.config = config

    def iter_lines(self, document: Document) -> Iterator[CandidateLine]:
        """Iterate over every candidate line of a document.

        Each call returns a fresh generator, so the sequence can be
        restarted by calling again.

        Args:
            document: Parsed notebook

        Yields:
            CandidateLine: Lines to match, in document order
        """
        for cell_index, cell in enumerate(document.cells):
            if cell.cell_type not in self.config.cell_types:
                continue

            if self.config.include_source:
                source = Origin.from_source()
                for line_index, text in enumerate(cell.source):
                    yield CandidateLine(
                        cell=cell,
                        cell_index=cell_index,
                        origin=source,
                        line_index=line_index,
                        text=text,
                    )

            for output in cell.outputs:
                yield from self._iter_output_lines(cell, cell_index, output)

    def _iter_output_lines(
        self, cell: Cell, cell_index: int, output: Output
    ) -> Iterator[CandidateLine]:
        """Yield the selected data of one output.

        Text kinds yield one candidate per line. Other kinds holding string
        content (typically base64) yield it whole as a single candidate so a
        hit can be reported without printing it. Anything else is skipped.
        """
        for mime, value in output.data.items():
            if mime not in self.config.output_types:
                continue

            if is_text_type(mime) and is_line_content(value):
                origin = Origin.text_output(mime)
                for line_index, text in enumerate(output.lines(mime)):
                    yield CandidateLine(
                        cell=cell,
                        cell_index=cell_index,
                        origin=origin,
                        line_index=line_index,
                        text=text,
                    )
            elif is_line_content(value):
                yield CandidateLine(
                    cell=cell,
                    cell_index=cell_index,
                    origin=Origin.data_output(mime),
                    line_index=0,
                    text="\n".join(output.lines(mime)),
                )
            else:
                logger.debug(
                    "Skipping non-text %s output in cell %d", mime, cell_index + 1
                )
