"""Tests for notebook parsing functionality."""

import json
from pathlib import Path

import pytest

from nbgrep import NotebookIOError, NotebookParseError
from nbgrep.parsing.notebook import NotebookParser

FIXTURE = Path(__file__).parent.parent / "fixtures" / "sample_notebook.ipynb"


class TestNotebookParser:
    """Tests for NotebookParser class."""

    def test_parse_valid_notebook(self):
        """Test parsing a valid notebook."""
        parser = NotebookParser()

        document = parser.parse(FIXTURE)

        assert document.filepath == FIXTURE
        assert document.nbformat == 4
        assert [c.cell_type for c in document.cells] == [
            "markdown",
            "code",
            "code",
            "code",
            "raw",
            "code",
        ]

    def test_parse_preserves_lines_and_outputs(self):
        """Test that source lines and outputs keep their stored order."""
        document = NotebookParser().parse(FIXTURE)

        first = document.cells[0]
        assert first.source == (
            "# Atmospheric CO2",
            "",
            "Data from https://gml.noaa.gov/ccgg/trends/",
        )

        cell = document.cells[2]
        assert cell.execution_count == 2
        assert [o.output_type for o in cell.outputs] == ["stream", "execute_result"]
        assert list(cell.outputs[1].data) == ["text/html", "text/plain"]

    def test_parse_keeps_opaque_output_data(self):
        """Test that image data is kept rather than discarded."""
        document = NotebookParser().parse(FIXTURE)

        output = document.cells[3].outputs[0]
        assert output.data["image/png"].startswith("iVBORw0KGgo")

    def test_parse_string_source(self):
        """Test that a single-string source is split into lines."""
        document = NotebookParser().parse(FIXTURE)

        assert document.cells[4].source == ("CO2 raw note",)
        assert document.cells[5].source == ()

    def test_parse_nonexistent_file(self):
        """Test parsing a nonexistent file raises an IO error."""
        parser = NotebookParser()

        with pytest.raises(NotebookIOError, match="not found"):
            parser.parse(Path("/nonexistent/notebook.ipynb"))

    def test_parse_directory(self, tmp_path):
        """Test parsing a directory raises an IO error."""
        with pytest.raises(NotebookIOError):
            NotebookParser().parse(tmp_path)

    def test_parse_invalid_json(self, tmp_path):
        """Test that malformed JSON raises a parse error."""
        path = tmp_path / "broken.ipynb"
        path.write_text('{"cells": [', encoding="utf-8")

        with pytest.raises(NotebookParseError, match="Invalid JSON"):
            NotebookParser().parse(path)

    def test_parse_deeply_nested_json(self, tmp_path):
        """Test that JSON nested past the recursion limit is a parse error."""
        path = tmp_path / "deep.ipynb"
        path.write_text("[" * 100000 + "]" * 100000, encoding="utf-8")

        with pytest.raises(NotebookParseError, match="nested too deeply"):
            NotebookParser().parse(path)

    def test_parse_missing_cells(self):
        """Test that a document without cells is rejected."""
        with pytest.raises(NotebookParseError, match="cells"):
            NotebookParser().parse_dict({"metadata": {}, "nbformat": 4})

    def test_parse_non_object(self):
        """Test that a top-level JSON array is rejected."""
        with pytest.raises(NotebookParseError, match="JSON object"):
            NotebookParser().parse_string("[1, 2, 3]")

    def test_parse_unknown_cell_type(self):
        """Test that an unknown cell type is reported with its location."""
        data = {"cells": [{"cell_type": "heading", "source": "x"}]}

        with pytest.raises(NotebookParseError, match=r"cells\.0\.cell_type"):
            NotebookParser().parse_dict(data)

    def test_parse_cell_without_source(self):
        """Test that a cell without source is rejected."""
        data = {"cells": [{"cell_type": "code"}]}

        with pytest.raises(NotebookParseError, match="source"):
            NotebookParser().parse_dict(data)

    def test_parse_tolerates_missing_optional_fields(self):
        """Test that code cells may omit execution_count and outputs."""
        data = {"cells": [{"cell_type": "code", "source": ["x = 1"]}]}

        document = NotebookParser().parse_dict(data)

        cell = document.cells[0]
        assert cell.execution_count is None
        assert cell.outputs == ()

    def test_parse_without_version_reads_current_format(self):
        """Test that a missing nbformat field is treated as version 4."""
        document = NotebookParser().parse_dict({"cells": []})

        assert document.nbformat == 4
        assert document.cells == ()

    def test_parse_unsupported_version(self):
        """Test that newer format versions are rejected."""
        with pytest.raises(NotebookParseError, match="Unsupported notebook format version: 5"):
            NotebookParser().parse_dict({"cells": [], "nbformat": 5})

    def test_parse_invalid_version(self):
        """Test that a non-integer version is rejected."""
        with pytest.raises(NotebookParseError, match="Invalid notebook format version"):
            NotebookParser().parse_dict({"cells": [], "nbformat": "four"})

    def test_parse_upgrades_version_3(self):
        """Test that version 3 notebooks are upgraded through nbformat."""
        data = {
            "metadata": {"name": "old"},
            "nbformat": 3,
            "nbformat_minor": 0,
            "worksheets": [
                {
                    "cells": [
                        {
                            "cell_type": "code",
                            "collapsed": False,
                            "input": "print(CO2)",
                            "language": "python",
                            "metadata": {},
                            "outputs": [],
                            "prompt_number": 3,
                        }
                    ],
                    "metadata": {},
                }
            ],
        }

        document = NotebookParser().parse_string(json.dumps(data))

        assert document.nbformat == 3
        assert len(document.cells) == 1
        assert document.cells[0].source == ("print(CO2)",)
        assert document.cells[0].execution_count == 3

    def test_parse_drops_outputs_on_markdown_cells(self):
        """Test that only code cells carry outputs and execution counts."""
        data = {
            "cells": [
                {
                    "cell_type": "markdown",
                    "source": "text",
                    "execution_count": 4,
                    "outputs": [{"output_type": "stream", "text": "x"}],
                }
            ]
        }

        cell = NotebookParser().parse_dict(data).cells[0]

        assert cell.execution_count is None
        assert cell.outputs == ()

    def test_parse_negative_execution_count(self):
        """Test that a negative execution counter is rejected."""
        data = {"cells": [{"cell_type": "code", "source": "", "execution_count": -1}]}

        with pytest.raises(NotebookParseError, match="execution_count"):
            NotebookParser().parse_dict(data)
