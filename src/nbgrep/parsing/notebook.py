"""Jupyter notebook parsing functionality."""

import json
import logging
from pathlib import Path
from typing import Any, Optional

import nbformat
from pydantic import ValidationError

from nbgrep import NotebookIOError, NotebookParseError
from nbgrep.models import Document

logger = logging.getLogger(__name__)

CURRENT_NBFORMAT = 4


class NotebookParser:
    """Parser for Jupyter notebooks.

    Reads the notebook JSON into a Document. Version 4 documents are read
    directly so that list-of-lines sources keep their line boundaries; older
    versions are upgraded with nbformat first.
    """

    def parse(self, filepath: Path | str) -> Document:
        """Parse a Jupyter notebook file.

        Args:
            filepath: Path to the notebook file

        Returns:
            Document: Parsed notebook

        Raises:
            NotebookIOError: If the file cannot be read
            NotebookParseError: If the content is not a valid notebook
        """
        filepath = Path(filepath)

        try:
            with open(filepath, "r", encoding="utf-8") as f:
                text = f.read()
        except FileNotFoundError as e:
            raise NotebookIOError(f"Notebook file not found: {filepath}") from e
        except IsADirectoryError as e:
            raise NotebookIOError(f"Is a directory: {filepath}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise NotebookIOError(f"Failed to read notebook {filepath}: {e}") from e

        return self.parse_string(text, filepath=filepath)

    def parse_string(self, text: str, filepath: Optional[Path] = None) -> Document:
        """Parse serialized notebook JSON.

        Args:
            text: Notebook JSON text
            filepath: Where the text came from, recorded on the Document

        Returns:
            Document: Parsed notebook

        Raises:
            NotebookParseError: If the text is not a valid notebook
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise NotebookParseError(f"Invalid JSON: {e}") from e
        except RecursionError as e:
            raise NotebookParseError("Invalid JSON: nested too deeply") from e

        try:
            return self.parse_dict(data, filepath=filepath)
        except RecursionError as e:
            raise NotebookParseError("Notebook is nested too deeply") from e

    def parse_dict(self, data: Any, filepath: Optional[Path] = None) -> Document:
        """Build a Document from decoded notebook JSON.

        Args:
            data: Decoded JSON value
            filepath: Where the data came from, recorded on the Document

        Returns:
            Document: Parsed notebook

        Raises:
            NotebookParseError: If the structure is not a supported notebook
        """
        if not isinstance(data, dict):
            raise NotebookParseError("Notebook must be a JSON object")

        version = self._get_version(data)
        if version > CURRENT_NBFORMAT:
            raise NotebookParseError(f"Unsupported notebook format version: {version}")
        if version < CURRENT_NBFORMAT:
            data = self._upgrade(data, version)

        if "cells" not in data:
            raise NotebookParseError("Notebook has no 'cells' field")
        if not isinstance(data["cells"], list):
            raise NotebookParseError("Notebook 'cells' field must be a list")

        try:
            document = Document(
                cells=data["cells"],
                nbformat=version,
                filepath=filepath,
            )
        except ValidationError as e:
            raise NotebookParseError(self._describe(e)) from e

        logger.debug("Parsed %s: %d cells (nbformat %d)", filepath, len(document.cells), version)
        return document

    def _get_version(self, data: dict) -> int:
        """Read the major format version, defaulting to the current one."""
        version = data.get("nbformat", CURRENT_NBFORMAT)
        if isinstance(version, bool) or not isinstance(version, int):
            raise NotebookParseError(f"Invalid notebook format version: {version!r}")
        return version

    def _upgrade(self, data: dict, version: int) -> dict:
        """Convert an older notebook to the current format with nbformat."""
        logger.debug("Upgrading notebook from nbformat %d", version)
        try:
            nb = nbformat.convert(nbformat.from_dict(data), CURRENT_NBFORMAT)
        except Exception as e:
            raise NotebookParseError(
                f"Failed to upgrade notebook from format version {version}: {e}"
            ) from e
        return nb

    def _describe(self, error: ValidationError) -> str:
        """Summarize the first validation problem with its location."""
        first = error.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        return f"Malformed notebook at {location}: {first['msg']}"
