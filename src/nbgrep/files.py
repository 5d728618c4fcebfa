"""Resolution of command-line paths into notebook files."""

import logging
from pathlib import Path
from typing import Iterable, Iterator

logger = logging.getLogger(__name__)


class NotebookResolver:
    """Expand files and directories into an ordered list of notebooks.

    Files named explicitly are always kept, whatever their extension. A
    directory contributes the notebooks directly inside it, or every notebook
    below it when searching recursively. Entries are taken in name order and
    each file appears once, at its first position.
    """

    NOTEBOOK_SUFFIX = ".ipynb"

    def resolve(self, paths: Iterable[Path | str], recursive: bool = False) -> list[Path]:
        """Resolve paths into notebook files.

        Paths that do not exist are passed through unchanged so that the
        search reports them as unreadable.

        Args:
            paths: Files and directories, in the order given by the user
            recursive: Descend into subdirectories

        Returns:
            list[Path]: Notebook files without duplicates
        """
        files: list[Path] = []
        seen: set[Path] = set()

        for raw in paths:
            path = Path(raw)
            if path.is_dir():
                candidates: Iterable[Path] = self._walk(path, recursive)
            else:
                candidates = [path]

            for candidate in candidates:
                key = candidate.resolve()
                if key in seen:
                    continue
                seen.add(key)
                files.append(candidate)

        logger.debug("Resolved %d notebook(s)", len(files))
        return files

    def is_notebook(self, path: Path) -> bool:
        return path.is_file() and path.suffix == self.NOTEBOOK_SUFFIX

    def _walk(self, directory: Path, recursive: bool) -> Iterator[Path]:
        """Yield notebooks under a directory, visiting each real directory once.

        Symbolic links to directories are followed, but a directory already
        visited through another path (including a link back to an ancestor)
        is skipped.
        """
        visited: set[Path] = set()
        yield from self._walk_dir(directory, recursive, visited)

    def _walk_dir(self, directory: Path, recursive: bool, visited: set[Path]) -> Iterator[Path]:
        canonical = directory.resolve()
        if canonical in visited:
            logger.debug("Skipping already visited directory %s", directory)
            return
        visited.add(canonical)

        try:
            entries = sorted(directory.iterdir(), key=lambda p: p.name)
        except OSError as e:
            logger.warning("Cannot list directory %s: %s", directory, e)
            return

        for entry in entries:
            if entry.is_dir():
                if recursive:
                    yield from self._walk_dir(entry, recursive, visited)
            elif self.is_notebook(entry):
                yield entry
