"""Search pipeline: parse, extract, match and annotate each notebook."""

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, Optional

from nbgrep import NotebookIOError, NotebookParseError
from nbgrep.models import AnnotatedMatch, Document, FileResult, SearchConfig
from nbgrep.parsing import LineExtractor, NotebookParser
from nbgrep.search.annotator import MatchAnnotator
from nbgrep.search.matcher import Matcher

logger = logging.getLogger(__name__)


class NotebookSearcher:
    """Run a search over notebooks.

    One searcher is built per run and shared by every file. Each file is
    parsed, searched and released on its own, so files can be searched in
    parallel; results always come back in the order the files were given.
    """

    def __init__(self, config: SearchConfig, parser: Optional[NotebookParser] = None):
        """Initialize the searcher.

        Args:
            config: Resolved search configuration
            parser: Notebook parser (creates new if None)
        """
        self.config = config
        self.parser = parser or NotebookParser()
        self.extractor = LineExtractor(config)
        self.matcher = Matcher(config)
        self.annotator = MatchAnnotator(config.line_info)

    def search_document(self, document: Document, path: Path | str) -> list[AnnotatedMatch]:
        """Search an already parsed notebook.

        Args:
            document: Parsed notebook
            path: File the notebook came from, attached to each match

        Returns:
            list[AnnotatedMatch]: Matches in document order
        """
        lines = self.extractor.iter_lines(document)
        return [self.annotator.annotate(m, path) for m in self.matcher.iter_matches(lines)]

    def search_file(self, path: Path | str) -> FileResult:
        """Search one notebook file.

        Read and parse failures are captured in the result rather than raised,
        so a bad file does not stop the rest of a run.

        Args:
            path: Notebook file

        Returns:
            FileResult: Matches or the error that prevented the search
        """
        path = Path(path)
        try:
            document = self.parser.parse(path)
        except NotebookIOError as e:
            logger.debug("Could not read %s: %s", path, e)
            return FileResult(path=path, error=str(e), error_kind="io")
        except NotebookParseError as e:
            logger.debug("Could not parse %s: %s", path, e)
            return FileResult(path=path, error=str(e), error_kind="parse")

        matches = self.search_document(document, path)
        logger.debug("%s: %d match(es)", path, len(matches))
        return FileResult(path=path, matches=matches)

    def search_files(self, paths: Iterable[Path | str], workers: int = 1) -> list[FileResult]:
        """Search several notebook files.

        Args:
            paths: Notebook files, in the order results should be reported
            workers: Number of files to search concurrently

        Returns:
            list[FileResult]: One result per path, in input order
        """
        paths = list(paths)
        if workers <= 1 or len(paths) <= 1:
            return [self.search_file(p) for p in paths]

        with ThreadPoolExecutor(max_workers=workers) as executor:
            # map() yields in submission order regardless of completion order
            return list(executor.map(self.search_file, paths))
