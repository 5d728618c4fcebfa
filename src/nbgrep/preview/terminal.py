"""Terminal output of search results using Rich."""

from typing import Iterable, Optional

from rich.console import Console
from rich.segment import Segments
from rich.text import Text

from nbgrep.models import AnnotatedMatch, FileResult

MATCH_STYLE = "bold bright_red"
NONTEXT_MESSAGE = "Non-text output data matches."


class TerminalPresenter:
    """Print matches one per line, grep style.

    Each line is '[file: ][label: ]text'. Matched spans are highlighted when
    color is enabled. Matches in opaque data outputs print a notice instead
    of the data itself.
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        error_console: Optional[Console] = None,
        color: Optional[bool] = None,
        show_filenames: bool = False,
    ):
        """Initialize the presenter.

        Args:
            console: Console for matches (creates new if None)
            error_console: Console for per-file errors (stderr if None)
            color: Highlight matches; None means color when the console is a terminal
            show_filenames: Prefix each match with its file name
        """
        self.console = console or Console(highlight=False)
        self.error_console = error_console or Console(stderr=True, highlight=False)
        self.color = self.console.is_terminal if color is None else color
        self.show_filenames = show_filenames

    def render(self, item: AnnotatedMatch) -> Text:
        """Build the output line for one match."""
        line = Text()

        if self.show_filenames:
            line.append(str(item.path), style="magenta" if self.color else "")
            line.append(": ")

        if item.label:
            line.append(item.label, style="green" if self.color else "")
            line.append(": ")

        match = item.match
        if not match.origin.is_text:
            line.append(NONTEXT_MESSAGE, style=MATCH_STYLE if self.color else "")
            return line

        body = Text(match.text)
        if self.color:
            for start, end in match.spans:
                body.stylize(MATCH_STYLE, start, end)
        line.append_text(body)
        return line

    def show_match(self, item: AnnotatedMatch) -> None:
        _print_line(self.console, self.render(item))

    def show_error(self, result: FileResult) -> None:
        """Report a file that could not be searched."""
        message = Text(f"Error in file {result.path}: {result.error}", style="red" if self.color else "")
        _print_line(self.error_console, message)

    def show_results(self, results: Iterable[FileResult]) -> int:
        """Print every match and error, in order.

        Args:
            results: Per-file results in the order files were given

        Returns:
            int: Number of matches printed
        """
        shown = 0
        for result in results:
            if not result.ok:
                self.show_error(result)
                continue
            for item in result.matches:
                self.show_match(item)
                shown += 1
        return shown


def _print_line(console: Console, line: Text) -> None:
    """Print a line as-is, without wrapping or expanding tabs."""
    console.print(Segments(line.render(console)), soft_wrap=True)
