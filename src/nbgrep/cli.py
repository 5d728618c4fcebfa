"""Command-line interface for nbgrep."""

import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

import click
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from nbgrep import ConfigurationError, PatternError, __version__
from nbgrep.config import NbgrepConfig, get_config
from nbgrep.files import NotebookResolver
from nbgrep.models import CELL_TYPES, MAX_LINE_INFO, SearchConfig
from nbgrep.preview.terminal import TerminalPresenter
from nbgrep.search import NotebookSearcher

EXIT_MATCH = 0
EXIT_NO_MATCH = 1
EXIT_USAGE = 2

err_console = Console(stderr=True, highlight=False)


class OrderedCommand(click.Command):
    """Command that records the order options appeared on the command line.

    Several output options override each other with the last one winning,
    which click's collected values alone cannot express.
    """

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        parser = self.make_parser(ctx)
        _, _, param_order = parser.parse_args(args=list(args))
        ctx.meta["nbgrep.param_order"] = [param.name for param in param_order]
        return super().parse_args(ctx, args)


def resolve_output_types(
    param_order: Sequence[str], output_types: Sequence[str], default: Sequence[str]
) -> frozenset[str]:
    """Apply --output-type, --include-output and --no-include-output in order.

    Any --output-type replaces the default set; --include-output restores the
    default and --no-include-output clears it. Whichever comes last wins.

    Args:
        param_order: Option names in command-line order, one per occurrence
        output_types: Values given to --output-type, in order
        default: Output types searched when nothing overrides them

    Returns:
        frozenset[str]: Output types to search
    """
    selected = list(default)
    explicit = False
    values = iter(output_types)

    for name in param_order:
        if name == "output_types":
            if not explicit:
                selected = []
                explicit = True
            selected.append(next(values))
        elif name == "include_output":
            selected = list(default)
            explicit = False
        elif name == "no_include_output":
            selected = []
            explicit = True

    return frozenset(selected)


def resolve_line_info(param_order: Sequence[str], line_info: int, default: int) -> int:
    """Apply -n and -N in order.

    Each -n adds one level of detail on top of what came before it and -N
    jumps straight to the most detailed level, so '-N -n' ends at level 1
    while '-n -N' ends at level 4.
    """
    level: Optional[int] = None
    after_max = False
    for name in param_order:
        if name == "max_line_info":
            level = MAX_LINE_INFO
            after_max = True
        elif name == "line_info":
            level = 1 if level is None or after_max else level + 1
            after_max = False

    if level is None:
        return line_info or default
    return min(level, MAX_LINE_INFO)


def resolve_filename_policy(param_order: Sequence[str], show_filenames: Optional[str], default: str) -> str:
    """Apply -H and -F in order; the last one given wins."""
    policy = default
    for name in param_order:
        if name == "always_show_filename":
            policy = "always"
        elif name == "show_filenames":
            policy = show_filenames or policy
    return policy


def setup_logging(level: str) -> None:
    """Send diagnostics to stderr through Rich."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def load_config() -> NbgrepConfig:
    try:
        return get_config()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid NBGREP_ environment settings: {e}") from e


@click.command(cls=OrderedCommand)
@click.version_option(version=__version__)
@click.argument("pattern")
@click.argument("paths", nargs=-1, type=click.Path(path_type=Path))
@click.option(
    "--color",
    type=click.Choice(["never", "always", "auto"]),
    default=None,
    help="When to color matches (default: from config or auto)",
)
@click.option("--ignore-case", "-i", is_flag=True, help="Ignore case when matching")
@click.option("--invert-match", "-v", is_flag=True, help="Match lines that do *not* contain PATTERN")
@click.option(
    "--include-source/--no-include-source",
    " /-X",
    default=True,
    help="Search cell source (default). The last of the two flags wins.",
)
@click.option(
    "--cell-type",
    "-t",
    "cell_types",
    type=click.Choice(list(CELL_TYPES)),
    multiple=True,
    help="Cell types to search; repeatable (default: all)",
)
@click.option(
    "--output-type",
    "-O",
    "output_types",
    multiple=True,
    help="Output types to search, e.g. text/plain or image/png; repeatable (default: text/plain)",
)
@click.option(
    "--include-output",
    is_flag=True,
    help="Reset searched output types to the default",
)
@click.option(
    "--no-include-output",
    is_flag=True,
    help="Do not search any cell output",
)
@click.option(
    "--line-info",
    "-n",
    count=True,
    help="Show where each match is; repeat for more detail (up to -nnnn)",
)
@click.option("--max-line-info", "-N", is_flag=True, help="Alias for -nnnn")
@click.option(
    "--show-filenames",
    "-H",
    type=click.Choice(["never", "always", "auto"]),
    default=None,
    help="When to show file names (default: auto, i.e. when several files or a directory are searched)",
)
@click.option("--always-show-filename", "-F", is_flag=True, help="Alias for --show-filenames=always")
@click.option("--recursive", "-R", is_flag=True, help="Search directories recursively")
@click.option(
    "--jobs",
    "-j",
    type=click.IntRange(min=1),
    default=None,
    help="Number of notebooks to search concurrently (default: from config or 1)",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Diagnostic logging level (default: from config or WARNING)",
)
@click.pass_context
def main(
    ctx: click.Context,
    pattern: str,
    paths: tuple[Path, ...],
    color: Optional[str],
    ignore_case: bool,
    invert_match: bool,
    include_source: bool,
    cell_types: tuple[str, ...],
    output_types: tuple[str, ...],
    include_output: bool,
    no_include_output: bool,
    line_info: int,
    max_line_info: bool,
    show_filenames: Optional[str],
    always_show_filename: bool,
    recursive: bool,
    jobs: Optional[int],
    log_level: Optional[str],
):
    """Search Jupyter notebooks for PATTERN.

    PATTERN is a regular expression. PATHS are notebooks or directories
    holding notebooks (default: the current directory). Cell sources and
    text/plain outputs are searched unless told otherwise.
    """
    try:
        config = load_config()
    except ConfigurationError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", soft_wrap=True)
        sys.exit(EXIT_USAGE)

    setup_logging((log_level or config.log_level).upper())

    param_order = ctx.meta.get("nbgrep.param_order", [])
    level = resolve_line_info(param_order, line_info, config.line_info)

    try:
        search_config = SearchConfig.create(
            pattern,
            ignore_case=ignore_case,
            invert_match=invert_match,
            cell_types=frozenset(cell_types or CELL_TYPES),
            include_source=include_source,
            output_types=resolve_output_types(param_order, output_types, config.output_types),
            line_info=level,
        )
    except PatternError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", soft_wrap=True)
        sys.exit(EXIT_USAGE)

    targets = list(paths) or [Path(".")]
    files = NotebookResolver().resolve(targets, recursive=recursive)
    if not files:
        err_console.print(
            "[red]Error:[/red] No notebook files listed or found in the given directories.",
            soft_wrap=True,
        )
        sys.exit(EXIT_USAGE)

    filename_policy = resolve_filename_policy(param_order, show_filenames, config.show_filenames)
    if filename_policy == "auto":
        with_filenames = len(targets) > 1 or any(p.is_dir() for p in targets)
    else:
        with_filenames = filename_policy == "always"

    color_policy = color or config.color
    presenter = TerminalPresenter(
        console=Console(highlight=False, force_terminal=True if color_policy == "always" else None),
        color=None if color_policy == "auto" else color_policy == "always",
        show_filenames=with_filenames,
    )

    searcher = NotebookSearcher(search_config)
    results = searcher.search_files(files, workers=jobs or config.jobs)
    shown = presenter.show_results(results)

    sys.exit(EXIT_MATCH if shown else EXIT_NO_MATCH)


if __name__ == "__main__":
    main()
