"""
lcparse - Parser Command-Line Interface
=======================================

Parses a source file (or a single expression) and prints the resulting
tree, or the canonical source the tree corresponds to.

Usage Examples
--------------
Dump the tree:
    $ lcparse script.lc

Print canonical source (sugar lowered, minimal parentheses):
    $ lcparse script.lc --format

Parse a single expression:
    $ lcparse --expr "x = y *= 5"

Verbose mode:
    $ lcparse -v script.lc
"""

import logging
from pathlib import Path
from typing import Optional

import click

from lcfront import __version__
from lcfront.cli.errors import handle_cli_exception
from lcfront.lang.ast import ASTPrinter
from lcfront.lang.frontend import Frontend, FrontendOptions
from lcfront.lang.printer import format_expression, format_program


logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    required=False,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--ast", "output_format",
    flag_value="ast",
    default=True,
    help="Print the syntax tree (default)",
)
@click.option(
    "--format", "output_format",
    flag_value="source",
    help="Print canonical source instead of the tree",
)
@click.option(
    "-e", "--expr",
    metavar="TEXT",
    help="Parse TEXT as a single expression instead of a file",
)
@click.option(
    "--max-errors",
    type=click.IntRange(min=1),
    default=100,
    show_default=True,
    help="Stop after this many errors",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="lcparse")
def main(
    input_file: Optional[Path],
    output_format: str,
    expr: Optional[str],
    max_errors: int,
    verbose: bool,
) -> None:
    """
    Parse a script and print its syntax tree.

    INPUT_FILE is the source file (.lc) to parse.

    \b
    Examples:
        lcparse script.lc             # Tree dump
        lcparse script.lc --format    # Canonical source
        lcparse --expr "-x++"         # One expression
    """
    if (input_file is None) == (expr is None):
        raise click.UsageError("give exactly one of INPUT_FILE or --expr")

    setup_logging(verbose)
    frontend = Frontend(FrontendOptions(max_errors=max_errors))

    try:
        if expr is not None:
            tree = frontend.parse_expression(expr, "<expr>")
            if output_format == "source":
                click.echo(format_expression(tree))
            else:
                click.echo(ASTPrinter().print(tree))
            return

        logger.debug(f"Parsing {input_file}")
        result = frontend.parse_file(input_file)

        if output_format == "source":
            click.echo(format_program(result.program))
        else:
            click.echo(ASTPrinter().print(result.program))

        if verbose:
            click.echo(
                f"Parsed {input_file}: {len(result.program.declarations)} declarations, "
                f"{result.token_count} tokens",
                err=True,
            )

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)


if __name__ == "__main__":
    main()
