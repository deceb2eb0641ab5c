"""CLI for entstats."""

from __future__ import annotations

import logging
import sys

import click
from rich.console import Console

from entstats import __version__


@click.command()
@click.version_option(__version__)
@click.argument("path", default="-")
@click.option("-b", "--bit", "bit_mode", is_flag=True, help="Analyse individual bits instead of bytes.")
@click.option("-c", "--occurrences", is_flag=True, help="Print the occurrence count of each value.")
@click.option("-f", "--fold", is_flag=True, help="Fold upper case ASCII letters to lower case.")
@click.option("-t", "--terse", is_flag=True, help="Comma-separated output.")
@click.option("--json", "as_json", is_flag=True, help="JSON output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging on stderr.")
def main(path: str, bit_mode: bool, occurrences: bool, fold: bool, terse: bool,
         as_json: bool, verbose: bool) -> None:
    """🔬 entstats: randomness statistics for a file (or stdin when PATH is -).

    Examples:

        entstats sample.bin

        head -c 1M /dev/urandom | entstats -t

        entstats --bit --json key.bin
    """
    from entstats.report import occurrence_table, render_json, render_terse, render_text
    from entstats.source import read_input
    from entstats.stats import analyze

    if terse and as_json:
        raise click.UsageError("--terse and --json are mutually exclusive.")
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        data = read_input(path, fold=fold)
    except OSError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if data.size == 0:
        click.echo("Warning: input is empty; statistics are undefined.", err=True)

    result = analyze(data, bit_mode=bit_mode)

    if as_json:
        click.echo(render_json(result, occurrences))
    elif terse:
        click.echo(render_terse(result, occurrences), nl=False)
    else:
        if occurrences:
            Console(highlight=False).print(occurrence_table(result))
            click.echo()
        click.echo(render_text(result), nl=False)
