#!/usr/bin/env python3
"""CLI entry point for the tracery grammar tools."""

import logging
import sys
from pathlib import Path

import click

from cardinality import CardinalityCalculator, format_cardinality
from config import settings
from errors import GrammarError
from expansion import Expander, RandomStrategy
from grammar_graph import GrammarGraph
from grammar_loader import load_grammar, prepare_grammar, write_prepared
from graph_exporter import SchemaVariant, export_dot
from tracery_runner import run_tracery


grammar_argument = click.argument(
    'grammar_file',
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)


def fail(error: Exception):
    """Report a fatal grammar error and exit."""
    click.echo(f"Error: {error}", err=True)
    sys.exit(1)


def load_graph(grammar_file: Path) -> GrammarGraph:
    grammar = load_grammar(grammar_file, settings.grammar.include_directive)
    return GrammarGraph.from_grammar(grammar)


@click.group()
@click.option(
    '-v', '--verbose',
    is_flag=True,
    help='Log files read and groups processed to stderr'
)
def main(verbose: bool):
    """
    Expand, count, draw and prepare Tracery grammars.

    Example:
        python cli.py expand bot.json -n 10
        python cli.py schema bot.json --variant short > bot.gv
        python cli.py prepare bot.json  # writes bot_prepared.json
    """
    logging.basicConfig(
        level=logging.INFO if verbose else settings.logging.level,
        format=settings.logging.format,
        stream=sys.stderr,
    )


@main.command()
@grammar_argument
@click.option(
    '-n', '--count',
    default=settings.expansion.sample_count,
    type=click.IntRange(min=1),
    help='Number of texts to generate (default: 1)'
)
@click.option(
    '--seed',
    type=int,
    default=None,
    help='Random seed (default: random)'
)
@click.option(
    '--origin',
    default=settings.grammar.origin,
    help='Symbol to expand (default: origin)'
)
@click.option(
    '--max-depth',
    type=click.IntRange(min=1),
    default=settings.expansion.max_depth,
    help='Abort expansions nested deeper than this (default: unlimited)'
)
def expand(grammar_file: Path, count: int, seed: int | None, origin: str, max_depth: int | None):
    """Generate texts from GRAMMAR_FILE."""
    try:
        graph = load_graph(grammar_file)
        expander = Expander(graph, RandomStrategy(seed), max_depth=max_depth)
        outputs = expander.generate(count, origin)
    except GrammarError as e:
        fail(e)

    for text in outputs:
        click.echo(text)


@main.command()
@grammar_argument
def count(grammar_file: Path):
    """Print how many texts each group of GRAMMAR_FILE can produce."""
    try:
        graph = load_graph(grammar_file)
        cardinalities = CardinalityCalculator(graph).annotate()
    except GrammarError as e:
        fail(e)

    separator = settings.schema.thousands_separator
    for name, value in cardinalities.items():
        click.echo(f"{name}\t{format_cardinality(value, separator)}")


@main.command()
@grammar_argument
@click.option(
    '--variant',
    type=click.Choice([variant.value for variant in SchemaVariant]),
    default=SchemaVariant.PLAIN.value,
    help='plain: groups only, short: groups with counts, long: one node per rule'
)
def schema(grammar_file: Path, variant: str):
    """
    Draw the dependencies of GRAMMAR_FILE in Dot format.

    Example:
        python cli.py schema bot.json > bot.gv
        dot -Tsvg bot.gv -o bot.svg
    """
    try:
        graph = load_graph(grammar_file)
        document = export_dot(graph, variant, separator=settings.schema.thousands_separator)
    except GrammarError as e:
        fail(e)

    click.echo(document, nl=False)


@main.command()
@grammar_argument
@click.option(
    '--origin',
    default=settings.grammar.origin,
    help='Root symbol (default: origin)'
)
def prepare(grammar_file: Path, origin: str):
    """Write GRAMMAR_FILE flattened for stock Tracery as <name>_prepared.json."""
    try:
        grammar = load_grammar(grammar_file, settings.grammar.include_directive)
        output = write_prepared(prepare_grammar(grammar, origin), grammar_file)
    except GrammarError as e:
        fail(e)

    click.echo(f"Prepared grammar written to: {output}")


@main.command()
@grammar_argument
@click.option(
    '-n', '--count',
    default=settings.expansion.sample_count,
    type=click.IntRange(min=1),
    help='Number of samples (default: 1)'
)
@click.option(
    '--seed',
    type=int,
    default=None,
    help='Random seed (default: random)'
)
@click.option(
    '--origin',
    default=settings.grammar.origin,
    help='Root symbol (default: origin)'
)
def samples(grammar_file: Path, count: int, seed: int | None, origin: str):
    """Prepare GRAMMAR_FILE in memory and render samples with Tracery."""
    try:
        grammar = load_grammar(grammar_file, settings.grammar.include_directive)
        outputs = run_tracery(grammar, count=count, origin=origin, seed=seed)
    except GrammarError as e:
        fail(e)

    for text in outputs:
        click.echo(f"\n{text}\n")


if __name__ == '__main__':
    main()
