"""CLI command: mediaq inspect -- display the parsed structure of a media query list."""

from __future__ import annotations

import sys

import click

from mediaq.parser import ParseError, parse


@click.command()
@click.argument("query")
def inspect(query: str) -> None:
    """Parse QUERY and display each media query with its feature tests."""
    try:
        query_list = parse(query)
    except ParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        if exc.fragment:
            click.echo(f"  near {exc.fragment!r} (line {exc.line}, column {exc.column})", err=True)
        sys.exit(2)

    click.echo(f"Canonical: {query_list}")
    click.echo(f"Queries:   {len(query_list)}")

    for index, media_query in enumerate(query_list, start=1):
        click.echo()
        flags = []
        if media_query.negated:
            flags.append("not")
        if media_query.only:
            flags.append("only")
        click.echo(f"Query {index}: {media_query}")
        click.echo(f"  type: {media_query.media_type}")
        if flags:
            click.echo(f"  flags: {' '.join(flags)}")
        for test in media_query.features:
            if test.value is None:
                click.echo(f"  {test.feature.value} (exists)")
            else:
                click.echo(f"  {test.feature.value} {test.comparator.value} {test.value}")
