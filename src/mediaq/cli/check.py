"""CLI command: mediaq check -- evaluate a media query against a described viewport."""

from __future__ import annotations

import sys

import click

from mediaq.config import MediaqConfig
from mediaq.evaluator import evaluate
from mediaq.model.values import Orientation, Ratio
from mediaq.parser import ParseError, parse


def _ratio_option(ctx: click.Context, param: click.Parameter, value: str | None) -> Ratio | None:
    if value is None:
        return None
    try:
        return Ratio.from_string(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc


@click.command()
@click.argument("query")
@click.option("--width", type=float, help="Viewport width in px.")
@click.option("--height", type=float, help="Viewport height in px.")
@click.option("--device-width", type=float, help="Device width in px.")
@click.option("--device-height", type=float, help="Device height in px.")
@click.option("--resolution", type=float, help="Device pixel ratio in dppx.")
@click.option(
    "--orientation",
    type=click.Choice([o.value for o in Orientation]),
    help="Override the orientation derived from width/height.",
)
@click.option("--aspect-ratio", callback=_ratio_option, help="Override the viewport ratio, e.g. 16/9.")
@click.option("--device-aspect-ratio", callback=_ratio_option, help="Override the device ratio.")
@click.option("--color", type=int, help="Bits per color component (0 for monochrome).")
@click.option(
    "--media-type",
    type=click.Choice(["screen", "print"]),
    default=MediaqConfig.media_type,
    show_default=True,
    help="Media type the environment reports.",
)
@click.option(
    "--font-size",
    type=float,
    default=MediaqConfig.font_size,
    show_default=True,
    help="Size of one em/rem in px.",
)
def check(
    query: str,
    width: float | None,
    height: float | None,
    device_width: float | None,
    device_height: float | None,
    resolution: float | None,
    orientation: str | None,
    aspect_ratio: Ratio | None,
    device_aspect_ratio: Ratio | None,
    color: int | None,
    media_type: str,
    font_size: float,
) -> None:
    """Evaluate QUERY against the described environment.

    Prints MATCH or NO MATCH and exits with code 0 or 1 respectively.
    Exits with code 2 if QUERY cannot be parsed.
    """
    try:
        query_list = parse(query)
    except ParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(2)

    config = MediaqConfig(media_type=media_type, font_size=font_size)
    env = config.environment(
        width=width,
        height=height,
        device_width=device_width,
        device_height=device_height,
        resolution=resolution,
        orientation=Orientation(orientation) if orientation else None,
        aspect_ratio=aspect_ratio,
        device_aspect_ratio=device_aspect_ratio,
        color=color,
    )

    if evaluate(query_list, env):
        click.echo(f"MATCH: {query_list}")
        sys.exit(0)
    click.echo(f"NO MATCH: {query_list}")
    sys.exit(1)
