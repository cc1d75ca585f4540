"""Click CLI commands for FloodScene."""

import json
import logging
import pathlib
from typing import Optional

import click

from .constants import OUTPUT_DIR
from .scene import FloodScene
from .view import ViewController

logger = logging.getLogger(__name__)


@click.group()
def cli():
    """FloodScene CLI for rendering flood depth maps over 3D tiles."""
    pass


@cli.command()
@click.option('--output', '-o', default=str(OUTPUT_DIR / 'flood_scene.html'),
              help='Output HTML file path')
@click.option('--depth', '-d', default=0.0, type=float, help='Minimum flood depth to show')
@click.option('--opacity', default=0.2, type=click.FloatRange(0.0, 1.0),
              help='Flood layer opacity (0-1)')
@click.option('--extruded/--flat', default=False, help='Extrude polygons by flood depth')
@click.option('--elevation-scale', default=0.5, type=click.FloatRange(min=0.0),
              help='Extrusion height per metre of depth')
@click.option('--lat', type=float, default=None, help='Focus latitude')
@click.option('--lng', type=float, default=None, help='Focus longitude')
@click.option('--address', '-a', default=None, help='Focus on a geocoded address')
def render(output: str, depth: float, opacity: float, extruded: bool,
           elevation_scale: float, lat: Optional[float], lng: Optional[float],
           address: Optional[str]):
    """Render the flood scene to a standalone HTML map."""
    from .deck import write_html

    try:
        scene = FloodScene()
        scene.update_ui(opacity=opacity, extruded=extruded,
                        elevation_scale=elevation_scale, depth_threshold=depth)

        if address:
            from backend.geocoder import GeocoderService
            point = GeocoderService().locate(address)
            lat, lng = point["latitude"], point["longitude"]
        if lat is not None and lng is not None:
            scene.focus_on(lat, lng)

        path = write_html(scene, pathlib.Path(output))
        click.echo(f"Wrote {path}")
    except Exception as e:
        logger.error(f"Error rendering flood scene: {e}")
        raise click.ClickException(str(e))


@cli.command()
def legend():
    """Print the flood depth colour legend."""
    scene = FloodScene()
    for label, (r, g, b) in scene.legend():
        click.echo(f"{label:>16}  rgb({r},{g},{b})")


# Western longitudes start with "-" and must not be parsed as options
@cli.command(context_settings={"ignore_unknown_options": True})
@click.argument('lat', type=float)
@click.argument('lng', type=float)
def focus(lat: float, lng: float):
    """Print the view state a focus on LAT LNG produces."""
    try:
        view_state = ViewController().focus_on(lat, lng)
    except ValueError as e:
        raise click.ClickException(str(e))
    click.echo(json.dumps(view_state.to_dict(), indent=2))


if __name__ == '__main__':
    cli()
