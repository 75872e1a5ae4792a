"""CLI command that previews icon selection for one technology directory"""

import os
import sys

import click

from iconx.file_utils import find_svg_files
from iconx.models import PickResponse
from iconx.selection import explain_selection
from iconx.utils import human_readable_size


@click.command('pick')
@click.argument('tech_dir', type=click.Path(exists=True, file_okay=False))
@click.option('--name', 'tech_name', type=str, help='Technology name (default: directory name)')
@click.option('--json', 'output_json', is_flag=True, help='Output results as JSON')
@click.option('--no-color', is_flag=True, help='Disable colored output')
def pick_command(tech_dir: str, tech_name: str | None, output_json: bool, no_color: bool):
    """Show which SVG would be extracted from TECH_DIR. Nothing is written.

    \b
    Examples:
        iconx pick ./devicon/icons/react
        iconx pick ./vendor/go-logos --name go --json
    """
    if not tech_name:
        tech_name = os.path.basename(os.path.normpath(tech_dir))

    try:
        candidates = find_svg_files(tech_dir)
    except OSError as e:
        click.echo(f'❌ Error: failed to find SVG files: {e}', err=True)
        sys.exit(1)

    selected, rule = explain_selection(candidates, tech_name)
    response = PickResponse(
        tech_name=tech_name,
        tech_path=tech_dir,
        candidates=candidates,
        selected=selected,
        rule=rule,
    )

    if output_json:
        click.echo(response.model_dump_json(indent=2))
    else:
        click.echo(response.to_cli(colorize=not no_color and sys.stdout.isatty()))
        if selected:
            try:
                click.echo(f'Size: {human_readable_size(os.path.getsize(selected))}')
            except OSError:
                pass

    if selected is None:
        sys.exit(1)
