"""Main CLI entry point with command groups"""

import click

from iconx.__version__ import __version__
from iconx.cli.extract import extract_command, local_command
from iconx.cli.pick import pick_command
from iconx.utils import setup_logging


class DefaultCommandGroup(click.Group):
    """Custom Click Group that allows a default command"""

    def parse_args(self, ctx, args):
        # During shell completion, don't redirect to default command
        if ctx.resilient_parsing:
            return super().parse_args(ctx, args)

        # If --help or --version is requested, show group help/version
        if args and args[0] in ('--help', '-h', '--version'):
            return super().parse_args(ctx, args)

        # Check if first arg is a known command
        if args and args[0] in self.commands:
            return super().parse_args(ctx, args)

        # Otherwise, treat as extract command (default)
        return super().parse_args(ctx, ['extract'] + args)


@click.group(cls=DefaultCommandGroup)
@click.version_option(version=__version__, prog_name='iconx')
def cli():
    """
    iconx - extract one representative SVG icon per technology.

    \b
    Commands:
      iconx [extract]             Clone devicon and extract icons (default command)
      iconx local <icons_path>    Extract from an existing icon tree
      iconx pick <tech_dir>       Show which file would be selected

    \b
    Selection order per technology directory:
      1. filename contains "original"
      2. filename equals the technology name
      3. filename contains "plain"
      4. first SVG found

    \b
    Examples:
      iconx
      iconx -o public/icons --max-workers 4
      iconx local ./devicon/icons --json
      iconx pick ./devicon/icons/react
    """
    setup_logging()


cli.add_command(extract_command, name='extract')
cli.add_command(local_command, name='local')
cli.add_command(pick_command, name='pick')


def main():
    """Entry point for the CLI"""
    cli()


if __name__ == '__main__':
    main()
