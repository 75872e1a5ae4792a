"""CLI commands that run the extraction pipeline"""

import sys

import click

from iconx import prometheus as prom
from iconx.config import ExtractorConfig
from iconx.errors import PipelineError
from iconx.models import ExtractionResult
from iconx.pipeline import ExtractionPipeline


def output_options(fn):
    """Options shared by `extract` and `local`."""
    fn = click.option('--metrics-file', type=click.Path(dir_okay=False), help='Write Prometheus metrics to this file')(fn)
    fn = click.option('--no-color', is_flag=True, help='Disable colored output')(fn)
    fn = click.option('--json', 'output_json', is_flag=True, help='Output results as JSON')(fn)
    fn = click.option(
        '--max-workers', type=click.IntRange(min=1), default=None, help='Maximum parallel workers (default: 8)'
    )(fn)
    fn = click.option('--output-dir', '-o', type=str, default=None, help='Output directory (default: icons)')(fn)
    return fn


def run_pipeline(pipeline: ExtractionPipeline, output_json: bool, no_color: bool, metrics_file: str | None) -> None:
    """Run the pipeline, print the result and exit.

    Exit code reflects only whether the pipeline ran, not how many
    technologies were skipped.
    """
    try:
        result = pipeline.run()
    except PipelineError as e:
        click.echo(f'❌ Extraction process failed: {e}', err=True)
        sys.exit(1)

    if metrics_file:
        try:
            prom.write_metrics(metrics_file)
        except OSError as e:
            click.echo(f'⚠️  Failed to write metrics to {metrics_file}: {e}', err=True)

    _output_result(result, output_json, no_color)
    sys.exit(0)


def _output_result(result: ExtractionResult, output_json: bool, no_color: bool) -> None:
    if output_json:
        click.echo(result.model_dump_json(indent=2))
        return
    colorize = not no_color and sys.stdout.isatty()
    click.echo(result.to_cli(colorize=colorize))
    click.echo()
    click.echo(f'Process completed successfully! Icons extracted to: {result.output_dir}')


@click.command('extract')
@click.option('--repo-url', type=str, default=None, help='Icon repository to clone (default: devicon)')
@click.option('--clone-dir', type=str, default=None, help='Temporary clone directory (default: devicon-clone)')
@click.option('--icons-dir', type=str, default=None, help='Icon root inside the repository (default: icons)')
@click.option('--keep-clone', is_flag=True, help='Do not remove the clone after extraction')
@output_options
def extract_command(
    repo_url: str | None,
    clone_dir: str | None,
    icons_dir: str | None,
    keep_clone: bool,
    output_dir: str | None,
    max_workers: int | None,
    output_json: bool,
    no_color: bool,
    metrics_file: str | None,
):
    """Clone the icon repository and extract one SVG per technology.

    \b
    Steps:
      1. Clone repository (shallow)
      2. Remove everything but the icons directory
      3. Recreate the output directory
      4. Extract icons in parallel
      5. Remove the clone (failure is only a warning)

    \b
    Examples:
        iconx extract
        iconx extract -o assets/icons --max-workers 4
        iconx extract --repo-url https://github.com/me/icons.git --icons-dir svg
    """
    config = ExtractorConfig.from_env().with_overrides(
        repo_url=repo_url,
        clone_dir=clone_dir,
        icons_dir=icons_dir,
        output_dir=output_dir,
        max_workers=max_workers,
    )
    pipeline = ExtractionPipeline(config, keep_clone=keep_clone)
    run_pipeline(pipeline, output_json, no_color, metrics_file)


@click.command('local')
@click.argument('icons_path', type=click.Path(exists=True, file_okay=False))
@output_options
def local_command(
    icons_path: str,
    output_dir: str | None,
    max_workers: int | None,
    output_json: bool,
    no_color: bool,
    metrics_file: str | None,
):
    """Extract icons from an existing icon tree (no clone).

    ICONS_PATH must contain one subdirectory per technology.

    \b
    Examples:
        iconx local ./devicon/icons
        iconx local ./devicon/icons -o out --json
    """
    config = ExtractorConfig.from_env().with_overrides(output_dir=output_dir, max_workers=max_workers)
    pipeline = ExtractionPipeline(config, icons_path=icons_path)
    run_pipeline(pipeline, output_json, no_color, metrics_file)
