"""Extraction pipeline: ordered steps around the parallel extractor.

Remote mode (default):
    clone repository -> trim clone -> create output directory -> extract -> cleanup clone

Local mode (icons_path given):
    create output directory -> extract

Every step except the final cleanup is fatal: its failure stops the run
before any further step runs. A cleanup failure is only logged.
"""

import logging
import os
from dataclasses import dataclass
from typing import Callable

from iconx.config import ExtractorConfig
from iconx.errors import PipelineError, RepositoryError
from iconx.extractor import IconExtractor
from iconx.models import ExtractionResult
from iconx.repository import cleanup_clone, clone_repository, prepare_output_dir, trim_clone


logger = logging.getLogger(__name__)


@dataclass
class PipelineStep:
    """A named pipeline step"""

    name: str
    fn: Callable[[], None]
    fatal: bool = True


def _overlaps(path_a: str, path_b: str) -> bool:
    """True if one path equals or contains the other."""
    a = os.path.realpath(path_a)
    b = os.path.realpath(path_b)
    return a == b or a.startswith(b + os.sep) or b.startswith(a + os.sep)


class ExtractionPipeline:
    """Runs the extraction steps in order and returns the extraction result."""

    def __init__(self, config: ExtractorConfig, icons_path: str | None = None, keep_clone: bool = False):
        """Initialize the pipeline.

        Args:
            config: Repository, directory and worker settings
            icons_path: Existing icon tree to extract from; skips clone, trim and cleanup
            keep_clone: Leave the clone on disk after extraction (remote mode only)
        """
        self.config = config
        self.local_icons_path = icons_path
        self.keep_clone = keep_clone
        self.result: ExtractionResult | None = None

    @property
    def icons_path(self) -> str:
        return self.local_icons_path if self.local_icons_path is not None else self.config.icons_path

    def steps(self) -> list[PipelineStep]:
        steps = []
        if self.local_icons_path is None:
            steps.append(PipelineStep('Clone repository', self.clone))
            steps.append(PipelineStep('Cleanup clone', self.trim))
        steps.append(PipelineStep('Create output directory', self.create_output_directory))
        steps.append(PipelineStep('Extract SVG icons', self.extract))
        if self.local_icons_path is None and not self.keep_clone:
            steps.append(PipelineStep('Cleanup temporary files', self.cleanup, fatal=False))
        return steps

    def run(self) -> ExtractionResult:
        """Run every step.

        Raises:
            PipelineError: If a fatal step failed
        """
        for step in self.steps():
            logger.debug(f'Running step: {step.name}')
            try:
                step.fn()
            except (OSError, RepositoryError, ValueError) as e:
                if not step.fatal:
                    logger.warning(f'{step.name} failed: {e}')
                    continue
                raise PipelineError(step.name, e) from e
        return self.result

    def clone(self) -> None:
        clone_repository(self.config.repo_url, self.config.clone_dir)

    def trim(self) -> None:
        trim_clone(self.config.clone_dir, self.config.icons_dir)

    def create_output_directory(self) -> None:
        if not os.path.isdir(self.icons_path):
            raise OSError(f'icons directory not found: {self.icons_path}')
        if _overlaps(self.config.output_dir, self.icons_path):
            raise ValueError(
                f'output directory {self.config.output_dir} overlaps icon source {self.icons_path}'
            )
        prepare_output_dir(self.config.output_dir)

    def extract(self) -> None:
        extractor = IconExtractor(self.config.output_dir, max_workers=self.config.max_workers)
        self.result = extractor.extract(self.icons_path)

    def cleanup(self) -> None:
        cleanup_clone(self.config.clone_dir)
