"""Icon extraction: per-directory jobs and the parallel dispatcher.

One job per technology directory. Each job scans its directory for SVG files,
picks the best candidate and copies it to <output_dir>/<tech_name>.svg.

Key behaviors:
- Job failures (scan error, no SVGs, copy error) are job-local and never abort the batch
- Worker count is min(available CPUs, max_workers cap, number of jobs)
- Counters are reduced by the collecting thread only, so every job is counted exactly once
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from time import time

import psutil

from iconx import prometheus as prom
from iconx.config import MAX_WORKERS_CAP
from iconx.errors import JobError
from iconx.file_utils import copy_file, find_svg_files, list_tech_directories
from iconx.models import ErrorInfo, ErrorKind, ExtractionResult, Job, Outcome
from iconx.selection import select_best_svg


logger = logging.getLogger(__name__)


def get_available_parallelism() -> int:
    """Number of CPUs this process may run on."""
    try:
        return len(psutil.Process().cpu_affinity())
    except (AttributeError, psutil.Error, OSError):
        # cpu_affinity() is not available on macOS
        pass
    return psutil.cpu_count(logical=True) or os.cpu_count() or 1


class IconExtractor:
    """Extracts one icon per technology directory into a flat output directory.

    The output directory must exist before jobs are processed; creating it is
    the pipeline's responsibility.
    """

    def __init__(self, output_dir: str, max_workers: int = MAX_WORKERS_CAP):
        """Initialize the extractor.

        Args:
            output_dir: Directory receiving <tech_name>.svg files
            max_workers: Upper cap on parallel workers
        """
        self.output_dir = output_dir
        self.max_workers = max(1, max_workers)

    def worker_count(self, num_jobs: int) -> int:
        """Workers to start for a batch of num_jobs (0 for an empty batch)."""
        return min(get_available_parallelism(), self.max_workers, num_jobs)

    def output_path_for(self, tech_name: str) -> str:
        return os.path.join(self.output_dir, f'{tech_name}.svg')

    def process_job(self, job: Job) -> Outcome:
        """Process a single technology directory.

        Never raises for job-local failures; they are reported in the Outcome.

        Args:
            job: Technology directory to process

        Returns:
            Outcome with success flag, or error kind and reason
        """
        start_time = time()
        num_candidates = 0

        try:
            svg_files = self._scan(job)
            num_candidates = len(svg_files)
            source_path, output_path = self._extract_icon(job, svg_files)
        except JobError as e:
            duration = time() - start_time
            prom.record_job(False, duration, num_candidates, e.kind.value)
            return Outcome(
                tech_name=job.tech_name,
                success=False,
                error=e.to_info(),
                duration_seconds=duration,
            )

        duration = time() - start_time
        prom.record_job(True, duration, num_candidates)
        return Outcome(
            tech_name=job.tech_name,
            success=True,
            source_path=source_path,
            output_path=output_path,
            duration_seconds=duration,
        )

    def _scan(self, job: Job) -> list[str]:
        try:
            return find_svg_files(job.tech_path)
        except OSError as e:
            raise JobError(ErrorKind.SCAN_FAILED, f'failed to find SVG files: {e}') from e

    def _extract_icon(self, job: Job, svg_files: list[str]) -> tuple[str, str]:
        if not svg_files:
            raise JobError(ErrorKind.NO_FILES_FOUND, 'no SVG files found')

        selected_file = select_best_svg(svg_files, job.tech_name)
        if selected_file is None:
            raise JobError(ErrorKind.NO_SUITABLE_FILE, 'no suitable SVG file found')

        output_path = self.output_path_for(job.tech_name)
        try:
            size = copy_file(selected_file, output_path)
        except OSError as e:
            raise JobError(ErrorKind.COPY_FAILED, f'failed to copy file: {e}') from e

        prom.record_copy(size)
        logger.info(f'Extracted: {selected_file} -> {os.path.basename(output_path)}')
        return selected_file, output_path

    def process_jobs(self, jobs: list[Job]) -> ExtractionResult:
        """Process jobs in parallel on a bounded thread pool.

        All workers drain the executor's single shared work queue. Returns
        only after every job produced exactly one Outcome.

        Args:
            jobs: Technology directories to process

        Returns:
            ExtractionResult with per-job outcomes and processed/skipped counts
        """
        result = ExtractionResult(output_dir=self.output_dir)
        start_time = time()

        num_workers = self.worker_count(len(jobs))
        result.workers = num_workers

        if not jobs:
            result.time = time() - start_time
            prom.record_extraction(result.time, num_workers)
            return result

        logger.info(f'Processing {len(jobs)} directories using {num_workers} workers...')

        completed_count = 0
        with ThreadPoolExecutor(max_workers=num_workers, thread_name_prefix='IconWorker') as executor:
            future_to_job = {executor.submit(self.process_job, job): job for job in jobs}

            for future in as_completed(future_to_job):
                job = future_to_job[future]
                completed_count += 1
                try:
                    outcome = future.result()
                except Exception as e:
                    logger.error(f'Unexpected error processing {job.tech_name}: {e}')
                    prom.record_job(False, 0.0, 0, ErrorKind.INTERNAL_ERROR.value)
                    outcome = Outcome(
                        tech_name=job.tech_name,
                        success=False,
                        error=ErrorInfo(kind=ErrorKind.INTERNAL_ERROR, message=str(e)),
                    )

                result.outcomes.append(outcome)
                if outcome.success:
                    result.processed += 1
                else:
                    result.skipped += 1
                    logger.warning(f'Failed to process {outcome.tech_name}: {outcome.error}')

                logger.debug(f'[{completed_count}/{len(jobs)}] Done: {job.tech_name}')

        result.time = time() - start_time
        prom.record_extraction(result.time, num_workers)
        return result

    def extract(self, icons_path: str) -> ExtractionResult:
        """Extract icons for every technology directory under icons_path.

        Raises:
            OSError: If icons_path itself cannot be read (nothing is dispatched)
        """
        logger.info('Extracting SVG icons...')

        jobs = list_tech_directories(icons_path)
        result = self.process_jobs(jobs)
        result.icons_path = icons_path

        logger.info(f'Extraction completed. Processed: {result.processed}, Skipped: {result.skipped}')
        return result
