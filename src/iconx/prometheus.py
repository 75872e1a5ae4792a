"""Prometheus metrics for iconx"""

from prometheus_client import REGISTRY, Counter, Gauge, Histogram, write_to_textfile

# ============================================================================
# Job Metrics
# ============================================================================

# Jobs by outcome
jobs_total = Counter(
    'iconx_jobs_total',
    'Total number of technology directories processed',
    ['status'],  # processed, skipped
)

# Failures by error kind
job_failures_total = Counter(
    'iconx_job_failures_total',
    'Total number of failed jobs by error kind',
    ['kind'],  # scan_failed, no_files_found, no_suitable_file, copy_failed, internal_error
)

job_duration_seconds = Histogram(
    'iconx_job_duration_seconds',
    'Time spent processing a single technology directory',
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
    # 1ms to 5s - one directory scan plus one small file copy
)

candidates_per_job = Histogram(
    'iconx_candidates_per_job',
    'Number of SVG candidates found per technology directory',
    buckets=[0, 1, 2, 3, 5, 10, 20, 50, 100],
)


# ============================================================================
# Batch Metrics
# ============================================================================

extraction_duration_seconds = Histogram(
    'iconx_extraction_duration_seconds',
    'Time spent dispatching a whole batch of jobs',
    buckets=[0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0, 120.0, 300.0],
)

active_workers = Gauge('iconx_active_workers', 'Number of worker threads used by the last batch')

bytes_copied_total = Counter('iconx_bytes_copied_total', 'Total bytes copied into the output directory')


# ============================================================================
# Helper Functions
# ============================================================================


def record_job(success: bool, duration: float, num_candidates: int, error_kind: str | None = None):
    """
    Record metrics for a single job.

    Args:
        success: Whether an icon was written
        duration: Job duration in seconds
        num_candidates: Number of SVG candidates found (0 when the scan failed)
        error_kind: ErrorKind value when the job failed
    """
    jobs_total.labels(status='processed' if success else 'skipped').inc()
    job_duration_seconds.observe(duration)
    candidates_per_job.observe(num_candidates)
    if not success and error_kind:
        job_failures_total.labels(kind=error_kind).inc()


def record_copy(size_bytes: int):
    """Record bytes written for one icon."""
    bytes_copied_total.inc(size_bytes)


def record_extraction(duration: float, num_workers: int):
    """
    Record metrics for a dispatched batch.

    Args:
        duration: Batch duration in seconds
        num_workers: Number of parallel workers used
    """
    extraction_duration_seconds.observe(duration)
    active_workers.set(num_workers)


def write_metrics(path: str) -> None:
    """Write the default registry in textfile-collector format."""
    write_to_textfile(path, REGISTRY)
