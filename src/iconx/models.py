"""Pydantic models for jobs, outcomes and extraction results"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ErrorKind(str, Enum):
    """Reasons a technology directory produced no icon."""

    SCAN_FAILED = 'scan_failed'
    NO_FILES_FOUND = 'no_files_found'
    NO_SUITABLE_FILE = 'no_suitable_file'
    COPY_FAILED = 'copy_failed'
    INTERNAL_ERROR = 'internal_error'  # unexpected exception escaped a worker


class Job(BaseModel):
    """One technology directory to be reduced to one output file."""

    model_config = ConfigDict(frozen=True)

    tech_name: str = Field(..., description='Technology name, also the output file stem')
    tech_path: str = Field(..., description='Path to the technology directory')


class ErrorInfo(BaseModel):
    """Why a job failed"""

    kind: ErrorKind = Field(..., description='Error category')
    message: str = Field(..., description='Human-readable reason')

    def __str__(self) -> str:
        return self.message


class Outcome(BaseModel):
    """Result of processing one Job

    Attributes:
        tech_name: Technology the job was created for
        success: True when an icon was written
        error: Failure details (None on success)
        source_path: Selected source file (set on success)
        output_path: Written output file (set on success)
        duration_seconds: Time the worker spent on the job
    """

    tech_name: str
    success: bool
    error: ErrorInfo | None = None
    source_path: str | None = None
    output_path: str | None = None
    duration_seconds: float = 0.0


class ExtractionResult(BaseModel):
    """Aggregate result of dispatching a batch of jobs."""

    icons_path: str = Field('', description='Icon root the jobs were enumerated from')
    output_dir: str = Field(..., description='Directory the icons were written to')
    workers: int = Field(0, description='Number of parallel workers used')
    processed: int = Field(0, description='Jobs that wrote an icon')
    skipped: int = Field(0, description='Jobs that failed')
    outcomes: list[Outcome] = Field(default_factory=list, description='One outcome per job, in completion order')
    time: float = Field(0.0, description='Wall time in seconds')

    @property
    def total(self) -> int:
        return self.processed + self.skipped

    @property
    def failures(self) -> list[Outcome]:
        return [o for o in self.outcomes if not o.success]

    def to_cli(self, colorize: bool = False) -> str:
        """Format result for CLI output (human-readable)"""
        GREY = '\033[90m'
        BOLD_CYAN = '\033[1;36m'
        YELLOW = '\033[33m'
        GREEN = '\033[32m'
        RED = '\033[31m'
        RESET = '\033[0m'

        lines = []

        if colorize:
            if self.icons_path:
                lines.append(f'{GREY}Source:{RESET} {BOLD_CYAN}{self.icons_path}{RESET}')
            lines.append(f'{GREY}Output:{RESET} {BOLD_CYAN}{self.output_dir}{RESET}')
            lines.append(f'{GREY}Workers:{RESET} {self.workers}')
            lines.append(f'{GREY}Time:{RESET} {YELLOW}{self.time:.3f}s{RESET}')
            lines.append(f'{GREY}Processed:{RESET} {GREEN}{self.processed}{RESET}')
            lines.append(f'{GREY}Skipped:{RESET} {RED if self.skipped else GREY}{self.skipped}{RESET}')
        else:
            if self.icons_path:
                lines.append(f'Source: {self.icons_path}')
            lines.append(f'Output: {self.output_dir}')
            lines.append(f'Workers: {self.workers}')
            lines.append(f'Time: {self.time:.3f}s')
            lines.append(f'Processed: {self.processed}')
            lines.append(f'Skipped: {self.skipped}')

        failures = sorted(self.failures, key=lambda o: o.tech_name)
        if failures:
            lines.append('')
            lines.append(f'{GREY}Skipped technologies:{RESET}' if colorize else 'Skipped technologies:')
            for outcome in failures:
                reason = str(outcome.error) if outcome.error else 'unknown error'
                if colorize:
                    lines.append(f'  {YELLOW}{outcome.tech_name}{RESET}: {reason}')
                else:
                    lines.append(f'  {outcome.tech_name}: {reason}')

        return '\n'.join(lines)


class PickResponse(BaseModel):
    """Dry-run selection for one technology directory"""

    tech_name: str
    tech_path: str
    candidates: list[str] = Field(default_factory=list, description='SVG files in traversal order')
    selected: str | None = Field(None, description='File the heuristic would copy')
    rule: str | None = Field(None, description='Which rule selected the file')

    def to_cli(self, colorize: bool = False) -> str:
        GREY = '\033[90m'
        BOLD_GREEN = '\033[1;32m'
        RESET = '\033[0m'

        lines = [f'Technology: {self.tech_name}', f'Candidates ({len(self.candidates)}):']
        for path in self.candidates:
            marker = '*' if path == self.selected else ' '
            if colorize and path == self.selected:
                lines.append(f'  {BOLD_GREEN}{marker} {path}{RESET}')
            else:
                lines.append(f'  {marker} {path}')
        if self.selected:
            rule = f' ({self.rule})' if self.rule else ''
            lines.append(f'Selected: {self.selected}{rule}')
        else:
            lines.append(f'{GREY}Selected: none{RESET}' if colorize else 'Selected: none')
        return '\n'.join(lines)
