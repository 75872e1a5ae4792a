"""Exceptions raised by the extraction pipeline"""

from iconx.models import ErrorInfo, ErrorKind


class JobError(Exception):
    """A job-local failure. Caught by the worker and turned into a failed Outcome."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    def to_info(self) -> ErrorInfo:
        return ErrorInfo(kind=self.kind, message=self.message)


class PipelineError(Exception):
    """A run-fatal failure in one of the pipeline steps."""

    def __init__(self, step: str, cause: Exception):
        super().__init__(f'{step} failed: {cause}')
        self.step = step
        self.cause = cause


class RepositoryError(Exception):
    """The icon repository could not be cloned or has an unexpected layout."""
