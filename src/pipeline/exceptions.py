"""Errors raised by the analysis pipeline."""

from pipeline import notifications
from pipeline.notifications import Notification


class AnalysisError(Exception):
    """Base class for recoverable analysis errors."""

    notification: Notification = notifications.GENERATION_FAILED
    status_code: int = 500

    def __init__(self, detail: str | None = None):
        super().__init__(detail or self.notification.message)
        self.detail = detail or self.notification.message


class EmptyInputError(AnalysisError):
    """Submitted URL is blank."""

    notification = notifications.MISSING_INPUT
    status_code = 400


class InvalidUrlError(AnalysisError):
    """Submitted URL is not a Figma file reference."""

    notification = notifications.INVALID_URL
    status_code = 400


class AnalysisInProgressError(AnalysisError):
    """A submission arrived while another analysis was running."""

    notification = notifications.ANALYSIS_IN_PROGRESS
    status_code = 409


class AnalysisTimeoutError(AnalysisError):
    notification = notifications.ANALYSIS_TIMED_OUT
    status_code = 504


class AnalysisCancelledError(AnalysisError):
    notification = notifications.ANALYSIS_CANCELLED
    status_code = 409


class GenerationFailureError(AnalysisError):
    """The critique generator raised while building a report."""

    notification = notifications.GENERATION_FAILED
    status_code = 500


class SessionNotFoundError(LookupError):
    pass


class SessionLimitError(RuntimeError):
    pass
