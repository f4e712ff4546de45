"""Single-flight analysis session: validate, extract, generate."""

import asyncio
import enum
import logging
import uuid
from datetime import datetime, timezone

from analyzers.base import AnalysisRequest, BaseCritiqueGenerator, CritiqueReport
from analyzers.figma_url import extract_file_id, validate_figma_url
from analyzers.static import StaticCritiqueGenerator
from config import settings
from pipeline import notifications
from pipeline.exceptions import (
    AnalysisCancelledError,
    AnalysisError,
    AnalysisInProgressError,
    AnalysisTimeoutError,
    EmptyInputError,
    GenerationFailureError,
    InvalidUrlError,
)
from pipeline.notifications import Notification

logger = logging.getLogger(__name__)

# Marks "take the timeout from settings"; None means no timeout at all
USE_SETTINGS = object()


class AnalysisStatus(str, enum.Enum):
    """Status of a session."""

    IDLE = "idle"              # Nothing in flight
    VALIDATING = "validating"  # Checking the submitted URL
    REJECTED = "rejected"      # URL refused, about to return to idle
    ANALYZING = "analyzing"    # Critique generation in flight
    COMPLETE = "complete"      # Report available, ready for a new submission


def prepare_request(raw_url: str | None) -> AnalysisRequest:
    """
    Validate a raw submission and build the request for the generator.

    Raises:
        EmptyInputError: if the URL is missing or blank
        InvalidUrlError: if the URL is not a Figma file reference
    """
    if raw_url is None or not raw_url.strip():
        raise EmptyInputError()

    if not validate_figma_url(raw_url):
        raise InvalidUrlError(f"Not a Figma file URL: {raw_url.strip()}")

    return AnalysisRequest(raw_url=raw_url, file_id=extract_file_id(raw_url))


class AnalysisSession:
    """
    Owns the current request/report pair for one client.

    Only one analysis may run at a time. The report is replaced in a single
    assignment once generation finishes, so readers see either the previous
    report or the new one, never something half-built.
    """

    def __init__(
        self,
        generator: BaseCritiqueGenerator | None = None,
        timeout_seconds: float | None | object = USE_SETTINGS,
        session_id: uuid.UUID | None = None,
    ):
        self.id = session_id or uuid.uuid4()
        self.generator = generator or StaticCritiqueGenerator()
        if timeout_seconds is USE_SETTINGS:
            timeout_seconds = settings.analysis_timeout_seconds
        self.timeout_seconds: float | None = timeout_seconds

        self.status = AnalysisStatus.IDLE
        self.report: CritiqueReport | None = None
        self.notification: Notification | None = None
        self.created_at = datetime.now(timezone.utc)
        self.updated_at = self.created_at

        self._task: asyncio.Task | None = None
        self._cancel_requested = False

    @property
    def is_analyzing(self) -> bool:
        return self.status == AnalysisStatus.ANALYZING

    async def submit(self, raw_url: str | None) -> CritiqueReport:
        """
        Run the full pipeline for one submission.

        Returns:
            The new report, which also becomes the session's cached report

        Raises:
            AnalysisInProgressError: another submission is still analyzing
            EmptyInputError, InvalidUrlError: the URL was rejected
            AnalysisTimeoutError: generation exceeded the configured timeout
            AnalysisCancelledError: cancel() was called while analyzing
            GenerationFailureError: the generator raised
        """
        if self.is_analyzing:
            logger.warning(f"Session {self.id}: rejected submission, analysis already running")
            raise AnalysisInProgressError()

        self._set_status(AnalysisStatus.VALIDATING)
        try:
            request = prepare_request(raw_url)
        except AnalysisError as e:
            logger.info(f"Session {self.id}: rejected {raw_url!r} ({e.notification.tag.value})")
            self._set_status(AnalysisStatus.REJECTED)
            self.notification = e.notification
            self._set_status(AnalysisStatus.IDLE)
            raise

        self._set_status(AnalysisStatus.ANALYZING)
        report = await self._generate(request)

        self.report = report
        self.notification = notifications.ANALYSIS_COMPLETE
        self._set_status(AnalysisStatus.COMPLETE)
        logger.info(f"Session {self.id}: analysis complete for {request.raw_url!r}")
        return report

    def cancel(self) -> bool:
        """Cancel the in-flight analysis. Returns False if nothing was running."""
        if self._task is None or self._task.done():
            return False
        logger.info(f"Session {self.id}: cancelling analysis")
        self._cancel_requested = True
        self._task.cancel()
        return True

    async def _generate(self, request: AnalysisRequest) -> CritiqueReport:
        self._cancel_requested = False
        self._task = asyncio.ensure_future(self.generator.generate(request))

        try:
            if self.timeout_seconds is not None:
                report = await asyncio.wait_for(self._task, self.timeout_seconds)
            else:
                report = await self._task
        except asyncio.TimeoutError as e:
            # wait_for cancels the task when it expires; a TimeoutError the
            # generator raised itself leaves the task finished, not cancelled
            if self.timeout_seconds is not None and self._task.cancelled():
                logger.error(f"Session {self.id}: analysis timed out after {self.timeout_seconds}s")
                raise self._fail(AnalysisTimeoutError()) from None
            raise self._generation_failed(e) from e
        except asyncio.CancelledError:
            if not self._cancel_requested:
                # The caller itself was cancelled
                self._set_status(AnalysisStatus.IDLE)
                raise
            raise self._fail(AnalysisCancelledError()) from None
        except Exception as e:
            raise self._generation_failed(e) from e
        finally:
            self._task = None

        if not isinstance(report, CritiqueReport):
            raise self._fail(
                GenerationFailureError(
                    f"Generator {self.generator.name} returned {type(report).__name__}"
                )
            )

        return report

    def _generation_failed(self, error: Exception) -> AnalysisError:
        logger.exception(f"Session {self.id}: generator {self.generator.name} failed: {error!r}")
        return self._fail(GenerationFailureError(str(error) or type(error).__name__))

    def _fail(self, error: AnalysisError) -> AnalysisError:
        self.notification = error.notification
        self._set_status(AnalysisStatus.IDLE)
        return error

    def _set_status(self, status: AnalysisStatus) -> None:
        self.status = status
        self.updated_at = datetime.now(timezone.utc)


async def run_analysis(
    raw_url: str | None,
    generator: BaseCritiqueGenerator | None = None,
) -> CritiqueReport:
    """Convenience function to analyze a single URL with a throwaway session."""
    session = AnalysisSession(generator=generator)
    return await session.submit(raw_url)
