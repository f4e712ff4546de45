"""Tests for the analysis session state machine."""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from analyzers.base import AnalysisRequest, BaseCritiqueGenerator
from analyzers.static import StaticCritiqueGenerator
from config import settings
from pipeline.exceptions import (
    AnalysisCancelledError,
    AnalysisInProgressError,
    AnalysisTimeoutError,
    EmptyInputError,
    GenerationFailureError,
    InvalidUrlError,
    SessionLimitError,
    SessionNotFoundError,
)
from pipeline.notifications import NotificationTag
from pipeline.registry import SessionRegistry
from pipeline.session import AnalysisSession, AnalysisStatus, prepare_request, run_analysis

FIGMA_FILE_URL = "https://www.figma.com/file/ABC123/My-Design"


class GatedGenerator(BaseCritiqueGenerator):
    """Blocks until released, then delegates to the static generator."""

    def __init__(self):
        self.release = asyncio.Event()
        self.calls = 0

    @property
    def name(self) -> str:
        return "gated"

    async def generate(self, request: AnalysisRequest):
        self.calls += 1
        await self.release.wait()
        return await StaticCritiqueGenerator(delay_seconds=0).generate(request)


class BrokenGenerator(BaseCritiqueGenerator):
    @property
    def name(self) -> str:
        return "broken"

    async def generate(self, request: AnalysisRequest):
        raise RuntimeError("renderer crashed")


class WrongTypeGenerator(BaseCritiqueGenerator):
    @property
    def name(self) -> str:
        return "wrong-type"

    async def generate(self, request: AnalysisRequest):
        return {"overallScore": 5}


class UpstreamTimeoutGenerator(BaseCritiqueGenerator):
    """Fails with its own TimeoutError, e.g. from a slow upstream service."""

    @property
    def name(self) -> str:
        return "upstream-timeout"

    async def generate(self, request: AnalysisRequest):
        raise TimeoutError("upstream renderer timed out")


class TestPrepareRequest:
    def test_valid_url(self):
        request = prepare_request(FIGMA_FILE_URL)
        assert request.raw_url == FIGMA_FILE_URL
        assert request.file_id == "ABC123"

    @pytest.mark.parametrize("url", ["", "   ", "\n\t", None])
    def test_empty_input(self, url):
        with pytest.raises(EmptyInputError):
            prepare_request(url)

    def test_invalid_url(self):
        with pytest.raises(InvalidUrlError):
            prepare_request("https://example.com/file/ABC123")

    def test_design_route_has_no_file_id(self):
        request = prepare_request("figma.com/design/xyz")
        assert request.file_id is None

    def test_original_casing_is_kept(self):
        request = prepare_request("HTTPS://FIGMA.COM/file/AbC123")
        assert request.raw_url == "HTTPS://FIGMA.COM/file/AbC123"
        assert request.file_id == "AbC123"


class TestAnalysisSession:
    @pytest.mark.asyncio
    async def test_starts_idle(self):
        session = AnalysisSession()

        assert session.status == AnalysisStatus.IDLE
        assert session.report is None
        assert session.notification is None

    @pytest.mark.asyncio
    async def test_successful_submission(self):
        session = AnalysisSession()

        report = await session.submit(FIGMA_FILE_URL)

        assert session.status == AnalysisStatus.COMPLETE
        assert session.report is report
        assert session.notification.tag == NotificationTag.ANALYSIS_COMPLETE
        assert session.notification.is_error is False
        assert report.preview_reference == "https://www.figma.com/file/ABC123"

    @pytest.mark.asyncio
    async def test_empty_input_is_rejected(self):
        session = AnalysisSession()

        with pytest.raises(EmptyInputError):
            await session.submit("   ")

        assert session.status == AnalysisStatus.IDLE
        assert session.report is None
        assert session.notification.tag == NotificationTag.MISSING_INPUT

    @pytest.mark.asyncio
    async def test_rejection_keeps_previous_report(self):
        session = AnalysisSession()
        report = await session.submit(FIGMA_FILE_URL)

        with pytest.raises(InvalidUrlError):
            await session.submit("https://example.com/file/ABC123")

        assert session.report is report
        assert session.status == AnalysisStatus.IDLE
        assert session.notification.tag == NotificationTag.INVALID_URL

    @pytest.mark.asyncio
    async def test_resubmission_after_complete(self):
        session = AnalysisSession()
        await session.submit(FIGMA_FILE_URL)

        report = await session.submit("figma.com/design/xyz")

        assert session.report is report
        assert report.preview_reference == "figma.com/design/xyz"

    @pytest.mark.asyncio
    async def test_single_flight(self):
        generator = GatedGenerator()
        session = AnalysisSession(generator=generator)

        first = asyncio.create_task(session.submit(FIGMA_FILE_URL))
        await asyncio.sleep(0)
        assert session.status == AnalysisStatus.ANALYZING
        assert session.report is None

        with pytest.raises(AnalysisInProgressError):
            await session.submit(FIGMA_FILE_URL)

        generator.release.set()
        report = await first

        assert generator.calls == 1
        assert session.report is report
        assert session.status == AnalysisStatus.COMPLETE

    @pytest.mark.asyncio
    async def test_timeout(self):
        session = AnalysisSession(generator=GatedGenerator(), timeout_seconds=0.01)

        with pytest.raises(AnalysisTimeoutError):
            await session.submit(FIGMA_FILE_URL)

        assert session.report is None
        assert session.status == AnalysisStatus.IDLE
        assert session.notification.tag == NotificationTag.ANALYSIS_TIMED_OUT

    @pytest.mark.asyncio
    async def test_timeout_is_not_a_validation_error(self):
        session = AnalysisSession(generator=GatedGenerator(), timeout_seconds=0.01)

        with pytest.raises(AnalysisTimeoutError) as exc_info:
            await session.submit(FIGMA_FILE_URL)

        assert not isinstance(exc_info.value, (EmptyInputError, InvalidUrlError))
        assert exc_info.value.status_code == 504

    @pytest.mark.asyncio
    async def test_cancel(self):
        session = AnalysisSession(generator=GatedGenerator())

        pending = asyncio.create_task(session.submit(FIGMA_FILE_URL))
        await asyncio.sleep(0)

        assert session.cancel() is True
        with pytest.raises(AnalysisCancelledError):
            await pending

        assert session.report is None
        assert session.status == AnalysisStatus.IDLE
        assert session.notification.tag == NotificationTag.ANALYSIS_CANCELLED

    @pytest.mark.asyncio
    async def test_cancel_keeps_previous_report(self):
        generator = GatedGenerator()
        session = AnalysisSession(generator=generator)
        generator.release.set()
        report = await session.submit(FIGMA_FILE_URL)

        generator.release.clear()
        pending = asyncio.create_task(session.submit(FIGMA_FILE_URL))
        await asyncio.sleep(0)
        session.cancel()
        with pytest.raises(AnalysisCancelledError):
            await pending

        assert session.report is report

    @pytest.mark.asyncio
    async def test_cancel_when_idle(self):
        assert AnalysisSession().cancel() is False

    @pytest.mark.asyncio
    async def test_generator_failure(self):
        session = AnalysisSession(generator=BrokenGenerator())

        with pytest.raises(GenerationFailureError, match="renderer crashed"):
            await session.submit(FIGMA_FILE_URL)

        assert session.report is None
        assert session.status == AnalysisStatus.IDLE
        assert session.notification.tag == NotificationTag.GENERATION_FAILED

    @pytest.mark.asyncio
    async def test_generator_returning_wrong_type(self):
        session = AnalysisSession(generator=WrongTypeGenerator())

        with pytest.raises(GenerationFailureError, match="dict"):
            await session.submit(FIGMA_FILE_URL)

        assert session.report is None

    @pytest.mark.asyncio
    async def test_zero_timeout_is_enforced(self):
        session = AnalysisSession(generator=GatedGenerator(), timeout_seconds=0)

        with pytest.raises(AnalysisTimeoutError):
            await session.submit(FIGMA_FILE_URL)

        assert session.report is None

    @pytest.mark.asyncio
    async def test_timeout_defaults_to_settings(self, monkeypatch):
        monkeypatch.setattr(settings, "analysis_timeout_seconds", 0.01)

        session = AnalysisSession(generator=GatedGenerator())

        assert session.timeout_seconds == 0.01
        with pytest.raises(AnalysisTimeoutError):
            await session.submit(FIGMA_FILE_URL)

    @pytest.mark.asyncio
    async def test_explicit_none_disables_configured_timeout(self, monkeypatch):
        monkeypatch.setattr(settings, "analysis_timeout_seconds", 0.01)
        generator = GatedGenerator()
        session = AnalysisSession(generator=generator, timeout_seconds=None)

        pending = asyncio.create_task(session.submit(FIGMA_FILE_URL))
        await asyncio.sleep(0.05)
        assert session.status == AnalysisStatus.ANALYZING

        generator.release.set()
        report = await pending

        assert session.report is report

    @pytest.mark.asyncio
    @pytest.mark.parametrize("timeout_seconds", [None, 5])
    async def test_generator_timeout_error_is_a_generation_failure(self, timeout_seconds):
        session = AnalysisSession(
            generator=UpstreamTimeoutGenerator(), timeout_seconds=timeout_seconds
        )

        with pytest.raises(GenerationFailureError, match="upstream renderer timed out"):
            await session.submit(FIGMA_FILE_URL)

        assert session.status == AnalysisStatus.IDLE
        assert session.notification.tag == NotificationTag.GENERATION_FAILED


class TestRunAnalysis:
    @pytest.mark.asyncio
    async def test_returns_report(self):
        report = await run_analysis(FIGMA_FILE_URL)

        assert len(report.category_scores) == 6
        assert len(report.insights) == 3
        assert all(report.insights.values())

    @pytest.mark.asyncio
    async def test_rejects_invalid(self):
        with pytest.raises(InvalidUrlError):
            await run_analysis("https://example.com/file/ABC123")


class TestSessionRegistry:
    def test_create_and_get(self):
        registry = SessionRegistry(max_sessions=5)
        session = registry.create()

        assert registry.get(session.id) is session
        assert len(registry) == 1

    def test_get_unknown(self):
        registry = SessionRegistry(max_sessions=5)
        session = AnalysisSession()

        with pytest.raises(SessionNotFoundError):
            registry.get(session.id)

    def test_limit(self):
        registry = SessionRegistry(max_sessions=1)
        registry.create()

        with pytest.raises(SessionLimitError):
            registry.create()

    def test_remove(self):
        registry = SessionRegistry(max_sessions=5)
        session = registry.create()

        registry.remove(session.id)

        assert len(registry) == 0
        with pytest.raises(SessionNotFoundError):
            registry.get(session.id)

    def test_generator_factory(self):
        registry = SessionRegistry(max_sessions=5, generator_factory=BrokenGenerator)

        assert isinstance(registry.create().generator, BrokenGenerator)

    def test_expired_session_frees_a_slot(self):
        registry = SessionRegistry(max_sessions=1, ttl_seconds=60)
        old = registry.create()
        old.updated_at -= timedelta(seconds=120)

        new = registry.create()

        assert len(registry) == 1
        assert registry.get(new.id) is new
        with pytest.raises(SessionNotFoundError):
            registry.get(old.id)

    def test_recent_session_is_kept(self):
        registry = SessionRegistry(max_sessions=1, ttl_seconds=60)
        registry.create()

        with pytest.raises(SessionLimitError):
            registry.create()

    def test_analyzing_session_is_never_evicted(self):
        registry = SessionRegistry(max_sessions=5, ttl_seconds=60)
        session = registry.create()
        session.status = AnalysisStatus.ANALYZING
        session.updated_at -= timedelta(seconds=120)

        assert registry.evict_expired() == 0
        assert registry.get(session.id) is session

    def test_evict_expired_counts_complete_and_idle(self):
        registry = SessionRegistry(max_sessions=5, ttl_seconds=60)
        idle = registry.create()
        complete = registry.create()
        complete.status = AnalysisStatus.COMPLETE
        fresh = registry.create()

        later = datetime.now(timezone.utc) + timedelta(seconds=120)
        fresh.updated_at = later

        assert registry.evict_expired(now=later) == 2
        assert len(registry) == 1
        assert registry.get(fresh.id) is fresh
        for session in (idle, complete):
            with pytest.raises(SessionNotFoundError):
                registry.get(session.id)
