"""Placeholder critique generator returning a canned report."""

import asyncio
import logging

from analyzers.base import AnalysisRequest, BaseCritiqueGenerator, CritiqueReport
from analyzers.figma_url import build_preview_reference
from config import settings

logger = logging.getLogger(__name__)


class StaticCritiqueGenerator(BaseCritiqueGenerator):
    """
    Stand-in for a real design analyzer.

    Waits for a simulated processing delay and returns the same critique
    for every request. Only the preview reference depends on the input.
    """

    FILE_NAME = "E-commerce Dashboard Redesign"

    OVERALL_SCORE = 6.2

    CATEGORY_SCORES = {
        "visualHierarchy": 4.5,
        "colorScheme": 7.8,
        "typography": 5.2,
        "spacing": 6.1,
        "components": 7.0,
        "accessibility": 3.8,
    }

    STRENGTHS = (
        "Color palette shows decent contrast ratios and maintains brand consistency",
        "Component library structure demonstrates systematic thinking",
        "Grid system implementation is mathematically sound",
        "Visual density management prevents overwhelming the user",
    )

    ISSUES = (
        "Visual hierarchy is fundamentally broken - users won't know where to look first. Primary actions are buried among secondary elements",
        "Typography scale lacks mathematical precision. Line heights are inconsistent and text hierarchy confuses rather than guides",
        "Accessibility is severely compromised - color contrast fails WCAG AA standards in multiple areas. Screen reader users will struggle",
        "Information architecture is cluttered and illogical. Related functions are scattered across different sections",
        "White space usage is amateur - cramped sections alternate with wasteful empty areas",
        "Interactive elements lack clear affordances. Users won't understand what's clickable",
        "Mobile responsiveness appears to be an afterthought rather than mobile-first design",
        "Loading states and error handling are completely absent from the design system",
    )

    INSIGHTS = {
        "designTrends": "Following outdated design patterns from 2019. Lacks modern micro-interactions and progressive disclosure techniques",
        "userExperience": "UX flow has critical gaps. Task completion rates will suffer due to unclear navigation paths and cognitive overload",
        "brandConsistency": "Brand application is superficial - colors and logos are present but brand personality is completely absent from interaction design",
    }

    def __init__(self, delay_seconds: float | None = None):
        if delay_seconds is None:
            delay_seconds = settings.analysis_delay_seconds
        self.delay_seconds = max(0.0, delay_seconds)

    @property
    def name(self) -> str:
        return "static"

    async def generate(self, request: AnalysisRequest) -> CritiqueReport:
        logger.info(f"Generating critique for {request.raw_url!r} (file_id={request.file_id})")

        await asyncio.sleep(self.delay_seconds)

        return CritiqueReport(
            file_name=self.FILE_NAME,
            preview_reference=build_preview_reference(request.raw_url, request.file_id),
            overall_score=self.OVERALL_SCORE,
            category_scores=self.CATEGORY_SCORES,
            strengths=self.STRENGTHS,
            issues=self.ISSUES,
            insights=self.INSIGHTS,
        )
