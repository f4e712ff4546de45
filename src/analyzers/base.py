"""Report model and critique generator interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

CATEGORY_KEYS = (
    "visualHierarchy",
    "colorScheme",
    "typography",
    "spacing",
    "components",
    "accessibility",
)

INSIGHT_KEYS = ("designTrends", "userExperience", "brandConsistency")

MIN_SCORE = 0.0
MAX_SCORE = 10.0


@dataclass(frozen=True)
class AnalysisRequest:
    """A single validated submission."""

    raw_url: str
    file_id: str | None = None


@dataclass(frozen=True)
class CritiqueReport:
    """
    Structured critique for one analysis request.

    Immutable once built: lists become tuples and mappings become
    read-only views. The category and insight key sets are fixed, and
    every score must lie in [0, 10].
    """

    file_name: str
    preview_reference: str
    overall_score: float
    category_scores: Mapping[str, float]
    strengths: tuple[str, ...] = field(default_factory=tuple)
    issues: tuple[str, ...] = field(default_factory=tuple)
    insights: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        _check_keys("category_scores", self.category_scores, CATEGORY_KEYS)
        _check_keys("insights", self.insights, INSIGHT_KEYS)

        _check_score("overall_score", self.overall_score)
        for key, score in self.category_scores.items():
            _check_score(key, score)

        # Freeze the containers (frozen dataclass, so bypass __setattr__)
        scores = {key: float(self.category_scores[key]) for key in CATEGORY_KEYS}
        insights = {key: self.insights[key] for key in INSIGHT_KEYS}
        object.__setattr__(self, "overall_score", float(self.overall_score))
        object.__setattr__(self, "category_scores", MappingProxyType(scores))
        object.__setattr__(self, "insights", MappingProxyType(insights))
        object.__setattr__(self, "strengths", tuple(self.strengths))
        object.__setattr__(self, "issues", tuple(self.issues))

    def to_dict(self) -> dict:
        """Serialize to the camelCase shape consumed by the frontend."""
        return {
            "fileName": self.file_name,
            "previewReference": self.preview_reference,
            "overallScore": self.overall_score,
            "categoryScores": dict(self.category_scores),
            "strengths": list(self.strengths),
            "issues": list(self.issues),
            "insights": dict(self.insights),
        }


def _check_keys(name: str, mapping: Mapping, expected: tuple[str, ...]) -> None:
    if set(mapping) != set(expected):
        missing = sorted(set(expected) - set(mapping))
        extra = sorted(set(mapping) - set(expected))
        raise ValueError(f"{name} keys mismatch (missing={missing}, extra={extra})")


def _check_score(name: str, score: float) -> None:
    if not MIN_SCORE <= score <= MAX_SCORE:
        raise ValueError(f"{name} score {score} outside [{MIN_SCORE}, {MAX_SCORE}]")


class BaseCritiqueGenerator(ABC):
    """Abstract base class for critique generators."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return generator name."""
        pass

    @abstractmethod
    async def generate(self, request: AnalysisRequest) -> CritiqueReport:
        """
        Produce a critique for a validated request.

        Args:
            request: The validated submission

        Returns:
            A fully populated CritiqueReport
        """
        pass
