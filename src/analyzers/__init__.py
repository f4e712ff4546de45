"""Critic analyzers package."""

from analyzers.base import (
    CATEGORY_KEYS,
    INSIGHT_KEYS,
    AnalysisRequest,
    BaseCritiqueGenerator,
    CritiqueReport,
)
from analyzers.figma_url import (
    build_embed_url,
    build_preview_reference,
    extract_file_id,
    validate_figma_url,
)
from analyzers.static import StaticCritiqueGenerator

__all__ = [
    "CATEGORY_KEYS",
    "INSIGHT_KEYS",
    "AnalysisRequest",
    "BaseCritiqueGenerator",
    "CritiqueReport",
    "build_embed_url",
    "build_preview_reference",
    "extract_file_id",
    "validate_figma_url",
    "StaticCritiqueGenerator",
]
