"""Pydantic schemas for API request/response validation."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Request Schemas (what clients send to us)
# =============================================================================


class AnalysisCreateRequest(BaseModel):
    """Request body for submitting a Figma URL."""

    # Plain string: blank and non-Figma URLs are reported as notifications,
    # not as schema validation errors
    url: str = Field(
        default="",
        description="The Figma file, prototype or design URL to critique",
        examples=["https://www.figma.com/file/ABC123/My-Design"],
    )


# =============================================================================
# Response Schemas (what we send back to clients)
# =============================================================================


class NotificationResponse(BaseModel):
    """Outcome message for the presentation layer."""

    tag: str
    title: str
    message: str
    is_error: bool


class CategoryScoresResponse(BaseModel):
    """Sub-scores, each in [0, 10]."""

    model_config = ConfigDict(populate_by_name=True)

    visual_hierarchy: float = Field(alias="visualHierarchy", ge=0, le=10)
    color_scheme: float = Field(alias="colorScheme", ge=0, le=10)
    typography: float = Field(ge=0, le=10)
    spacing: float = Field(ge=0, le=10)
    components: float = Field(ge=0, le=10)
    accessibility: float = Field(ge=0, le=10)


class InsightsResponse(BaseModel):
    """Narrative insights."""

    model_config = ConfigDict(populate_by_name=True)

    design_trends: str = Field(alias="designTrends")
    user_experience: str = Field(alias="userExperience")
    brand_consistency: str = Field(alias="brandConsistency")


class ReportResponse(BaseModel):
    """Full critique report."""

    model_config = ConfigDict(populate_by_name=True)

    file_name: str = Field(alias="fileName")
    preview_reference: str = Field(alias="previewReference")
    overall_score: float = Field(alias="overallScore", ge=0, le=10)
    category_scores: CategoryScoresResponse = Field(alias="categoryScores")
    strengths: list[str]
    issues: list[str]
    insights: InsightsResponse


class AnalysisResponse(BaseModel):
    """Response for a completed analysis."""

    notification: NotificationResponse
    report: ReportResponse
    embed_url: str


class SessionCreatedResponse(BaseModel):
    """Response when a session is created."""

    id: uuid.UUID
    status: str


class SessionResponse(BaseModel):
    """Current state of a session, including its cached report."""

    id: uuid.UUID
    status: str
    created_at: datetime
    updated_at: datetime
    report: ReportResponse | None = None
    notification: NotificationResponse | None = None


class CancelResponse(BaseModel):
    """Response when an in-flight analysis is cancelled."""

    id: uuid.UUID
    cancelled: bool = True


class JobCreatedResponse(BaseModel):
    """Response when a critique job is queued."""

    id: str
    url: str
    status: str
    message: str = "Critique queued successfully"


class JobResponse(BaseModel):
    """Status of a queued critique job."""

    id: str
    status: str
    result: dict | None = None


# =============================================================================
# Health Check
# =============================================================================


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    status: str = "healthy"
    service: str = "critic"
    version: str = "0.1.0"
