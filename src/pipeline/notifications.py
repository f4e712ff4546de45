"""User-facing notifications emitted by the analysis pipeline."""

import enum
from dataclasses import dataclass


class NotificationTag(str, enum.Enum):
    """Outcome signalled to the presentation layer."""

    MISSING_INPUT = "missing_input"
    INVALID_URL = "invalid_url"
    ANALYSIS_COMPLETE = "analysis_complete"
    ANALYSIS_IN_PROGRESS = "analysis_in_progress"
    ANALYSIS_TIMED_OUT = "analysis_timed_out"
    ANALYSIS_CANCELLED = "analysis_cancelled"
    GENERATION_FAILED = "generation_failed"


@dataclass(frozen=True)
class Notification:
    """A tag plus the text shown to the user. How it is displayed is up to the client."""

    tag: NotificationTag
    title: str
    message: str
    is_error: bool = True

    def to_dict(self) -> dict:
        return {
            "tag": self.tag.value,
            "title": self.title,
            "message": self.message,
            "is_error": self.is_error,
        }


MISSING_INPUT = Notification(
    tag=NotificationTag.MISSING_INPUT,
    title="URL Required",
    message="Please enter a Figma file URL to analyze",
)

INVALID_URL = Notification(
    tag=NotificationTag.INVALID_URL,
    title="Invalid URL",
    message="Please enter a valid Figma file URL",
)

ANALYSIS_COMPLETE = Notification(
    tag=NotificationTag.ANALYSIS_COMPLETE,
    title="Analysis Complete",
    message="Your Figma file has been analyzed with brutal honesty!",
    is_error=False,
)

ANALYSIS_IN_PROGRESS = Notification(
    tag=NotificationTag.ANALYSIS_IN_PROGRESS,
    title="Analysis In Progress",
    message="Please wait for the current analysis to finish",
)

ANALYSIS_TIMED_OUT = Notification(
    tag=NotificationTag.ANALYSIS_TIMED_OUT,
    title="Analysis Timed Out",
    message="The analysis took too long to complete. Please try again",
)

ANALYSIS_CANCELLED = Notification(
    tag=NotificationTag.ANALYSIS_CANCELLED,
    title="Analysis Cancelled",
    message="The analysis was cancelled before it finished",
)

GENERATION_FAILED = Notification(
    tag=NotificationTag.GENERATION_FAILED,
    title="Analysis Failed",
    message="Something went wrong while analyzing your Figma file",
)
