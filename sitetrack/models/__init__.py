"""
Data models for the SiteTrack workflow engine.
Defines status taxonomies and the RFI records the engine consumes.
"""

from .status import (
    BadgeVariant,
    ChangeOrderStatus,
    DailyReportStatus,
    DocumentType,
    RFIStatus,
    StatusDisplay,
    SubmittalReviewStage,
    SubmittalStatus,
    display_for,
    label_for,
    parse_status,
)
from .rfi import RFI, BallInCourt, SLACompliance

__all__ = [
    "BadgeVariant",
    "ChangeOrderStatus",
    "DailyReportStatus",
    "DocumentType",
    "RFIStatus",
    "StatusDisplay",
    "SubmittalReviewStage",
    "SubmittalStatus",
    "display_for",
    "label_for",
    "parse_status",
    "RFI",
    "BallInCourt",
    "SLACompliance",
]
