"""
Status taxonomies for construction documents.

Each document type has a closed set of statuses and a display table giving
every status a short label and a badge variant. Lookups never raise:
statuses that are not in the taxonomy (stale caches, half-migrated rows,
manual edits) get a neutral fallback instead.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Type, Union


class DocumentType(Enum):
    """Kinds of tracked project documents"""
    RFI = "rfi"
    CHANGE_ORDER = "change_order"
    SUBMITTAL = "submittal"
    SUBMITTAL_STAGE = "submittal_stage"
    DAILY_REPORT = "daily_report"


class RFIStatus(str, Enum):
    """Status of a Request for Information"""
    DRAFT = "draft"
    SUBMITTED = "submitted"
    UNDER_REVIEW = "under_review"
    ANSWERED = "answered"
    CLOSED = "closed"
    CANCELLED = "cancelled"


class ChangeOrderStatus(str, Enum):
    """Status of a change order"""
    CONTEMPLATED = "contemplated"
    POTENTIAL = "potential"    # PCO
    PROPOSED = "proposed"      # COR
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"
    INVOICED = "invoiced"


class SubmittalStatus(str, Enum):
    """Status of a submittal"""
    DRAFT = "draft"
    SUBMITTED = "submitted"
    GC_REVIEW = "gc_review"
    AE_REVIEW = "ae_review"
    OWNER_REVIEW = "owner_review"
    APPROVED = "approved"
    APPROVED_AS_NOTED = "approved_as_noted"
    REVISE_RESUBMIT = "revise_resubmit"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


class SubmittalReviewStage(str, Enum):
    """Which party currently holds a submittal for review"""
    DRAFT = "draft"
    GC_REVIEW = "gc_review"
    AE_REVIEW = "ae_review"
    OWNER_REVIEW = "owner_review"
    COMPLETE = "complete"


class DailyReportStatus(str, Enum):
    """Status of a daily report"""
    DRAFT = "draft"
    SUBMITTED = "submitted"
    APPROVED = "approved"
    ARCHIVED = "archived"


class BadgeVariant(str, Enum):
    """Visual emphasis category for a status badge"""
    DEFAULT = "default"
    SECONDARY = "secondary"
    DESTRUCTIVE = "destructive"
    OUTLINE = "outline"
    SUCCESS = "success"


@dataclass(frozen=True)
class StatusDisplay:
    label: str
    variant: BadgeVariant = BadgeVariant.DEFAULT
    overdue: bool = False


UNKNOWN_LABEL = "Unknown"

RFI_STATUS_DISPLAY: Dict[RFIStatus, StatusDisplay] = {
    RFIStatus.DRAFT: StatusDisplay("Draft", BadgeVariant.SECONDARY),
    RFIStatus.SUBMITTED: StatusDisplay("Submitted"),
    RFIStatus.UNDER_REVIEW: StatusDisplay("Under Review"),
    RFIStatus.ANSWERED: StatusDisplay("Answered"),
    RFIStatus.CLOSED: StatusDisplay("Closed", BadgeVariant.OUTLINE),
    RFIStatus.CANCELLED: StatusDisplay("Cancelled", BadgeVariant.DESTRUCTIVE),
}

CHANGE_ORDER_STATUS_DISPLAY: Dict[ChangeOrderStatus, StatusDisplay] = {
    ChangeOrderStatus.CONTEMPLATED: StatusDisplay("Contemplated", BadgeVariant.SECONDARY),
    ChangeOrderStatus.POTENTIAL: StatusDisplay("PCO"),
    ChangeOrderStatus.PROPOSED: StatusDisplay("COR"),
    ChangeOrderStatus.APPROVED: StatusDisplay("Approved"),
    ChangeOrderStatus.REJECTED: StatusDisplay("Rejected", BadgeVariant.DESTRUCTIVE),
    ChangeOrderStatus.CANCELLED: StatusDisplay("Cancelled", BadgeVariant.DESTRUCTIVE),
    ChangeOrderStatus.INVOICED: StatusDisplay("Invoiced", BadgeVariant.OUTLINE),
}

SUBMITTAL_STATUS_DISPLAY: Dict[SubmittalStatus, StatusDisplay] = {
    SubmittalStatus.DRAFT: StatusDisplay("Draft", BadgeVariant.SECONDARY),
    SubmittalStatus.SUBMITTED: StatusDisplay("Submitted"),
    SubmittalStatus.GC_REVIEW: StatusDisplay("GC Review"),
    SubmittalStatus.AE_REVIEW: StatusDisplay("A/E Review"),
    SubmittalStatus.OWNER_REVIEW: StatusDisplay("Owner Review"),
    SubmittalStatus.APPROVED: StatusDisplay("Approved"),
    SubmittalStatus.APPROVED_AS_NOTED: StatusDisplay("Approved as Noted"),
    SubmittalStatus.REVISE_RESUBMIT: StatusDisplay("Revise & Resubmit", BadgeVariant.OUTLINE),
    SubmittalStatus.REJECTED: StatusDisplay("Rejected", BadgeVariant.DESTRUCTIVE),
    SubmittalStatus.CANCELLED: StatusDisplay("Cancelled", BadgeVariant.SECONDARY),
}

SUBMITTAL_STAGE_DISPLAY: Dict[SubmittalReviewStage, StatusDisplay] = {
    SubmittalReviewStage.DRAFT: StatusDisplay("Draft", BadgeVariant.SECONDARY),
    SubmittalReviewStage.GC_REVIEW: StatusDisplay("With GC"),
    SubmittalReviewStage.AE_REVIEW: StatusDisplay("With A/E"),
    SubmittalReviewStage.OWNER_REVIEW: StatusDisplay("With Owner"),
    SubmittalReviewStage.COMPLETE: StatusDisplay("Complete", BadgeVariant.OUTLINE),
}

DAILY_REPORT_STATUS_DISPLAY: Dict[DailyReportStatus, StatusDisplay] = {
    DailyReportStatus.DRAFT: StatusDisplay("Draft", BadgeVariant.SECONDARY),
    DailyReportStatus.SUBMITTED: StatusDisplay("Submitted"),
    DailyReportStatus.APPROVED: StatusDisplay("Approved", BadgeVariant.SUCCESS),
    DailyReportStatus.ARCHIVED: StatusDisplay("Archived", BadgeVariant.OUTLINE),
}

STATUS_ENUMS: Dict[DocumentType, Type[Enum]] = {
    DocumentType.RFI: RFIStatus,
    DocumentType.CHANGE_ORDER: ChangeOrderStatus,
    DocumentType.SUBMITTAL: SubmittalStatus,
    DocumentType.SUBMITTAL_STAGE: SubmittalReviewStage,
    DocumentType.DAILY_REPORT: DailyReportStatus,
}

STATUS_DISPLAY: Dict[DocumentType, Dict] = {
    DocumentType.RFI: RFI_STATUS_DISPLAY,
    DocumentType.CHANGE_ORDER: CHANGE_ORDER_STATUS_DISPLAY,
    DocumentType.SUBMITTAL: SUBMITTAL_STATUS_DISPLAY,
    DocumentType.SUBMITTAL_STAGE: SUBMITTAL_STAGE_DISPLAY,
    DocumentType.DAILY_REPORT: DAILY_REPORT_STATUS_DISPLAY,
}

# RFI statuses whose badge turns destructive once the response is late
_OVERDUE_BADGE_STATUSES = frozenset([RFIStatus.SUBMITTED, RFIStatus.UNDER_REVIEW])


def _check_tables_complete() -> None:
    """Every status of every document type must have a display entry"""
    for document_type in DocumentType:
        enum_cls = STATUS_ENUMS[document_type]
        missing = [member.value for member in enum_cls if member not in STATUS_DISPLAY[document_type]]
        if missing:
            raise RuntimeError(f"No display entry for {document_type.value} statuses: {missing}")


_check_tables_complete()


def _document_type(value: Union[DocumentType, str]) -> Optional[DocumentType]:
    if isinstance(value, DocumentType):
        return value
    try:
        return DocumentType(value)
    except ValueError:
        return None


def parse_status(document_type: Union[DocumentType, str], value: Union[Enum, str, None]) -> Optional[Enum]:
    """Return the taxonomy member for `value`, or None if it is not one"""
    doc_type = _document_type(document_type)
    if doc_type is None or value is None:
        return None

    enum_cls = STATUS_ENUMS[doc_type]
    if isinstance(value, enum_cls):
        return value
    raw = value.value if isinstance(value, Enum) else value
    try:
        return enum_cls(raw)
    except ValueError:
        return None


def _fallback_label(status: Union[Enum, str, None]) -> str:
    raw = status.value if isinstance(status, Enum) else status
    if isinstance(raw, str) and raw.strip():
        return raw
    return UNKNOWN_LABEL


def display_for(
    document_type: Union[DocumentType, str],
    status: Union[Enum, str, None],
    is_overdue: bool = False,
) -> StatusDisplay:
    """
    Label and badge variant for a status; unknown statuses get a neutral badge.

    An overdue RFI that is still waiting on a response keeps its label but
    is shown with the destructive variant and flagged ``overdue``.
    """
    member = parse_status(document_type, status)
    if member is None:
        return StatusDisplay(_fallback_label(status), BadgeVariant.SECONDARY)
    display = STATUS_DISPLAY[_document_type(document_type)][member]
    if is_overdue and isinstance(member, RFIStatus) and member in _OVERDUE_BADGE_STATUSES:
        return StatusDisplay(display.label, BadgeVariant.DESTRUCTIVE, overdue=True)
    return display


def label_for(document_type: Union[DocumentType, str], status: Union[Enum, str, None]) -> str:
    """
    Short human-readable label for a status.

    Unrecognised statuses fall back to the raw status string, or
    ``"Unknown"`` when there is nothing to show.
    """
    return display_for(document_type, status).label
