"""
Project-level RFI rollups: dashboard summary counts and the daily overdue
digest grouped by assignee.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from .sla import average_response_time_hours, is_overdue, sla_compliance
from .transitions import AWAITING_RESPONSE, OPEN_STATUSES
from ..core.config import config
from ..models.rfi import RFI, SLACompliance
from ..models.status import RFIStatus
from ..utils.logger import get_logger
from ..utils.timestamps import ensure_utc, format_instant, utc_now

logger = get_logger(__name__)

_OPEN_VALUES = frozenset(status.value for status in OPEN_STATUSES)
_AWAITING_VALUES = frozenset(status.value for status in AWAITING_RESPONSE)


@dataclass
class RFISummary:
    """RFI counts shown on the project dashboard"""
    total: int = 0
    open: int = 0
    closed: int = 0
    overdue: int = 0
    compliance: SLACompliance = field(default_factory=SLACompliance)
    average_response_time_hours: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "open": self.open,
            "closed": self.closed,
            "overdue": self.overdue,
            "compliance": self.compliance.to_dict(),
            "average_response_time_hours": self.average_response_time_hours,
        }


@dataclass
class OverdueItem:
    rfi_id: Optional[str]
    number: Optional[int]
    title: str
    priority: str
    due_date: Optional[str]
    days_overdue: int
    view_url: Optional[str] = None


@dataclass
class DigestEntry:
    """All overdue RFIs waiting on one assignee"""
    assignee_id: str
    assignee_email: str
    assignee_name: str
    items: List[OverdueItem] = field(default_factory=list)


def summarize_rfis(rfis: Iterable[RFI], now: Optional[datetime] = None) -> RFISummary:
    """Dashboard summary for a set of RFIs, evaluated at a single instant"""
    now = utc_now() if now is None else ensure_utc(now)
    rfis = list(rfis)

    return RFISummary(
        total=len(rfis),
        open=sum(1 for rfi in rfis if rfi.status in _OPEN_VALUES),
        closed=sum(1 for rfi in rfis if rfi.status == RFIStatus.CLOSED.value),
        overdue=sum(1 for rfi in rfis if is_overdue(rfi, now=now)),
        compliance=sla_compliance(rfis),
        average_response_time_hours=average_response_time_hours(rfis),
    )


def build_view_url(rfi: RFI, app_url: Optional[str] = None) -> Optional[str]:
    """Link to the RFI detail page, if the record carries enough to build one"""
    if not (rfi.id and rfi.project_id and rfi.organization_id):
        return None
    base = (app_url or config.app.app_url).rstrip("/")
    return f"{base}/{rfi.organization_id}/projects/{rfi.project_id}/rfis/{rfi.id}"


def _digest_days_overdue(rfi: RFI, now: datetime) -> int:
    # Any part of a day past the due date counts as a whole day in the digest
    return math.ceil((now - rfi.response_due_date).total_seconds() / 86400)


def build_overdue_digest(
    rfis: Iterable[RFI],
    now: Optional[datetime] = None,
    app_url: Optional[str] = None,
) -> List[DigestEntry]:
    """
    Group RFIs that are past due and waiting on a person by that person.

    Only submitted/under-review RFIs with an assigned user and a due date
    are considered. Assignees are returned in order of first appearance;
    those without an email address are skipped. Days overdue are rounded
    up, so an RFI a few hours late reads as one day overdue.
    """
    now = utc_now() if now is None else ensure_utc(now)
    digest: Dict[str, DigestEntry] = {}
    skipped = set()

    for rfi in rfis:
        if rfi.status not in _AWAITING_VALUES or not rfi.assigned_to_id or rfi.response_due_date is None:
            continue
        if not is_overdue(rfi, now=now):
            continue

        assignee_id = rfi.assigned_to_id
        if assignee_id not in digest:
            if not rfi.assignee_email:
                if assignee_id not in skipped:
                    logger.warning(f"No email found for assignee {assignee_id}", extra={"assignee_id": assignee_id})
                    skipped.add(assignee_id)
                continue
            digest[assignee_id] = DigestEntry(
                assignee_id=assignee_id,
                assignee_email=rfi.assignee_email,
                assignee_name=rfi.assignee_name or rfi.assignee_email,
            )

        digest[assignee_id].items.append(OverdueItem(
            rfi_id=rfi.id,
            number=rfi.number,
            title=rfi.title,
            priority=rfi.priority,
            due_date=format_instant(rfi.response_due_date),
            days_overdue=_digest_days_overdue(rfi, now),
            view_url=build_view_url(rfi, app_url),
        ))

    entries = list(digest.values())
    logger.info(
        f"Overdue digest built for {len(entries)} assignee(s)",
        extra={"overdue_count": sum(len(entry.items) for entry in entries), "skipped_assignees": len(skipped)},
    )
    return entries
