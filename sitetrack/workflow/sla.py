"""
SLA (Service Level Agreement) calculations for RFIs.

Response times, overdue status and compliance metrics. Every function that
depends on the current time takes an optional ``now``; aggregate functions
read the clock once and reuse that instant for every RFI they look at.
"""

import math
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional

from ..models.rfi import RFI, SLACompliance
from ..models.status import RFIStatus
from ..utils.timestamps import ensure_utc, utc_now

SECONDS_PER_DAY = 24 * 60 * 60
SECONDS_PER_HOUR = 60 * 60

_CLOCK_STOPPED = (RFIStatus.CLOSED.value, RFIStatus.CANCELLED.value)


def _resolve_now(now: Optional[datetime]) -> datetime:
    return utc_now() if now is None else ensure_utc(now)


def _round_tenths(value: float) -> float:
    """Round half-up to one decimal place (0.05 -> 0.1)"""
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def is_overdue(rfi: RFI, now: Optional[datetime] = None) -> bool:
    """
    Check if an RFI is overdue.

    Closed and cancelled RFIs are never overdue; neither are drafts or RFIs
    without a due date. An answered RFI is overdue if the answer came after
    the due date, a pending one if ``now`` is past it.
    """
    if rfi.status in _CLOCK_STOPPED:
        return False

    if rfi.status == RFIStatus.DRAFT.value or rfi.response_due_date is None:
        return False

    if rfi.answered_at is not None:
        return rfi.answered_at > rfi.response_due_date

    return _resolve_now(now) > rfi.response_due_date


def days_overdue(rfi: RFI, now: Optional[datetime] = None) -> int:
    """Whole days overdue, rounded down; 0 when not overdue"""
    now = _resolve_now(now)
    if not is_overdue(rfi, now=now):
        return 0

    compare_at = rfi.answered_at if rfi.answered_at is not None else now
    elapsed = (compare_at - rfi.response_due_date).total_seconds()
    return max(0, math.floor(elapsed / SECONDS_PER_DAY))


def response_time_hours(rfi: RFI) -> Optional[float]:
    """Hours from submission to answer, to one decimal place"""
    if rfi.submitted_at is None or rfi.answered_at is None:
        return None

    elapsed = (rfi.answered_at - rfi.submitted_at).total_seconds()
    return _round_tenths(elapsed / SECONDS_PER_HOUR)


def days_until_due(rfi: RFI, now: Optional[datetime] = None) -> Optional[int]:
    """
    Days until the response is due, rounded up; negative once overdue.

    Rounds up where ``days_overdue`` rounds down, so the two are not
    mirror images of each other.
    """
    if rfi.response_due_date is None or rfi.status in _CLOCK_STOPPED:
        return None

    remaining = (rfi.response_due_date - _resolve_now(now)).total_seconds()
    return math.ceil(remaining / SECONDS_PER_DAY)


def sla_compliance(rfis: Iterable[RFI]) -> SLACompliance:
    """
    SLA compliance over the RFIs that can be scored.

    Only RFIs with both an answer and a due date count. An answer at the
    exact due instant is compliant.
    """
    measurable = [
        rfi for rfi in rfis
        if rfi.answered_at is not None and rfi.response_due_date is not None
    ]

    total = len(measurable)
    if total == 0:
        return SLACompliance(0, 0, 0)

    compliant = sum(1 for rfi in measurable if rfi.answered_at <= rfi.response_due_date)

    # round(100 * compliant / total), half-up, in integer arithmetic
    percentage = (200 * compliant + total) // (2 * total)

    return SLACompliance(total=total, compliant=compliant, percentage=percentage)


def average_response_time_hours(rfis: Iterable[RFI]) -> Optional[float]:
    """Mean response time in hours over RFIs that have one"""
    response_times: List[float] = [
        hours for hours in (response_time_hours(rfi) for rfi in rfis)
        if hours is not None
    ]

    if not response_times:
        return None

    return _round_tenths(sum(response_times) / len(response_times))


def overdue_rfis(rfis: Iterable[RFI], now: Optional[datetime] = None) -> List[RFI]:
    """Filter to the RFIs overdue at one shared instant"""
    now = _resolve_now(now)
    return [rfi for rfi in rfis if is_overdue(rfi, now=now)]
