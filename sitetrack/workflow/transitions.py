"""
RFI lifecycle rules.

draft -> submitted -> under_review -> answered -> closed, with cancelled
reachable from every non-terminal status. closed and cancelled are absorbing.
"""

from dataclasses import replace
from datetime import datetime
from typing import Dict, FrozenSet, Optional, Union

from ..models.rfi import RFI
from ..models.status import RFIStatus
from ..utils.logger import get_logger
from ..utils.timestamps import ensure_utc, utc_now

logger = get_logger(__name__)

TERMINAL_STATUSES: FrozenSet[RFIStatus] = frozenset({RFIStatus.CLOSED, RFIStatus.CANCELLED})
OPEN_STATUSES: FrozenSet[RFIStatus] = frozenset({
    RFIStatus.DRAFT, RFIStatus.SUBMITTED, RFIStatus.UNDER_REVIEW,
})
AWAITING_RESPONSE: FrozenSet[RFIStatus] = frozenset({RFIStatus.SUBMITTED, RFIStatus.UNDER_REVIEW})

ALLOWED_TRANSITIONS: Dict[RFIStatus, FrozenSet[RFIStatus]] = {
    RFIStatus.DRAFT: frozenset({RFIStatus.SUBMITTED, RFIStatus.CANCELLED}),
    RFIStatus.SUBMITTED: frozenset({RFIStatus.UNDER_REVIEW, RFIStatus.ANSWERED, RFIStatus.CANCELLED}),
    RFIStatus.UNDER_REVIEW: frozenset({RFIStatus.ANSWERED, RFIStatus.CANCELLED}),
    RFIStatus.ANSWERED: frozenset({RFIStatus.CLOSED, RFIStatus.CANCELLED}),
    RFIStatus.CLOSED: frozenset(),
    RFIStatus.CANCELLED: frozenset(),
}


class WorkflowError(Exception):
    """Base class for rejected workflow operations"""

    def __init__(self, message: str, current: Optional[str] = None, target: Optional[str] = None):
        super().__init__(message)
        self.current = current
        self.target = target


class InvalidTransitionError(WorkflowError):
    """The requested status change is not allowed from the current status"""


class MissingAssigneeError(WorkflowError):
    """An RFI cannot be submitted without a user or organisation to answer it"""


def _as_status(value: Union[RFIStatus, str, None]) -> Optional[RFIStatus]:
    try:
        return RFIStatus(value)
    except (TypeError, ValueError):
        return None


def allowed_transitions(current: Union[RFIStatus, str, None]) -> FrozenSet[RFIStatus]:
    status = _as_status(current)
    if status is None:
        return frozenset()
    return ALLOWED_TRANSITIONS[status]


def can_transition(current: Union[RFIStatus, str, None], target: Union[RFIStatus, str, None]) -> bool:
    """Whether moving from `current` to `target` is allowed (never raises)"""
    target_status = _as_status(target)
    return target_status is not None and target_status in allowed_transitions(current)


def apply_transition(
    rfi: RFI,
    target: Union[RFIStatus, str],
    *,
    at: Optional[datetime] = None,
    assigned_to_id: Optional[str] = None,
    assigned_to_org: Optional[str] = None,
    response_due_date: Optional[datetime] = None,
) -> RFI:
    """
    Return a copy of `rfi` moved to `target`, with workflow timestamps set.

    Submitting records ``submitted_at`` and takes the assignee and due date;
    answering records ``answered_at``; closing records ``closed_at`` and
    clears the assignee. The input RFI is not modified.

    Raises:
        InvalidTransitionError: the move is not allowed
        MissingAssigneeError: submitting without any assignee
    """
    if not can_transition(rfi.status, target):
        raise InvalidTransitionError(
            f"Cannot move RFI from '{rfi.status}' to '{getattr(target, 'value', target)}'",
            current=rfi.status,
            target=getattr(target, "value", target),
        )

    target_status = RFIStatus(target)
    at = utc_now() if at is None else ensure_utc(at)
    changes = {"status": target_status.value}

    if target_status is RFIStatus.SUBMITTED:
        user = assigned_to_id or rfi.assigned_to_id
        org = assigned_to_org or rfi.assigned_to_org
        if not user and not org:
            raise MissingAssigneeError(
                "Must assign to either a user or organization",
                current=rfi.status,
                target=target_status.value,
            )
        changes.update(
            submitted_at=at,
            assigned_to_id=user,
            assigned_to_org=org,
        )
        if response_due_date is not None:
            changes["response_due_date"] = ensure_utc(response_due_date)
    elif target_status is RFIStatus.ANSWERED:
        changes["answered_at"] = at
    elif target_status is RFIStatus.CLOSED:
        changes.update(closed_at=at, assigned_to_id=None, assigned_to_org=None)

    logger.info(
        f"RFI {rfi.id or '<unsaved>'} moved {rfi.status} -> {target_status.value}",
        extra={"rfi_id": rfi.id, "from_status": rfi.status, "to_status": target_status.value},
    )

    return replace(rfi, **changes)
