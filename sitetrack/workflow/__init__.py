"""
Workflow-status engine: ball-in-court resolution, SLA calculations,
RFI lifecycle rules and dashboard rollups.
"""

from .ball_in_court import ColorToken, is_held_by, resolve_ball_in_court, status_color
from .sla import (
    average_response_time_hours,
    days_overdue,
    days_until_due,
    is_overdue,
    overdue_rfis,
    response_time_hours,
    sla_compliance,
)
from .transitions import (
    InvalidTransitionError,
    MissingAssigneeError,
    WorkflowError,
    allowed_transitions,
    apply_transition,
    can_transition,
)
from .digest import DigestEntry, OverdueItem, RFISummary, build_overdue_digest, summarize_rfis

__all__ = [
    "ColorToken",
    "is_held_by",
    "resolve_ball_in_court",
    "status_color",
    "average_response_time_hours",
    "days_overdue",
    "days_until_due",
    "is_overdue",
    "overdue_rfis",
    "response_time_hours",
    "sla_compliance",
    "InvalidTransitionError",
    "MissingAssigneeError",
    "WorkflowError",
    "allowed_transitions",
    "apply_transition",
    "can_transition",
    "DigestEntry",
    "OverdueItem",
    "RFISummary",
    "build_overdue_digest",
    "summarize_rfis",
]
