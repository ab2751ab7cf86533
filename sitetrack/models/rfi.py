"""
RFI data model consumed by the workflow engine.
"""

from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any, Dict, Optional

from .status import RFIStatus
from ..utils.timestamps import ensure_utc, format_instant, parse_instant

TIMESTAMP_FIELDS = ("submitted_at", "response_due_date", "answered_at", "closed_at")


@dataclass(frozen=True)
class RFI:
    """Request for Information as read from the project database"""

    status: str
    created_by: Optional[str] = None
    assigned_to_id: Optional[str] = None
    assigned_to_org: Optional[str] = None

    # Workflow timestamps (aware UTC)
    submitted_at: Optional[datetime] = None
    response_due_date: Optional[datetime] = None
    answered_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None

    # Display fields for dashboards and digests
    id: Optional[str] = None
    number: Optional[int] = None
    title: str = ""
    priority: str = "medium"
    project_id: Optional[str] = None
    organization_id: Optional[str] = None
    assignee_email: Optional[str] = None
    assignee_name: Optional[str] = None

    def __post_init__(self):
        # Naive timestamps (e.g. from ORM rows) are taken as UTC
        for name in TIMESTAMP_FIELDS:
            value = getattr(self, name)
            if isinstance(value, datetime):
                object.__setattr__(self, name, ensure_utc(value))

    @property
    def rfi_status(self) -> Optional[RFIStatus]:
        """The status as a taxonomy member, or None if unrecognised"""
        try:
            return RFIStatus(self.status)
        except ValueError:
            return None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RFI":
        """
        Create an RFI from a database record.

        Timestamps are parsed here, once. Unknown keys are ignored so
        callers can pass wider rows (``select('*')``) straight through.
        Nested ``assigned_to`` and ``projects`` objects from joined
        selects are flattened into the display fields.
        """
        known = {f.name for f in fields(cls)}
        values = {key: value for key, value in data.items() if key in known}

        status = values.get("status")
        values["status"] = status.value if isinstance(status, RFIStatus) else (status or "")

        for name in TIMESTAMP_FIELDS:
            values[name] = parse_instant(data.get(name), field_name=name)

        assignee = data.get("assigned_to")
        if isinstance(assignee, dict):
            values.setdefault("assignee_email", assignee.get("email"))
            values.setdefault("assignee_name", assignee.get("full_name"))

        project = data.get("projects")
        if isinstance(project, dict):
            values.setdefault("organization_id", project.get("organization_id"))
            values.setdefault("project_id", project.get("id"))

        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a record with ISO-8601 timestamps"""
        record = {f.name: getattr(self, f.name) for f in fields(self)}
        for name in TIMESTAMP_FIELDS:
            record[name] = format_instant(record[name])
        return record


@dataclass(frozen=True)
class BallInCourt:
    """Who owns the next action on an RFI"""
    user_id: Optional[str]
    org_id: Optional[str]
    suggested_action: str
    is_blocked: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "userId": self.user_id,
            "orgId": self.org_id,
            "suggestedAction": self.suggested_action,
            "isBlocked": self.is_blocked,
        }


@dataclass(frozen=True)
class SLACompliance:
    """Share of measurable RFIs answered on or before their due date"""
    total: int = 0
    compliant: int = 0
    percentage: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {"total": self.total, "compliant": self.compliant, "percentage": self.percentage}
