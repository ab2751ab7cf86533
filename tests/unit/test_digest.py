"""
Unit tests for dashboard summaries and the overdue digest.
"""

from datetime import timedelta
from unittest.mock import patch

from sitetrack.models.rfi import RFI, SLACompliance
from sitetrack.workflow import digest
from sitetrack.workflow.digest import build_overdue_digest, build_view_url, summarize_rfis


class TestSummarizeRfis:

    def test_counts(self, overdue_batch, now):
        summary = summarize_rfis(overdue_batch, now=now)

        assert summary.total == 6
        assert summary.open == 3
        assert summary.closed == 1
        assert summary.overdue == 1
        # d answered a day early, e answered a day late
        assert summary.compliance == SLACompliance(2, 1, 50)
        assert summary.average_response_time_hours == 48.0

    def test_empty(self, now):
        assert summarize_rfis([], now=now).to_dict() == {
            "total": 0,
            "open": 0,
            "closed": 0,
            "overdue": 0,
            "compliance": {"total": 0, "compliant": 0, "percentage": 0},
            "average_response_time_hours": None,
        }


class TestBuildOverdueDigest:

    def _overdue(self, now, **overrides):
        values = {
            "id": "rfi-1",
            "number": 1,
            "title": "Door hardware schedule",
            "status": "submitted",
            "priority": "high",
            "created_by": "u1",
            "assigned_to_id": "u2",
            "assignee_email": "pat@example.com",
            "assignee_name": "Pat Lee",
            "project_id": "proj-1",
            "organization_id": "org-1",
            "response_due_date": now - timedelta(days=3, hours=2),
        }
        values.update(overrides)
        return RFI(**values)

    def test_groups_by_assignee(self, now, test_config):
        rfis = [
            self._overdue(now),
            self._overdue(now, id="rfi-2", number=2, assigned_to_id="u3",
                          assignee_email="sam@example.com", assignee_name=None),
            self._overdue(now, id="rfi-3", number=3, status="under_review"),
        ]

        entries = build_overdue_digest(rfis, now=now)

        assert [entry.assignee_id for entry in entries] == ["u2", "u3"]
        assert [item.rfi_id for item in entries[0].items] == ["rfi-1", "rfi-3"]
        assert entries[1].assignee_name == "sam@example.com"

        item = entries[0].items[0]
        assert item.days_overdue == 4
        assert item.due_date.endswith("Z")
        assert item.view_url == "https://app.example.com/org-1/projects/proj-1/rfis/rfi-1"

    def test_excludes_rfis_not_waiting_on_a_person(self, now):
        rfis = [
            self._overdue(now, status="answered", answered_at=now),
            self._overdue(now, status="draft"),
            self._overdue(now, assigned_to_id=None, assigned_to_org="org-9"),
            self._overdue(now, response_due_date=None),
            self._overdue(now, response_due_date=now + timedelta(hours=1)),
        ]
        assert build_overdue_digest(rfis, now=now) == []

    def test_partial_day_counts_as_whole_day(self, now):
        entries = build_overdue_digest([self._overdue(now, response_due_date=now - timedelta(hours=18))], now=now)
        assert entries[0].items[0].days_overdue == 1

    def test_skips_assignee_without_email(self, now):
        rfis = [self._overdue(now, assignee_email=None), self._overdue(now, id="rfi-2", assignee_email=None)]

        with patch.object(digest.logger, "warning") as mock_warning:
            assert build_overdue_digest(rfis, now=now) == []

        mock_warning.assert_called_once()

    def test_explicit_app_url(self, now):
        entries = build_overdue_digest([self._overdue(now)], now=now, app_url="https://x.test/")
        assert entries[0].items[0].view_url == "https://x.test/org-1/projects/proj-1/rfis/rfi-1"


def test_view_url_needs_ids():
    assert build_view_url(RFI(status="submitted", id="r1", project_id="p1")) is None
