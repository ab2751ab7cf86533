"""
Unit tests for the RFI model and timestamp parsing at the record boundary.
"""

from datetime import date, datetime, timezone
from unittest.mock import patch

import pytest

from sitetrack.models.rfi import RFI
from sitetrack.models.status import RFIStatus
from sitetrack.utils import timestamps
from sitetrack.workflow.sla import days_overdue, is_overdue
from sitetrack.utils.timestamps import format_instant, parse_instant


class TestParseInstant:
    """Test cases for ISO-8601 parsing."""

    def test_formats(self):
        expected = datetime(2025, 3, 8, 17, 0, tzinfo=timezone.utc)
        assert parse_instant("2025-03-08T17:00:00Z") == expected
        assert parse_instant("2025-03-08T17:00:00+00:00") == expected
        assert parse_instant("2025-03-08T12:00:00-05:00") == expected
        assert parse_instant("2025-03-08T17:00:00") == expected
        assert parse_instant(" 2025-03-08T17:00:00.000Z ") == expected

    def test_trimmed_fraction(self):
        parsed = parse_instant("2025-03-08T17:00:00.12345+00:00")
        assert parsed == datetime(2025, 3, 8, 17, 0, 0, 123450, tzinfo=timezone.utc)

    def test_dates_and_datetimes(self):
        assert parse_instant(date(2025, 3, 8)) == datetime(2025, 3, 8, tzinfo=timezone.utc)
        naive = datetime(2025, 3, 8, 17, 0)
        assert parse_instant(naive).tzinfo is timezone.utc

    def test_empty_values(self):
        assert parse_instant(None) is None
        assert parse_instant("") is None
        assert parse_instant("   ") is None

    def test_invalid_values_degrade_to_none(self):
        with patch.object(timestamps.logger, "warning") as mock_warning:
            assert parse_instant("not-a-date", field_name="answered_at") is None
            assert parse_instant(12345) is None

        assert mock_warning.call_count == 2
        assert "answered_at" in mock_warning.call_args_list[0].args[0]

    def test_format_instant(self):
        assert format_instant(None) is None
        assert format_instant(datetime(2025, 3, 8, 17, 0, tzinfo=timezone.utc)) == "2025-03-08T17:00:00Z"


class TestRFIFromDict:

    def test_parses_record(self, sample_rfi_record):
        rfi = RFI.from_dict(sample_rfi_record)

        assert rfi.id == "rfi-001"
        assert rfi.status == "under_review"
        assert rfi.rfi_status is RFIStatus.UNDER_REVIEW
        assert rfi.submitted_at == datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)
        assert rfi.response_due_date == datetime(2025, 3, 8, 17, 0, tzinfo=timezone.utc)
        assert rfi.answered_at is None
        assert rfi.organization_id == "org-001"
        assert rfi.assignee_email == "pat@example.com"
        assert rfi.assignee_name == "Pat Lee"

    def test_bad_timestamp_is_treated_as_absent(self, sample_rfi_record):
        sample_rfi_record["response_due_date"] = "2025-13-45"
        rfi = RFI.from_dict(sample_rfi_record)
        assert rfi.response_due_date is None

    def test_unknown_status_is_kept(self):
        rfi = RFI.from_dict({"status": "on_hold", "created_by": "u1"})
        assert rfi.status == "on_hold"
        assert rfi.rfi_status is None

    def test_missing_status(self):
        assert RFI.from_dict({}).status == ""

    def test_round_trip_to_dict(self, sample_rfi_record):
        record = RFI.from_dict(sample_rfi_record).to_dict()
        assert record["submitted_at"] == "2025-03-01T09:00:00Z"
        assert record["answered_at"] is None
        assert "description" not in record

    def test_frozen(self):
        rfi = RFI(status="draft")
        with pytest.raises(Exception):
            rfi.status = "closed"

    def test_naive_timestamps_are_taken_as_utc(self, now):
        rfi = RFI(status="submitted", assigned_to_id="u2", response_due_date=datetime(2025, 3, 1),
                  submitted_at=datetime(2025, 2, 20, 9, 0))

        assert rfi.response_due_date == datetime(2025, 3, 1, tzinfo=timezone.utc)
        assert rfi.submitted_at.tzinfo is timezone.utc
        assert is_overdue(rfi, now=now) is True
        assert days_overdue(rfi, now=now) == 9
