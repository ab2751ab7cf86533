"""
Pytest configuration and shared fixtures for SiteTrack tests.
"""

import os
from datetime import datetime, timedelta, timezone
from pathlib import Path
import sys

import pytest

# Add the repository root to the Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sitetrack.core.config import config
from sitetrack.models.rfi import RFI


NOW = datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    """Fixed evaluation instant shared by SLA tests."""
    return NOW


@pytest.fixture
def make_rfi():
    """Factory for RFIs with sensible defaults."""
    def _make(**overrides):
        values = {
            "status": "submitted",
            "created_by": "u1",
            "assigned_to_id": "u2",
            "assigned_to_org": None,
        }
        values.update(overrides)
        return RFI(**values)
    return _make


@pytest.fixture
def sample_rfi_record():
    """Sample RFI row as returned by the database with joined relations."""
    return {
        "id": "rfi-001",
        "number": 14,
        "title": "Clarify rebar spacing at grid C-4",
        "status": "under_review",
        "priority": "high",
        "created_by": "u1",
        "assigned_to_id": "u2",
        "assigned_to_org": None,
        "project_id": "proj-001",
        "submitted_at": "2025-03-01T09:00:00Z",
        "response_due_date": "2025-03-08T17:00:00Z",
        "answered_at": None,
        "closed_at": None,
        "description": "Structural drawings S-201 and S-305 disagree.",
        "projects": {"id": "proj-001", "name": "Harbor Point", "organization_id": "org-001"},
        "assigned_to": {"id": "u2", "email": "pat@example.com", "full_name": "Pat Lee"},
    }


@pytest.fixture
def overdue_batch(make_rfi):
    """A project's RFIs around the fixed instant."""
    return [
        make_rfi(id="a", status="draft", assigned_to_id=None, response_due_date=NOW - timedelta(days=3)),
        make_rfi(id="b", status="submitted", submitted_at=NOW - timedelta(days=6),
                 response_due_date=NOW - timedelta(days=2, hours=5)),
        make_rfi(id="c", status="under_review", response_due_date=NOW + timedelta(days=1)),
        make_rfi(id="d", status="answered", submitted_at=NOW - timedelta(days=10),
                 response_due_date=NOW - timedelta(days=8), answered_at=NOW - timedelta(days=9)),
        make_rfi(id="e", status="closed", submitted_at=NOW - timedelta(days=10),
                 response_due_date=NOW - timedelta(days=8), answered_at=NOW - timedelta(days=7),
                 closed_at=NOW - timedelta(days=6)),
        make_rfi(id="f", status="cancelled", response_due_date=NOW - timedelta(days=30)),
    ]


@pytest.fixture
def mock_aws_credentials():
    """Mocked AWS Credentials for moto."""
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "us-east-1"


@pytest.fixture
def test_config():
    """Test configuration overrides."""
    original_env = config.environment
    original_app_url = config.app.app_url
    config.environment = "test"
    config.app.app_url = "https://app.example.com"

    yield config

    config.environment = original_env
    config.app.app_url = original_app_url
