# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Provides a pinned clock, a user id and canned activity rows
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-with-enough-length")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

from datetime import datetime, timezone
from unittest.mock import MagicMock
from uuid import UUID

import pytest


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def user_id() -> UUID:
    """A fixed Supabase user id."""
    return UUID("8f14e45f-ceea-467f-a9c4-7c1d4c2a9e01")


@pytest.fixture
def pinned_now() -> datetime:
    """A fixed evaluation time."""
    return datetime(2024, 6, 30, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def activity_rows():
    """
    Canned rows as the activity queries would return them.

    5 valuations, 300 in expenses, average price 1000, 2 posts, 3 comments.
    """
    return {
        "valuations": [{"id": f"val-{i}"} for i in range(5)],
        "expenses": [{"amount": "100.00"}, {"amount": 200}],
        "pricing_calculations": [
            {"recommended_price": "800"},
            {"recommended_price": 1200},
        ],
        "forum_posts": [{"id": "post-1"}, {"id": "post-2"}],
        "forum_comments": [{"id": "c-1"}, {"id": "c-2"}, {"id": "c-3"}],
    }


@pytest.fixture
def mock_supabase(activity_rows):
    """
    A stand-in for lib.supabase_client.SupabaseClient with canned reads.

    Patch it into the service module:
        with patch("core.services.health_score_service.SupabaseClient", mock_supabase):
    """
    mock = MagicMock()
    mock.fetch_art_valuations.return_value = activity_rows["valuations"]
    mock.fetch_expenses.return_value = activity_rows["expenses"]
    mock.fetch_pricing_calculations.return_value = activity_rows["pricing_calculations"]
    mock.fetch_forum_posts.return_value = activity_rows["forum_posts"]
    mock.fetch_forum_comments.return_value = activity_rows["forum_comments"]
    mock.upsert_health_score.side_effect = lambda row: {"id": "row-1", **row}
    return mock
