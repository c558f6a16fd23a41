# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for the Supabase queries the health
# score engine needs. It implements the singleton pattern to reuse a single
# client connection and provides specialized methods for:
# - Activity reads (valuations, expenses, pricing calculations, forum activity),
#   each scoped to one user and a window start
# - Reading and upserting the user's creative health score row
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   rows = SupabaseClient.fetch_art_valuations(user_id, since=window_start)
# =============================================================================

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any
from uuid import UUID

from supabase import create_client, Client

from app.config import settings
from lib.utils import ApplicationError, normalize_uuid

# Set up logging for this module
logger = logging.getLogger(__name__)

HEALTH_SCORES_TABLE = "creative_health_scores"


class SupabaseClientError(ApplicationError):
    """Error during Supabase operations."""

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=code, suggestion=suggestion, details=details)

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class SupabaseClient:
    """
    Typed wrapper for Supabase database operations.

    One client instance is shared across the application. All methods are
    class methods for easy access without instantiation.

    Example:
        since = datetime.now(timezone.utc) - timedelta(days=30)
        posts = SupabaseClient.fetch_forum_posts(user_id, since=since)
        print(len(posts))
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS), so
        every query below filters on user_id explicitly.

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    # -------------------------------------------------------------------------
    # Activity Reads
    # -------------------------------------------------------------------------

    @classmethod
    def _fetch_user_rows(
        cls,
        table: str,
        columns: str,
        user_id: str | UUID,
        window_column: str,
        since: str,
    ) -> list[dict[str, Any]]:
        """
        Fetch a user's rows from `table` where `window_column >= since`.

        Raises:
            SupabaseClientError: If the query fails
        """
        client = cls.get_client()
        user_id_str = normalize_uuid(user_id)

        try:
            response = (
                client.table(table)
                .select(columns)
                .eq("user_id", user_id_str)
                .gte(window_column, since)
                .execute()
            )

            rows = response.data or []
            logger.debug(f"Fetched {len(rows)} rows from {table} for user {user_id_str}")
            return rows

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch {table}: {e}",
                code="FETCH_ACTIVITY_FAILED",
                suggestion=f"Check that the {table} table exists and is readable by the service role",
                details={"table": table, "user_id": user_id_str, "since": since}
            )

    @classmethod
    def fetch_art_valuations(cls, user_id: str | UUID, since: datetime) -> list[dict[str, Any]]:
        """Fetch ids of artwork valuations created since `since`."""
        return cls._fetch_user_rows(
            "art_valuations", "id", user_id, "created_at", since.isoformat()
        )

    @classmethod
    def fetch_expenses(cls, user_id: str | UUID, since: date) -> list[dict[str, Any]]:
        """
        Fetch expense amounts dated on or after `since`.

        The expenses table stores a plain date, so the comparison is at
        day granularity.
        """
        return cls._fetch_user_rows(
            "expenses", "amount", user_id, "date", since.isoformat()
        )

    @classmethod
    def fetch_pricing_calculations(
        cls, user_id: str | UUID, since: datetime
    ) -> list[dict[str, Any]]:
        """Fetch recommended prices of pricing calculations created since `since`."""
        return cls._fetch_user_rows(
            "pricing_calculations", "recommended_price", user_id, "created_at", since.isoformat()
        )

    @classmethod
    def fetch_forum_posts(cls, user_id: str | UUID, since: datetime) -> list[dict[str, Any]]:
        """Fetch ids of forum posts created since `since`."""
        return cls._fetch_user_rows(
            "forum_posts", "id", user_id, "created_at", since.isoformat()
        )

    @classmethod
    def fetch_forum_comments(cls, user_id: str | UUID, since: datetime) -> list[dict[str, Any]]:
        """Fetch ids of forum comments created since `since`."""
        return cls._fetch_user_rows(
            "forum_comments", "id", user_id, "created_at", since.isoformat()
        )

    # -------------------------------------------------------------------------
    # Health Scores
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_health_score(cls, user_id: str | UUID) -> dict[str, Any] | None:
        """
        Fetch the stored health score row for a user.

        Returns:
            Row dict, or None if the user has never been scored

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()
        user_id_str = normalize_uuid(user_id)

        try:
            response = (
                client.table(HEALTH_SCORES_TABLE)
                .select("*")
                .eq("user_id", user_id_str)
                .single()
                .execute()
            )

            return response.data

        except Exception as e:
            if "PGRST116" in str(e):  # PostgREST code for no rows
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch health score: {e}",
                code="FETCH_HEALTH_SCORE_FAILED",
                details={"user_id": user_id_str}
            )

    @classmethod
    def upsert_health_score(cls, row: dict[str, Any]) -> dict[str, Any]:
        """
        Insert or update the health score row keyed by user_id.

        Relies on the unique constraint on creative_health_scores.user_id so
        that concurrent calculations for the same user resolve to one row.

        Args:
            row: Column values including user_id

        Returns:
            The stored row

        Raises:
            SupabaseClientError: If the upsert fails or returns nothing
        """
        client = cls.get_client()

        try:
            response = (
                client.table(HEALTH_SCORES_TABLE)
                .upsert(row, on_conflict="user_id")
                .execute()
            )

            if response.data:
                return response.data[0]
            raise SupabaseClientError(
                message="Upsert returned no data",
                code="UPSERT_NO_DATA",
                suggestion="Check the unique constraint on creative_health_scores.user_id"
            )

        except SupabaseClientError:
            raise
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to upsert health score: {e}",
                code="UPSERT_HEALTH_SCORE_FAILED",
                details={"user_id": str(row.get("user_id"))}
            )
