# =============================================================================
# core/services/health_score_service.py - Creative Health Score Business Logic
# =============================================================================
# Orchestrates one health score calculation:
#   1. Read the user's activity for the trailing window from Supabase
#   2. Compute the five scores (core.scoring, pure)
#   3. Upsert the result into creative_health_scores (one write)
#
# All-or-nothing: a failed read aborts before any write, and a failed write
# means no scores are returned.
# =============================================================================

import logging
from datetime import datetime, timezone
from uuid import UUID

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import normalize_uuid
from core.models.health_score import ActivitySnapshot, HealthScoreRecord, HealthScores
from core.scoring import DEFAULT_SCORING_CONFIG, ScoringConfig, compute_scores, window_start
from app.exceptions import DataAccessError, PersistenceError

logger = logging.getLogger(__name__)


class HealthScoreService:
    """
    Service for creative health score operations.

    Provides a clean interface between API routes and the database.
    """

    @staticmethod
    def fetch_activity(
        user_id: UUID | str,
        since: datetime,
    ) -> ActivitySnapshot:
        """
        Read all activity signals for a user since `since`.

        Args:
            user_id: The user to score
            since: Start of the scoring window (timezone-aware)

        Returns:
            ActivitySnapshot built from the five activity queries

        Raises:
            DataAccessError: If any of the queries fails
        """
        reads = {
            "art valuations": lambda: SupabaseClient.fetch_art_valuations(user_id, since),
            "expenses": lambda: SupabaseClient.fetch_expenses(user_id, since.date()),
            "pricing calculations": lambda: SupabaseClient.fetch_pricing_calculations(user_id, since),
            "forum posts": lambda: SupabaseClient.fetch_forum_posts(user_id, since),
            "forum comments": lambda: SupabaseClient.fetch_forum_comments(user_id, since),
        }

        rows = {}
        for source, read in reads.items():
            try:
                rows[source] = read()
            except SupabaseClientError as e:
                logger.error(f"Activity read failed for user {user_id} ({source}): {e}")
                raise DataAccessError(source, e.message)

        try:
            return ActivitySnapshot.from_rows(
                valuations=rows["art valuations"],
                expenses=rows["expenses"],
                pricing_calculations=rows["pricing calculations"],
                forum_posts=rows["forum posts"],
                forum_comments=rows["forum comments"],
            )
        except ValueError as e:
            logger.error(f"Unreadable activity rows for user {user_id}: {e}")
            raise DataAccessError("activity rows", str(e))

    @staticmethod
    def calculate(
        user_id: UUID | str,
        now: datetime | None = None,
        config: ScoringConfig = DEFAULT_SCORING_CONFIG,
    ) -> HealthScores:
        """
        Calculate and store the user's creative health score.

        Args:
            user_id: The authenticated user
            now: Evaluation time; defaults to the current UTC time
            config: Scoring constants

        Returns:
            The five scores (not the stored row)

        Raises:
            DataAccessError: If any activity read fails (nothing is written)
            PersistenceError: If the upsert fails
        """
        user_id_str = normalize_uuid(user_id)
        now = now or datetime.now(timezone.utc)
        since = window_start(now, config)

        snapshot = HealthScoreService.fetch_activity(user_id_str, since)
        scores = compute_scores(snapshot, config)
        logger.debug(f"Computed health score for user {user_id_str}: {snapshot} -> {scores}")

        try:
            SupabaseClient.upsert_health_score(scores.to_row(user_id_str, now))
        except SupabaseClientError as e:
            logger.error(f"Failed to save health score for user {user_id_str}: {e}")
            raise PersistenceError(user_id_str, e.message)

        logger.info(f"Calculated health score for user {user_id_str}: overall={scores.overall_score}")
        return scores

    @staticmethod
    def get_latest(user_id: UUID | str) -> HealthScoreRecord | None:
        """
        Get the user's stored health score.

        Returns:
            HealthScoreRecord, or None if the user has never been scored

        Raises:
            DataAccessError: If the read fails
        """
        user_id_str = normalize_uuid(user_id)

        try:
            row = SupabaseClient.fetch_health_score(user_id_str)
        except SupabaseClientError as e:
            logger.error(f"Failed to fetch health score for user {user_id_str}: {e}")
            raise DataAccessError("health score", e.message)

        if not row:
            return None
        return HealthScoreRecord.model_validate(row)
