# =============================================================================
# core/scoring.py - Creative Health Score Computation
# =============================================================================
# Pure functions that turn an ActivitySnapshot into HealthScores.
# No I/O happens here: the service layer reads activity from Supabase,
# calls compute_scores(), and persists the result.
#
# Sub-scores (each clamped to [0, 100]):
#   productivity   = valuations * 20
#   financial      = (avg_price - expenses) / avg_price * 100, or 50 without pricing
#   learning       = 50 (fixed default, no learning signal is tracked)
#   community      = posts * 15 + comments * 5
#
# Overall = 0.3 * productivity + 0.3 * financial + 0.2 * learning + 0.2 * community,
# rounded to the nearest integer with halves rounded up.
#
# Usage:
#   from core.scoring import DEFAULT_SCORING_CONFIG, compute_scores
#   scores = compute_scores(snapshot, DEFAULT_SCORING_CONFIG)
# =============================================================================

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta

from core.models.health_score import ActivitySnapshot, HealthScores, ScoreBand

MIN_SCORE = 0
MAX_SCORE = 100


@dataclass(frozen=True)
class ScoringConfig:
    """
    Constants for one health score calculation.

    Weights must be non-negative and sum to 1.0 so the overall score stays
    within [0, 100] without re-clamping.
    """

    window_days: int = 30

    # Productivity
    valuation_points: int = 20

    # Financial health
    neutral_financial_score: int = 50

    # Learning engagement
    learning_engagement_default: int = 50

    # Community participation
    post_points: int = 15
    comment_points: int = 5

    # Overall weights
    productivity_weight: float = 0.3
    financial_weight: float = 0.3
    learning_weight: float = 0.2
    community_weight: float = 0.2

    def __post_init__(self) -> None:
        weights = self.weights
        if any(w < 0 for w in weights):
            raise ValueError(f"Scoring weights must be non-negative, got {weights}")
        if not math.isclose(sum(weights), 1.0, abs_tol=1e-9):
            raise ValueError(f"Scoring weights must sum to 1.0, got {sum(weights)}")
        if self.window_days < 1:
            raise ValueError(f"window_days must be at least 1, got {self.window_days}")

    @property
    def weights(self) -> tuple[float, float, float, float]:
        """Weights in (productivity, financial, learning, community) order."""
        return (
            self.productivity_weight,
            self.financial_weight,
            self.learning_weight,
            self.community_weight,
        )


DEFAULT_SCORING_CONFIG = ScoringConfig()


# =============================================================================
# Helpers
# =============================================================================

def window_start(now: datetime, config: ScoringConfig = DEFAULT_SCORING_CONFIG) -> datetime:
    """Start of the trailing scoring window ending at `now`."""
    return now - timedelta(days=config.window_days)


def clamp_score(value: float) -> float:
    """Clamp a score to [0, 100]."""
    return max(MIN_SCORE, min(MAX_SCORE, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up."""
    return int(math.floor(value + 0.5))


# =============================================================================
# Sub-scores
# =============================================================================

def productivity_score(
    valuation_count: int,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> int:
    """
    Score artwork valuations in the window.

    Linear and saturating: 5 valuations reach 100 with the default config.
    """
    return int(clamp_score(valuation_count * config.valuation_points))


def financial_health_score(
    total_expenses: float,
    average_price: float,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> float:
    """
    Score the share of the average recommended price left after expenses.

    Returns the neutral score when there is no pricing activity
    (average_price of 0), regardless of expenses.
    """
    if average_price <= 0:
        return float(config.neutral_financial_score)
    return float(clamp_score((average_price - total_expenses) / average_price * 100))


def learning_engagement_score(config: ScoringConfig = DEFAULT_SCORING_CONFIG) -> int:
    # Placeholder: no learning interaction signal is recorded yet.
    return config.learning_engagement_default


def community_participation_score(
    post_count: int,
    comment_count: int,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> int:
    """Score forum posts and comments in the window."""
    points = post_count * config.post_points + comment_count * config.comment_points
    return int(clamp_score(points))


def overall_score(
    productivity: float,
    financial: float,
    learning: float,
    community: float,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> int:
    """Weighted sum of the four sub-scores, rounded to the nearest integer."""
    weighted = (
        productivity * config.productivity_weight
        + financial * config.financial_weight
        + learning * config.learning_weight
        + community * config.community_weight
    )
    return round_half_up(weighted)


# =============================================================================
# Entry Point
# =============================================================================

def compute_scores(
    snapshot: ActivitySnapshot,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> HealthScores:
    """
    Compute all five scores for one activity snapshot.

    Args:
        snapshot: Activity signals for one user and one window
        config: Scoring constants

    Returns:
        HealthScores with every field in [0, 100]

    Example:
        snapshot = ActivitySnapshot(valuation_count=5, forum_post_count=7)
        compute_scores(snapshot).overall_score  # 30 + 15 + 10 + 20 = 75
    """
    productivity = productivity_score(snapshot.valuation_count, config)
    financial = financial_health_score(snapshot.total_expenses, snapshot.average_price, config)
    learning = learning_engagement_score(config)
    community = community_participation_score(
        snapshot.forum_post_count, snapshot.forum_comment_count, config
    )

    return HealthScores(
        overall_score=overall_score(productivity, financial, learning, community, config),
        productivity_score=productivity,
        financial_health_score=financial,
        learning_engagement_score=learning,
        community_participation_score=community,
    )


def score_band(score: float) -> ScoreBand:
    """Display band for a score: >= 70 Excellent, >= 40 Good, else Needs Attention."""
    if score >= 70:
        return ScoreBand.EXCELLENT
    if score >= 40:
        return ScoreBand.GOOD
    return ScoreBand.NEEDS_ATTENTION
