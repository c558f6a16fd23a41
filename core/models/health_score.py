# =============================================================================
# core/models/health_score.py - Creative Health Score Schemas
# =============================================================================
# These models define the contract for the health score engine:
# - ActivitySnapshot: Raw activity signals read for one user and one window
# - HealthScores: The five bounded scores returned to the caller
# - HealthScoreRecord: The stored creative_health_scores row
# - CalculateHealthScoreResponse / HealthScoreSummary: API response bodies
# - ScoreBand: Display band for a score (Excellent / Good / Needs Attention)
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from lib.utils import to_number


class ScoreBand(str, Enum):
    """
    Display band for a score, as shown on the dashboard.

    - excellent: 70 and above
    - good: 40 to 69
    - needs_attention: below 40
    """
    EXCELLENT = "Excellent"
    GOOD = "Good"
    NEEDS_ATTENTION = "Needs Attention"


@dataclass(frozen=True)
class ActivitySnapshot:
    """
    Activity signals for one user within one scoring window.

    average_price is 0 when the user has no pricing calculations in the window.
    """
    valuation_count: int = 0
    total_expenses: float = 0.0
    pricing_count: int = 0
    average_price: float = 0.0
    forum_post_count: int = 0
    forum_comment_count: int = 0

    @classmethod
    def from_rows(
        cls,
        valuations: list[dict[str, Any]],
        expenses: list[dict[str, Any]],
        pricing_calculations: list[dict[str, Any]],
        forum_posts: list[dict[str, Any]],
        forum_comments: list[dict[str, Any]],
    ) -> "ActivitySnapshot":
        """Reduce the rows returned by the activity queries into a snapshot."""
        total_expenses = sum(to_number(row.get("amount")) for row in expenses)

        prices = [to_number(row.get("recommended_price")) for row in pricing_calculations]
        average_price = sum(prices) / len(prices) if prices else 0.0

        return cls(
            valuation_count=len(valuations),
            total_expenses=total_expenses,
            pricing_count=len(prices),
            average_price=average_price,
            forum_post_count=len(forum_posts),
            forum_comment_count=len(forum_comments),
        )


class HealthScores(BaseModel):
    """
    The five scores produced by one calculation.

    Every field is bounded to [0, 100]; constructing an out-of-range
    instance raises ValidationError.

    Example:
        {
            "overall_score": 90,
            "productivity_score": 100,
            "financial_health_score": 100.0,
            "learning_engagement_score": 50,
            "community_participation_score": 100
        }
    """

    overall_score: int = Field(..., ge=0, le=100, description="Weighted overall score")
    productivity_score: int = Field(..., ge=0, le=100, description="Artwork valuations in the window")
    financial_health_score: float = Field(..., ge=0, le=100, description="Share of average price left after expenses")
    learning_engagement_score: int = Field(..., ge=0, le=100, description="Learning engagement (fixed default)")
    community_participation_score: int = Field(..., ge=0, le=100, description="Forum posts and comments in the window")

    def to_row(self, user_id: str, calculated_at: datetime) -> dict[str, Any]:
        """Build the creative_health_scores row for an upsert."""
        return {
            "user_id": user_id,
            **self.model_dump(),
            "last_calculated_at": calculated_at.isoformat(),
        }


class HealthScoreRecord(HealthScores):
    """A stored creative_health_scores row."""

    user_id: UUID = Field(..., description="Owner of the score (unique)")
    last_calculated_at: datetime | None = Field(
        default=None,
        description="When the scores were last recalculated"
    )


class CalculateHealthScoreResponse(BaseModel):
    """
    Response for a successful calculation.

    Example:
        {"success": true, "scores": {...}}
    """
    success: bool = Field(default=True)
    scores: HealthScores


class HealthScoreSummary(BaseModel):
    """Stored scores plus the display band for each."""
    scores: HealthScoreRecord
    bands: dict[str, ScoreBand] = Field(
        default_factory=dict,
        description="Display band keyed by score field name"
    )
