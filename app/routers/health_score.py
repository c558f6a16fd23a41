# =============================================================================
# app/routers/health_score.py - Creative Health Score Endpoints
# =============================================================================
# Calculates and returns the caller's Creative Health Score.
# All endpoints require authentication; the user id always comes from the
# bearer token, never from the request.
# =============================================================================

import logging

from fastapi import APIRouter

from app.dependencies import CurrentUserDep, NowDep
from app.exceptions import HealthScoreNotFoundError
from core.models.health_score import CalculateHealthScoreResponse, HealthScoreSummary
from core.scoring import score_band
from core.services.health_score_service import HealthScoreService

logger = logging.getLogger(__name__)

router = APIRouter()

BAND_FIELDS = (
    "overall_score",
    "productivity_score",
    "financial_health_score",
    "learning_engagement_score",
    "community_participation_score",
)


# =============================================================================
# Endpoints
# =============================================================================

@router.post("/calculate", response_model=CalculateHealthScoreResponse)
def calculate_health_score(user: CurrentUserDep, now: NowDep):
    """
    Recalculate the caller's Creative Health Score.

    Reads the last 30 days of valuations, expenses, pricing calculations and
    forum activity, stores the result, and returns the five scores.
    """
    scores = HealthScoreService.calculate(user.id, now=now)
    return CalculateHealthScoreResponse(success=True, scores=scores)


@router.get("", response_model=HealthScoreSummary)
def get_health_score(user: CurrentUserDep):
    """
    Get the caller's most recently stored Creative Health Score.

    Includes a display band (Excellent / Good / Needs Attention) per score.
    """
    record = HealthScoreService.get_latest(user.id)
    if record is None:
        raise HealthScoreNotFoundError(str(user.id))

    bands = {field: score_band(getattr(record, field)) for field in BAND_FIELDS}
    return HealthScoreSummary(scores=record, bands=bands)
