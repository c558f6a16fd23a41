# =============================================================================
# core/models/ - Data Models
# =============================================================================
# This package contains the schemas for the health score engine:
# - health_score.py: Activity snapshot, score, stored record and response schemas
#
# These models define the "contract" between API and clients.
# =============================================================================

from .health_score import (
    ActivitySnapshot,
    CalculateHealthScoreResponse,
    HealthScoreRecord,
    HealthScores,
    HealthScoreSummary,
    ScoreBand,
)

__all__ = [
    "ActivitySnapshot",
    "CalculateHealthScoreResponse",
    "HealthScoreRecord",
    "HealthScores",
    "HealthScoreSummary",
    "ScoreBand",
]
