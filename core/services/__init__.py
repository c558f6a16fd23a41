# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .health_score_service import HealthScoreService

__all__ = [
    "HealthScoreService",
]
