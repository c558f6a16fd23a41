# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Service health check endpoints
# - health_score.py: Creative Health Score calculation and retrieval
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import health_score

__all__ = [
    "health",
    "health_score",
]
