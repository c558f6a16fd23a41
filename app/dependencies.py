# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# =============================================================================

from datetime import datetime, timezone
from typing import Annotated

from fastapi import Depends

from app.auth import AuthUser, get_current_user


def get_now() -> datetime:
    """
    Evaluation time for a request.

    Overridden in tests to pin the scoring window.
    """
    return datetime.now(timezone.utc)


# Type aliases for dependency injection
NowDep = Annotated[datetime, Depends(get_now)]
CurrentUserDep = Annotated[AuthUser, Depends(get_current_user)]
