# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Provides JWT-based authentication using Supabase Auth.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
# =============================================================================

from app.auth.dependencies import get_current_user, resolve_user
from app.auth.models import AuthUser

__all__ = [
    "get_current_user",
    "resolve_user",
    "AuthUser",
]
