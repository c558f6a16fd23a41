# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Resolves the bearer credential on a request to the Supabase user it belongs to.
#
# Supports both:
# - ES256 (new Supabase JWT signing keys) via JWKS
# - HS256 (legacy Supabase JWT secret) as fallback
#
# Every failure raises AuthenticationError, so no route body runs for an
# unresolved caller.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.post("/calculate")
#   async def calculate(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

import logging
import time
from typing import Any, Optional
from uuid import UUID

import httpx
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError, ExpiredSignatureError
from jose.exceptions import JOSEError
from pydantic import ValidationError

from app.config import settings
from app.auth.models import AuthUser, TokenPayload
from app.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor; missing headers are reported by get_current_user
security = HTTPBearer(auto_error=False)

# Cache for JWKS keys
_jwks_cache: dict[str, Any] = {}
_jwks_cache_time: float = 0
JWKS_CACHE_TTL = 3600  # 1 hour


def _fetch_jwks() -> dict[str, Any]:
    """Fetch JWKS from Supabase with caching."""
    global _jwks_cache, _jwks_cache_time

    current_time = time.time()

    if _jwks_cache and (current_time - _jwks_cache_time) < JWKS_CACHE_TTL:
        return _jwks_cache

    try:
        response = httpx.get(settings.jwks_url, timeout=10)
        response.raise_for_status()
        _jwks_cache = response.json()
        _jwks_cache_time = current_time
        logger.debug(f"Fetched JWKS from {settings.jwks_url}")
        return _jwks_cache
    except (httpx.HTTPError, ValueError) as e:
        logger.warning(f"Failed to fetch JWKS: {e}")
        # Stale keys are better than none
        if _jwks_cache:
            return _jwks_cache
        return {"keys": []}


def _get_signing_key(token: str) -> tuple[Any, str]:
    """
    Get the appropriate signing key for a token.

    Returns:
        Tuple of (key, algorithm) to use for verification
    """
    try:
        unverified_header = jwt.get_unverified_header(token)
    except JWTError:
        return settings.SUPABASE_JWT_SECRET, "HS256"

    alg = unverified_header.get("alg", "HS256")
    kid = unverified_header.get("kid")

    if alg == "HS256":
        return settings.SUPABASE_JWT_SECRET, "HS256"

    if kid:
        for key in _fetch_jwks().get("keys", []):
            if key.get("kid") == kid:
                return key, alg

    logger.warning(f"Could not find key for alg={alg}, kid={kid}, falling back to HS256")
    return settings.SUPABASE_JWT_SECRET, "HS256"


def resolve_user(token: str) -> AuthUser:
    """
    Verify a Supabase access token and return its user.

    Raises:
        AuthenticationError: If the token is invalid, expired, or has no usable subject
    """
    signing_key, algorithm = _get_signing_key(token)

    # An empty HMAC key would verify tokens anyone can sign
    if algorithm == "HS256" and not signing_key:
        logger.error("SUPABASE_JWT_SECRET is not set; rejecting HS256 token")
        raise AuthenticationError("HS256 verification is not configured")

    try:
        payload = jwt.decode(
            token,
            signing_key,
            algorithms=[algorithm],
            audience="authenticated"
        )
    except ExpiredSignatureError:
        raise AuthenticationError("token has expired")
    except JOSEError as e:
        raise AuthenticationError(f"invalid token ({e})")

    try:
        claims = TokenPayload.model_validate(payload)
    except ValidationError:
        raise AuthenticationError("token is missing required claims")

    try:
        user_id = UUID(claims.sub)
    except ValueError:
        raise AuthenticationError("malformed user ID in token")

    logger.debug(f"Authenticated user: {user_id}")
    return AuthUser(id=user_id, email=claims.email)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> AuthUser:
    """
    Extract and validate the user from the Authorization header.

    Raises:
        AuthenticationError: 401 if the header is missing or the token is invalid
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("no authorization header")

    return resolve_user(credentials.credentials)
