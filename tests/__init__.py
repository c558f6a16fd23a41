# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Artpreneur API:
# - test_scoring.py: Pure score computation
# - test_models.py: Pydantic model validation
# - test_health_score_service.py: Calculation flow with a mocked store
# - test_supabase_client.py: Query building and error wrapping
# - test_auth.py: Bearer token verification
# - test_health_score_routes.py: HTTP endpoints via TestClient
#
# Run tests with: pytest
# =============================================================================
