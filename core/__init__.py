# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the health score business logic:
# - models/: Pydantic schemas and the activity snapshot
# - scoring.py: Pure score computation (no I/O)
# - services/: Reads activity from Supabase, computes, and upserts
#
# Code in scoring.py and models/ should NOT import from FastAPI.
# This keeps the computation testable and reusable.
# =============================================================================
