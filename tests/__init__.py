# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the ProjectHub API:
# - fakes.py: In-memory stand-in for the Supabase client and storage
# - test_models.py: Listing parameters and form validation
# - test_pagination.py: Page links and the response envelope
# - test_listing.py: Filtering, sorting and paging queries
# - test_*_service.py: Service-layer behaviour, including images
# - test_api.py: Endpoint tests through FastAPI's TestClient
#
# Run tests with: poetry run pytest
# =============================================================================
