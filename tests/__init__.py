# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the partials library and its
# FastAPI integration:
# - fakes.py: Shared fake Data classes
# - test_lazy.py / test_parser.py / test_directives.py: Building blocks
# - test_transformer.py / test_collection.py: Partial transformation
# - test_request_binding.py / test_responses.py: HTTP integration
#
# Run tests with: pytest
# =============================================================================
