# =============================================================================
# app/ - FastAPI Integration Package
# =============================================================================
# This package binds the partials library to HTTP:
# - main.py: App factory, logging setup, error handlers
# - config.py: Environment variable loading and settings
# - request_binding.py: include/exclude/only/except query parameters
# - responses.py: JSON responses built from transformed Data objects
#
# The app layer is thin - it handles HTTP concerns and delegates
# transformation to the partials/ package.
# =============================================================================
