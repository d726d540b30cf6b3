# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up environment variables before any imports
# - Gives every test a fresh PartialsConfig and a clean default config
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest

from partials import PartialsConfig, default_config


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def clean_default_config():
    """Conditional defaults registered on the process default never leak."""
    default_config.clear()
    yield
    default_config.clear()


@pytest.fixture
def config():
    """A fresh, isolated partials configuration."""
    return PartialsConfig()
