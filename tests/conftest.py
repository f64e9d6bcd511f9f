"""Root conftest for path setup and shared fixtures.

This file is loaded first by pytest and ensures the project root
is on sys.path before any test modules are imported.
"""

import sys
from pathlib import Path

# Add project root to path IMMEDIATELY
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import pytest
from structlog.testing import capture_logs


# =============================================================================
# Logging Fixtures
# =============================================================================


@pytest.fixture
def log_events():
    """Capture structlog events emitted during a test."""
    with capture_logs() as events:
        yield events
