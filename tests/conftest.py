"""
Pytest fixtures for RUNAWAY test suite.
"""

import pytest
from app import create_app


@pytest.fixture
def app(tmp_path):
    """Create application for testing, with an empty fixture directory."""
    app = create_app({
        "TESTING": True,
        "OBSERVATIONS_DIR": str(tmp_path),
    })
    return app


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()
