import os
import sys
from unittest.mock import patch

import pytest

# Test environment configuration
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DEFAULT_QUERY", "programming")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

# Ensure the project root is importable when pytest changes CWD
from pathlib import Path

PROJECT_ROOT = str(Path(__file__).resolve().parents[1])
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from book_list.app import app as flask_app  # noqa: E402
from book_list.services.tracker import get_tracker_for, reset_trackers  # noqa: E402

TRACKER_ID = "test-tracker"


@pytest.fixture(autouse=True)
def _reset_state():
    reset_trackers()
    yield
    reset_trackers()


@pytest.fixture()
def catalog():
    """Replace the catalog search used by the views; returns no books by default."""
    with patch("book_list.app.search_catalog", return_value=[]) as mock_search:
        yield mock_search


@pytest.fixture()
def client(catalog):
    flask_app.config["TESTING"] = True
    with flask_app.test_client() as client:
        with client.session_transaction() as sess:
            sess["tracker_id"] = TRACKER_ID
        yield client


@pytest.fixture()
def tracker(client):
    """Tracker bound to the test client's session."""
    return get_tracker_for(TRACKER_ID)
