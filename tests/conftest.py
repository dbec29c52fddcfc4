"""Pytest configuration for test environment setup.

- Forces ``DISABLE_FILE_LOGS=1`` to avoid writing log files during tests.
- Ensures the project root is available on ``sys.path`` for imports.
- Provides a small snapshot file shared by the runner and CLI tests.
"""

import json
import os
import signal
import sys

os.environ.setdefault("DISABLE_FILE_LOGS", "1")  # Avoid creating log files during tests
from pathlib import Path

import pytest

# Ensure project root is on sys.path
ROOT = Path(__file__).resolve().parents[1]
root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)

_TEST_TIMEOUT = int(os.environ.get("PYTEST_TEST_TIMEOUT", "10"))

SNAPSHOT = {
    "children": [
        {"id": "c1", "name": "Avery", "birthdate": "2022-03-01"},
        {"id": "c2", "name": "Blake"},
    ],
    "child_records": [
        {
            "id": "r1",
            "child_id": "c1",
            "routines": {"bedtime": "7:30pm", "naps": "1pm-3pm"},
            "health": {"allergies": ["peanuts"], "allergy_reaction": "EpiPen"},
            "contacts": {"parent1_name": "Sam", "parent1_phone": "555-0100"},
            "contacts_redacted_fields": ["parent1_phone"],
        }
    ],
    "family_record": {
        "id": "f1",
        "home_base": {"wifi_network": "HomeNet", "wifi_password": "hunter2"},
        "emergency": {"emergency_plan": "Call 911, then Sam"},
    },
}


def _timeout_handler(signum, frame):
    """Test Timeout handler."""
    raise TimeoutError(f"Test exceeded {_TEST_TIMEOUT} seconds timeout")


def pytest_runtest_setup(item):
    """Test Pytest runtest setup."""
    try:
        signal.signal(signal.SIGALRM, _timeout_handler)
        signal.alarm(_TEST_TIMEOUT)
    except (AttributeError, ValueError):
        # No SIGALRM on this platform, or not on the main thread.
        pass


def pytest_runtest_teardown(item, nextitem):
    """Test Pytest runtest teardown."""
    try:
        signal.alarm(0)
    except AttributeError:
        pass


@pytest.fixture
def snapshot_file(tmp_path: Path) -> Path:
    """Write ``SNAPSHOT`` to a temporary JSON file and return its path."""
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(SNAPSHOT), encoding="utf-8")
    return path
