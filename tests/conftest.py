"""
Pytest configuration and shared fixtures for all tests.
"""

import sys
from pathlib import Path

import pytest
import json

# Add the project root to sys.path so we can import from src
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


class ManualScheduler:
    """Deferred task stand-in whose callback is fired by the test."""

    def __init__(self):
        self.callback = None
        self.delay = None
        self.schedule_count = 0
        self.cancel_count = 0

    def schedule(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self.schedule_count += 1

    def cancel(self):
        if self.callback is not None:
            self.cancel_count += 1
        self.callback = None

    @property
    def pending(self):
        return self.callback is not None

    def fire(self):
        callback, self.callback = self.callback, None
        if callback is not None:
            callback()


@pytest.fixture
def manual_scheduler():
    """Scheduler that only runs its callback when fire() is called."""
    return ManualScheduler()


@pytest.fixture(scope="session")
def fixtures_dir():
    """Get the fixtures directory path."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def sample_response(fixtures_dir):
    """Load a sample hourly weather response from fixtures."""
    data_file = fixtures_dir / "sample_weather.json"
    with open(data_file, encoding="utf-8") as f:
        return json.load(f)


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test requiring API access"
    )
    config.addinivalue_line(
        "markers", "unit: mark test as unit test (no external dependencies)"
    )
