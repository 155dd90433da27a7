from __future__ import annotations

from unittest.mock import Mock

import pytest

from tests.helpers import FakeScheduler, Outcome


@pytest.fixture
def scheduler() -> FakeScheduler:
    """Create a scheduler recording callbacks instead of running them."""
    return FakeScheduler()


@pytest.fixture
def outcome() -> Outcome:
    """Create a completion callback recording what it receives."""
    return Outcome()


@pytest.fixture
def mock_callback() -> Mock:
    """Create a mock callback function for testing lifecycle callbacks.

    Returns:
        A Mock object that can be used as a callback function.
    """
    return Mock()
