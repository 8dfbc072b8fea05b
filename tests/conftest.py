from datetime import datetime, timezone

import pytest

# Wednesday, mid-month, so month projections never hit end-of-month clamping
FIXED_NOW = datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock():
    """A clock frozen at FIXED_NOW."""
    return lambda: FIXED_NOW
