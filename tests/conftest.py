from datetime import datetime, timezone

import pytest


@pytest.fixture
def now():
    # late in the month so no fixture day triggers the rollback
    return datetime(2004, 1, 31, 12, 0, tzinfo=timezone.utc)
