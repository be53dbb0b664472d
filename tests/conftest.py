import os
from datetime import datetime

import pytest

os.environ.setdefault("APP_ENV", "testing")


@pytest.fixture
def fixed_now():
    # Monday morning, after the 09:00 late threshold.
    return datetime(2024, 1, 15, 9, 15, 0)
