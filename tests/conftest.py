import datetime

import pytest


@pytest.fixture
def now():
    """Date de référence commune : 15/06/2025 à midi (heure locale)."""
    return datetime.datetime(2025, 6, 15, 12, 0)
