import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from ecal.models import CalendarConfig  # noqa: E402


@pytest.fixture
def make_config():
    def _make(**overrides) -> CalendarConfig:
        values = {"start_month": 1, "start_year": 2024, "num_months": 1}
        values.update(overrides)
        return CalendarConfig(**values)

    return _make
