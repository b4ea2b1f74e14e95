"""Global test fixtures."""

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from fastapi.testclient import TestClient  # noqa: E402

from rollsum.api.main import create_app  # noqa: E402
from rollsum.services.accumulator import Accumulator  # noqa: E402
from rollsum.services.clock import ManualClock  # noqa: E402

# Start of a minute, so "+40s then +5s" stays inside one bucket.
T0 = 60 * 28_333_333


@pytest.fixture
def clock():
    return ManualClock(T0)


@pytest.fixture
def accumulator(clock):
    return Accumulator(clock)


@pytest.fixture
def client(accumulator):
    app = create_app(accumulator=accumulator, sweep_interval_s=0)
    return TestClient(app)
