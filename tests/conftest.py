import os
import tempfile

# Credentials and log location must be set before tripplanner.config is imported
os.environ.setdefault("GROQ_API_KEY", "test-groq-key")
os.environ.setdefault("SERP_API_KEY", "test-serp-key")
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "tripplanner-test-logs"))

from datetime import datetime

import pytest

from tripplanner.schemas.travel_plan import Currency, TripRequest


@pytest.fixture
def trip():
    return TripRequest(
        country="Japan",
        state="Tokyo",
        from_date=datetime(2026, 4, 1),
        to_date=datetime(2026, 4, 6),
        budget=2500,
        currency=Currency(code="USD", symbol="$"),
        activities=["Food", "Temples"],
        travel_type="couple",
    )


@pytest.fixture
def bare_trip():
    """Only the required field."""
    return TripRequest(country="Japan")
