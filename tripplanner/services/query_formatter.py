"""Query formatter — turns a trip request into the plan-generation prompt."""

import math
from dataclasses import dataclass

from tripplanner.schemas.travel_plan import TripRequest

DEFAULT_DAYS = 3
DEFAULT_PREFERENCES = "sightseeing"
DEFAULT_TRAVEL_TYPE = "solo"
FLEXIBLE_BUDGET = "flexible"

SYSTEM_PROMPT = "You are a helpful travel planning assistant."

USER_PROMPT = (
    "Suggest a {days}-day {travel_type} trip to {destination} under a budget of {budget}.\n"
    "Preferences: {preferences}.\n"
    "Return the response in a structured JSON format with overview, itinerary (day-wise), "
    "practicalInfo, and budgetBreakdown."
)


@dataclass(frozen=True)
class DerivedTripParameters:
    days: int
    destination: str
    budget_text: str
    preferences_text: str
    travel_type_text: str


def trip_days(request: TripRequest) -> int | None:
    """Whole days between the two dates, at least 1. None unless both are set."""
    if request.from_date is None or request.to_date is None:
        return None
    seconds = abs((request.to_date - request.from_date).total_seconds())
    return max(math.ceil(seconds / 86400), 1)


def format_destination(request: TripRequest) -> str:
    if request.state:
        return f"{request.country}, {request.state}"
    return request.country or ""


def format_amount(symbol: str, amount: float) -> str:
    # 1500.0 -> "1500", 99.5 -> "99.5"
    if float(amount).is_integer():
        return f"{symbol}{int(amount)}"
    return f"{symbol}{amount}"


def derive_parameters(request: TripRequest) -> DerivedTripParameters:
    days = trip_days(request) or DEFAULT_DAYS

    if request.budget and request.currency:
        budget_text = format_amount(request.currency.symbol, request.budget)
    else:
        budget_text = FLEXIBLE_BUDGET

    return DerivedTripParameters(
        days=days,
        destination=format_destination(request),
        budget_text=budget_text,
        preferences_text=", ".join(request.activities) or DEFAULT_PREFERENCES,
        travel_type_text=request.travel_type or DEFAULT_TRAVEL_TYPE,
    )


def build_prompt(params: DerivedTripParameters) -> str:
    return USER_PROMPT.format(
        days=params.days,
        travel_type=params.travel_type_text,
        destination=params.destination,
        budget=params.budget_text,
        preferences=params.preferences_text,
    )
