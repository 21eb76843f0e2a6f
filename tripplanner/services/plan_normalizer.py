"""Plan normalizer — projects whatever the model returned onto NormalizedPlan."""

import logging
from typing import Any

from tripplanner.schemas.travel_plan import NormalizedPlan, PlanOverview, TripRequest
from tripplanner.services.plan_extractor import ExtractedPlan, Unparsed
from tripplanner.services.query_formatter import DerivedTripParameters, format_amount, format_destination

logger = logging.getLogger(__name__)

SECTIONS = ("itinerary", "practicalInfo", "budgetBreakdown")


def _present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, (str, list, dict)):
        return len(value) > 0
    return True


def _text(value: Any) -> str:
    return value if isinstance(value, str) else str(value)


def fallback_budget(request: TripRequest) -> str | None:
    if request.budget is None or request.currency is None:
        return None
    return format_amount(request.currency.symbol, request.budget)


def fallback_overview(request: TripRequest, params: DerivedTripParameters) -> PlanOverview:
    has_dates = request.from_date is not None and request.to_date is not None
    return PlanOverview(
        destination=format_destination(request),
        duration=f"{params.days} days" if has_dates else None,
        theme=", ".join(request.activities) or request.travel_type or None,
        budget=fallback_budget(request),
    )


def _section(name: str, value: Any) -> dict[str, Any]:
    if value is None:
        return {}
    if isinstance(value, dict):
        return value
    if name == "itinerary" and isinstance(value, list):
        return {f"Day {i}": day for i, day in enumerate(value, start=1)}
    logger.warning(f"Dropping {name}: expected an object, got {type(value).__name__}")
    return {}


def normalize_plan(
    extracted: ExtractedPlan,
    request: TripRequest,
    params: DerivedTripParameters,
) -> NormalizedPlan:
    data = extracted.as_dict()
    defaults = fallback_overview(request, params)

    raw_overview = data.get("overview")
    summary = None
    if isinstance(raw_overview, dict):
        summary = raw_overview.get("summary") or raw_overview.get("description")
    elif isinstance(raw_overview, str) and raw_overview:
        summary = raw_overview
        raw_overview = {}
    else:
        raw_overview = {}

    fields = {}
    for field in ("destination", "duration", "theme", "budget"):
        value = raw_overview.get(field)
        fields[field] = _text(value) if _present(value) else getattr(defaults, field)

    overview = PlanOverview(**fields, summary=_text(summary) if _present(summary) else None)

    itinerary, practical_info, budget_breakdown = (_section(name, data.get(name)) for name in SECTIONS)

    if not _present(budget_breakdown.get("total")) and overview.budget:
        budget_breakdown = {**budget_breakdown, "total": overview.budget}

    return NormalizedPlan(
        overview=overview,
        itinerary=itinerary,
        practical_info=practical_info,
        budget_breakdown=budget_breakdown,
        raw_content=extracted.raw_text if isinstance(extracted, Unparsed) else None,
    )
