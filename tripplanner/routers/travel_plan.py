"""Travel plan router — generates an itinerary from the trip form."""

from fastapi import APIRouter, Request

from tripplanner.config import settings
from tripplanner.errors import ValidationError
from tripplanner.request_scope import run_bound_to_request
from tripplanner.schemas.travel_plan import TravelPlanResponse, TripRequest
from tripplanner.services.plan_generator import plan_generator

router = APIRouter()


@router.post("", response_model=TravelPlanResponse)
async def create_travel_plan(req: TripRequest, request: Request):
    """Generate a day-by-day plan for the requested destination."""
    if not req.country or not req.country.strip():
        raise ValidationError("Destination is required")

    plan = await run_bound_to_request(
        request,
        plan_generator.generate(req),
        timeout=settings.request_timeout_seconds,
    )
    return TravelPlanResponse(plan=plan)
