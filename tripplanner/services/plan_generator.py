"""Plan generator — prompt, stream, extract, normalize."""

import logging

from tripplanner.schemas.travel_plan import NormalizedPlan, TripRequest
from tripplanner.services.llm_client import LLMClient, llm_client
from tripplanner.services.plan_extractor import Unparsed, extract_plan
from tripplanner.services.plan_normalizer import normalize_plan
from tripplanner.services.query_formatter import SYSTEM_PROMPT, build_prompt, derive_parameters

logger = logging.getLogger(__name__)


class PlanGenerator:
    """Generates a normalized itinerary for one trip request."""

    def __init__(self, client: LLMClient | None = None):
        self._client = client or llm_client

    async def generate(self, request: TripRequest) -> NormalizedPlan:
        params = derive_parameters(request)
        prompt = build_prompt(params)
        logger.info(
            f"Generating {params.days}-day {params.travel_type_text} plan for {params.destination} "
            f"(budget {params.budget_text})"
        )

        raw = await self._client.complete_streamed(system=SYSTEM_PROMPT, user=prompt)

        extracted = extract_plan(raw)
        if isinstance(extracted, Unparsed):
            logger.info("Returning raw completion text as the plan body")
        return normalize_plan(extracted, request, params)


# Singleton
plan_generator = PlanGenerator()
