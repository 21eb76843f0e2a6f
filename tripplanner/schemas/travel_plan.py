from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake-case attributes, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class Currency(CamelModel):
    code: str = ""
    symbol: str = ""


class TripRequest(CamelModel):
    # country is checked in the router so the 400 message stays "Destination is required"
    country: str | None = None
    state: str | None = None
    from_date: datetime | None = None
    to_date: datetime | None = None
    budget: float | None = Field(default=None, ge=0)
    currency: Currency | None = None
    activities: list[str] = Field(default_factory=list)
    travel_type: str | None = None

    @field_validator("from_date", "to_date")
    @classmethod
    def _to_naive_utc(cls, v: datetime | None) -> datetime | None:
        if v is not None and v.tzinfo is not None:
            return v.astimezone(timezone.utc).replace(tzinfo=None)
        return v

    @field_validator("activities", mode="before")
    @classmethod
    def _dedupe_activities(cls, v: Any) -> Any:
        if v is None:
            return []
        if not isinstance(v, list):
            return v
        seen: list[str] = []
        for item in v:
            label = item.strip() if isinstance(item, str) else item
            if label and label not in seen:
                seen.append(label)
        return seen


class PlanOverview(CamelModel):
    destination: str | None = None
    duration: str | None = None
    theme: str | None = None
    budget: str | None = None
    summary: str | None = None


class NormalizedPlan(CamelModel):
    overview: PlanOverview
    itinerary: dict[str, Any] = Field(default_factory=dict)
    practical_info: dict[str, Any] = Field(default_factory=dict)
    budget_breakdown: dict[str, Any] = Field(default_factory=dict)
    raw_content: str | None = None


class TravelPlanResponse(CamelModel):
    ok: bool = True
    plan: NormalizedPlan
