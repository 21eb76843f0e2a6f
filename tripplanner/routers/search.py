"""Search router — chat questions answered from a web search."""

from fastapi import APIRouter, Request

from tripplanner.config import settings
from tripplanner.errors import ValidationError
from tripplanner.request_scope import run_bound_to_request
from tripplanner.schemas.search import SearchRequest, SearchResponse
from tripplanner.services.search_client import serp_client

router = APIRouter()


@router.post("", response_model=SearchResponse)
async def search(req: SearchRequest, request: Request):
    if not req.q or not req.q.strip():
        raise ValidationError("Missing query 'q' in body")

    results = await run_bound_to_request(
        request,
        serp_client.search(req.q),
        timeout=settings.request_timeout_seconds,
    )
    return SearchResponse(results=results)
