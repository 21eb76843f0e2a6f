"""SerpAPI client — answers chat questions with a web search."""

import logging
from typing import Any

import httpx

from tripplanner.config import settings
from tripplanner.errors import ConfigurationError, UpstreamError, UpstreamTimeoutError, ValidationError
from tripplanner.schemas.search import SearchAnswer, SearchSource

logger = logging.getLogger(__name__)

NO_ANSWER = "I couldn't find a specific answer to your question."
MAX_SOURCES = 3


def _dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def format_search_response(data: dict) -> SearchAnswer:
    """Reduce a raw SerpAPI response to an answer plus up to three sources."""
    answer_box = _dict(data.get("answer_box"))
    knowledge_graph = _dict(data.get("knowledge_graph"))

    answer = (
        answer_box.get("answer")
        or answer_box.get("snippet")
        or knowledge_graph.get("description")
        or NO_ANSWER
    )

    organic = data.get("organic_results")
    if not isinstance(organic, list):
        organic = []
    sources = [
        SearchSource(title=r.get("title"), link=r.get("link"), snippet=r.get("snippet"))
        for r in organic[:MAX_SOURCES]
        if isinstance(r, dict)
    ]
    return SearchAnswer(answer=str(answer), sources=sources)


class SerpClient:
    """Adapter for the SerpAPI search endpoint."""

    def __init__(self, client: httpx.AsyncClient | None = None):
        self._client = client

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=settings.search_timeout_seconds)
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def search(self, query: str) -> SearchAnswer:
        if not query or not query.strip():
            raise ValidationError("Missing query 'q' in body")
        if not settings.serp_api_key:
            raise ConfigurationError("SERP API key not configured")

        params = {
            "q": query.strip(),
            "api_key": settings.serp_api_key,
            "engine": settings.serp_engine,
        }

        try:
            client = await self._get_client()
            resp = await client.get(settings.serp_api_url, params=params)
            resp.raise_for_status()
            data = resp.json()
        except httpx.TimeoutException as e:
            logger.error(f"SERP API timed out: {e}")
            raise UpstreamTimeoutError("Failed to get search results") from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"SERP API error: {e}")
            raise UpstreamError("Failed to get search results") from e

        if not isinstance(data, dict):
            logger.error(f"SERP API returned a {type(data).__name__}, expected an object")
            raise UpstreamError("Failed to get search results")

        result = format_search_response(data)
        logger.info(f"Search answered with {len(result.sources)} sources")
        return result


# Singleton
serp_client = SerpClient()
