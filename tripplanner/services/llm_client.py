"""Streaming LLM client for Groq's OpenAI-compatible chat completions."""

import logging
from collections.abc import AsyncIterator

import openai
from openai import AsyncOpenAI

from tripplanner.config import settings
from tripplanner.errors import ConfigurationError, UpstreamError, UpstreamTimeoutError

logger = logging.getLogger(__name__)
stream_logger = logging.getLogger("tripplanner.stream")


class LLMClient:
    """Async chat-completion client that consumes the response as a stream."""

    def __init__(self, client: AsyncOpenAI | None = None):
        self._client = client

    def _get_client(self) -> AsyncOpenAI:
        if not settings.groq_api_key:
            raise ConfigurationError("GROQ API key not configured")
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=settings.groq_api_key,
                base_url=settings.llm_base_url,
                timeout=settings.llm_timeout_seconds,
                max_retries=0,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None

    async def stream_completion(
        self,
        system: str,
        user: str,
        *,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> AsyncIterator[str]:
        """Yield text fragments in arrival order until the stream ends.

        Raises:
            ConfigurationError if no API key is set (before any network I/O).
            UpstreamError if the call fails or the stream breaks midway.
        """
        client = self._get_client()
        try:
            stream = await client.chat.completions.create(
                model=settings.llm_model,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": user},
                ],
                temperature=settings.llm_temperature if temperature is None else temperature,
                max_completion_tokens=max_tokens or settings.llm_max_tokens,
                stream=True,
            )
        except openai.APITimeoutError as e:
            logger.error(f"LLM request timed out: {e}")
            raise UpstreamTimeoutError() from e
        except openai.APIError as e:
            logger.error(f"LLM request failed: {e}")
            raise UpstreamError("Failed to generate travel plan") from e

        try:
            async for chunk in stream:
                if not chunk.choices:
                    continue
                delta = chunk.choices[0].delta
                content = (delta.content if delta else None) or ""
                if content:
                    stream_logger.debug(content)
                    yield content
        except openai.APITimeoutError as e:
            logger.error(f"LLM stream timed out: {e}")
            raise UpstreamTimeoutError() from e
        except openai.APIError as e:
            logger.error(f"LLM stream broke off: {e}")
            raise UpstreamError("Failed to generate travel plan") from e
        finally:
            await stream.close()

    async def complete_streamed(self, system: str, user: str, **kwargs) -> str:
        """Run one streaming completion and return the concatenated text."""
        parts: list[str] = []
        async for fragment in self.stream_completion(system, user, **kwargs):
            parts.append(fragment)
        text = "".join(parts)
        logger.info(f"LLM completion finished: {len(parts)} fragments, {len(text)} chars")
        return text


# Singleton
llm_client = LLMClient()
