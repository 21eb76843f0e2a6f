"""
Unit tests for services/llm_client.py

Tests cover:
- Fragment aggregation in arrival order
- Request parameters sent upstream
- Missing API key fails before any call
- Upstream failures are wrapped, not leaked
- The stream is closed when the consumer is cancelled
"""
import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import httpx
import openai
import pytest

from tripplanner.config import settings
from tripplanner.errors import ConfigurationError, UpstreamError, UpstreamTimeoutError
from tripplanner.services.llm_client import LLMClient


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _chunk(content):
    return SimpleNamespace(choices=[SimpleNamespace(delta=SimpleNamespace(content=content))])


class FakeStream:
    def __init__(self, chunks, error=None, delay=0.0):
        self._chunks = list(chunks)
        self._error = error
        self._delay = delay
        self.closed = False

    def __aiter__(self):
        return self._iter()

    async def _iter(self):
        for chunk in self._chunks:
            if self._delay:
                await asyncio.sleep(self._delay)
            yield chunk
        if self._error is not None:
            raise self._error

    async def close(self):
        self.closed = True


def _client_returning(stream):
    fake = MagicMock()
    fake.chat.completions.create = AsyncMock(return_value=stream)
    return fake


# ---------------------------------------------------------------------------
# complete_streamed
# ---------------------------------------------------------------------------

class TestCompleteStreamed:
    def test_concatenates_in_order(self):
        stream = FakeStream([_chunk('{"over'), _chunk('view"'), _chunk(None), _chunk(": {}}")])
        client = LLMClient(client=_client_returning(stream))

        text = asyncio.run(client.complete_streamed(system="sys", user="hi"))

        assert text == '{"overview": {}}'
        assert stream.closed is True

    def test_skips_chunks_without_choices(self):
        stream = FakeStream([SimpleNamespace(choices=[]), _chunk("a"), _chunk("b")])
        client = LLMClient(client=_client_returning(stream))
        assert asyncio.run(client.complete_streamed(system="sys", user="hi")) == "ab"

    def test_sends_streaming_request(self):
        fake = _client_returning(FakeStream([_chunk("ok")]))
        client = LLMClient(client=fake)

        asyncio.run(client.complete_streamed(system="You are helpful.", user="Plan a trip"))

        kwargs = fake.chat.completions.create.call_args.kwargs
        assert kwargs["stream"] is True
        assert kwargs["model"] == settings.llm_model
        assert kwargs["temperature"] == 0.7
        assert kwargs["max_completion_tokens"] == 1024
        assert kwargs["messages"] == [
            {"role": "system", "content": "You are helpful."},
            {"role": "user", "content": "Plan a trip"},
        ]

    def test_missing_key_fails_before_call(self, monkeypatch):
        monkeypatch.setattr(settings, "groq_api_key", "")
        fake = _client_returning(FakeStream([]))
        client = LLMClient(client=fake)

        with pytest.raises(ConfigurationError, match="GROQ API key not configured"):
            asyncio.run(client.complete_streamed(system="sys", user="hi"))
        fake.chat.completions.create.assert_not_called()


# ---------------------------------------------------------------------------
# failures
# ---------------------------------------------------------------------------

_REQUEST = httpx.Request("POST", "https://api.groq.com/openai/v1/chat/completions")


class TestUpstreamFailures:
    def test_connection_error_is_wrapped(self):
        fake = MagicMock()
        fake.chat.completions.create = AsyncMock(side_effect=openai.APIConnectionError(request=_REQUEST))
        client = LLMClient(client=fake)

        with pytest.raises(UpstreamError, match="Failed to generate travel plan") as exc_info:
            asyncio.run(client.complete_streamed(system="sys", user="hi"))
        assert isinstance(exc_info.value.__cause__, openai.APIConnectionError)

    def test_timeout_maps_to_timeout_error(self):
        fake = MagicMock()
        fake.chat.completions.create = AsyncMock(side_effect=openai.APITimeoutError(request=_REQUEST))
        client = LLMClient(client=fake)

        with pytest.raises(UpstreamTimeoutError):
            asyncio.run(client.complete_streamed(system="sys", user="hi"))

    def test_stream_breaking_midway(self):
        stream = FakeStream([_chunk("partial")], error=openai.APIConnectionError(request=_REQUEST))
        client = LLMClient(client=_client_returning(stream))

        with pytest.raises(UpstreamError):
            asyncio.run(client.complete_streamed(system="sys", user="hi"))
        assert stream.closed is True


class TestCancellation:
    def test_cancel_closes_stream(self):
        stream = FakeStream([_chunk("a")] * 100, delay=0.05)
        client = LLMClient(client=_client_returning(stream))

        async def run():
            task = asyncio.create_task(client.complete_streamed(system="sys", user="hi"))
            await asyncio.sleep(0.12)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        asyncio.run(run())
        assert stream.closed is True


class TestClose:
    def test_close_releases_client(self):
        fake = MagicMock()
        fake.close = AsyncMock()
        client = LLMClient(client=fake)

        asyncio.run(client.close())

        fake.close.assert_awaited_once()
        assert client._client is None

    def test_close_without_client_is_noop(self):
        asyncio.run(LLMClient().close())
