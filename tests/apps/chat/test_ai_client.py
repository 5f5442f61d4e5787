"""
Test cases for the AI responder client
"""
import asyncio
import json

import httpx
import pytest

from apps.chat.models import Message, MessageSender
from apps.chat.services import AIResponseClient, build_history

FALLBACK = "I'm having trouble responding right now."
LISTENING = "I'm listening. Please tell me more."


class SleepRecorder:
    def __init__(self):
        self.delays = []

    async def __call__(self, delay):
        self.delays.append(delay)


def make_client(handler, sleep=None, timeout=1.0, base_delay=1.0):
    return AIResponseClient(
        base_url="http://ai.test/respond",
        fallback_response=FALLBACK,
        listening_prompt=LISTENING,
        timeout=timeout,
        max_attempts=3,
        base_delay=base_delay,
        transport=httpx.MockTransport(handler),
        sleep=sleep or SleepRecorder(),
    )


class TestBuildHistory:
    """Test cases for history role mapping"""

    def test_roles(self):
        messages = [
            Message(session_id="s", sender=MessageSender.SYSTEM, content="Welcome"),
            Message(session_id="s", sender=MessageSender.USER, content="hi"),
            Message(session_id="s", sender=MessageSender.AI, content="hello"),
        ]

        assert build_history(messages) == [
            {"role": "assistant", "content": "Welcome"},
            {"role": "user", "content": "hi"},
            {"role": "assistant", "content": "hello"},
        ]


class TestGetResponse:
    """Test cases for AIResponseClient.get_response"""

    @pytest.mark.asyncio
    async def test_sends_message_and_history(self):
        seen = []

        def handler(request):
            seen.append(json.loads(request.content))
            return httpx.Response(200, json={"response": "ok"})

        history = [{"role": "user", "content": "earlier"}]
        result = await make_client(handler).get_response("now", history)

        assert result == "ok"
        assert seen == [{"message": "now", "history": history}]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body,expected", [
        ({"response": "a", "message": "b", "reply": "c"}, "a"),
        ({"message": "b", "reply": "c"}, "b"),
        ({"reply": "c"}, "c"),
        ({"response": "", "reply": "c"}, "c"),
        ({"other": "x"}, LISTENING),
    ])
    async def test_field_precedence(self, body, expected):
        result = await make_client(lambda request: httpx.Response(200, json=body)).get_response("hi", [])

        assert result == expected

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", [b'["hello"]', b'"text"', b"null", b"42"])
    async def test_non_object_body_gets_listening_prompt(self, raw):
        """A successful reply that is not a JSON object is answered once, not retried"""
        calls = []
        sleep = SleepRecorder()

        def handler(request):
            calls.append(request)
            return httpx.Response(200, content=raw, headers={"Content-Type": "application/json"})

        result = await make_client(handler, sleep=sleep).get_response("hi", [])

        assert result == LISTENING
        assert len(calls) == 1
        assert sleep.delays == []

    @pytest.mark.asyncio
    async def test_retries_then_falls_back(self):
        """Three failed attempts, linear backoff between them, then the fallback"""
        calls = []
        sleep = SleepRecorder()

        def handler(request):
            calls.append(request)
            return httpx.Response(500, json={"error": "boom"})

        result = await make_client(handler, sleep=sleep).get_response("hi", [])

        assert result == FALLBACK
        assert len(calls) == 3
        assert sleep.delays == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_recovers_on_second_attempt(self):
        attempts = {"count": 0}
        sleep = SleepRecorder()

        def handler(request):
            attempts["count"] += 1
            if attempts["count"] == 1:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(200, json={"reply": "back online"})

        result = await make_client(handler, sleep=sleep).get_response("hi", [])

        assert result == "back online"
        assert attempts["count"] == 2
        assert sleep.delays == [1.0]

    @pytest.mark.asyncio
    async def test_invalid_json_counts_as_failure(self):
        def handler(request):
            return httpx.Response(200, content=b"not json")

        result = await make_client(handler).get_response("hi", [])

        assert result == FALLBACK

    @pytest.mark.asyncio
    async def test_timeout_cancels_attempt(self):
        """A hung backend is abandoned after the per-attempt timeout"""
        calls = []

        async def handler(request):
            calls.append(request)
            await asyncio.sleep(5)
            return httpx.Response(200, json={"response": "too late"})

        result = await make_client(handler, timeout=0.05).get_response("hi", [])

        assert result == FALLBACK
        assert len(calls) == 3

    def test_backoff_delay(self):
        client = make_client(lambda request: httpx.Response(200, json={}), base_delay=0.5)

        assert [client.backoff_delay(n) for n in (1, 2, 3)] == [0.5, 1.0, 1.5]
