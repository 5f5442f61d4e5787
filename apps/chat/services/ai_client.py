"""
AI Response Client - resilient caller for the external conversational backend.

Request:
    POST <base_url>  {"message": "...", "history": [{"role": "user"|"assistant", "content": "..."}]}

Response (first present field wins):
    {"response": "..."} | {"message": "..."} | {"reply": "..."}

Any other well-formed JSON body is answered with the listening prompt.

Each attempt is bounded by a timeout that cancels the in-flight request.
Failed attempts are retried after a backoff of ``base_delay * attempt``.
When every attempt fails the fallback text is returned; ``get_response``
never raises to its caller.
"""

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence

import httpx

from apps.chat.errors import ExternalServiceError
from apps.chat.models import Message, MessageSender

logger = logging.getLogger(__name__)

RESPONSE_FIELDS = ("response", "message", "reply")


def build_history(messages: Sequence[Message]) -> List[Dict[str, str]]:
    """Map persisted messages (chronological) to role-tagged history entries."""
    return [
        {
            "role": "user" if message.sender == MessageSender.USER else "assistant",
            "content": message.content,
        }
        for message in messages
    ]


class AIResponseClient:
    """Bounded-retry client for the external AI responder."""

    def __init__(
        self,
        base_url: str,
        fallback_response: str,
        listening_prompt: str,
        timeout: float = 30.0,
        max_attempts: int = 3,
        base_delay: float = 1.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """
        Args:
            base_url: Full URL of the responder endpoint
            fallback_response: Returned when every attempt fails
            listening_prompt: Returned when a response carries no known text field
            timeout: Per-attempt timeout in seconds
            max_attempts: Total attempts before falling back
            base_delay: Backoff unit in seconds; attempt n waits base_delay * n
            transport: Optional httpx transport (tests use httpx.MockTransport)
            sleep: Awaitable used for backoff waits
        """
        self.base_url = base_url
        self.fallback_response = fallback_response
        self.listening_prompt = listening_prompt
        self.timeout = timeout
        self.max_attempts = max(1, max_attempts)
        self.base_delay = base_delay
        self._transport = transport
        self._sleep = sleep

    def backoff_delay(self, attempt: int) -> float:
        return self.base_delay * attempt

    async def get_response(self, user_text: str, history: List[Dict[str, str]]) -> str:
        payload = {"message": user_text, "history": history}

        async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
            for attempt in range(1, self.max_attempts + 1):
                started = time.monotonic()
                try:
                    data = await asyncio.wait_for(self._call(client, payload), timeout=self.timeout)
                    logger.info(
                        f"AI responder answered on attempt {attempt} in {time.monotonic() - started:.1f}s"
                    )
                    return self._extract_text(data)
                except asyncio.TimeoutError:
                    logger.warning(f"AI responder attempt {attempt}/{self.max_attempts} timed out after {self.timeout}s")
                except ExternalServiceError as e:
                    logger.warning(f"AI responder attempt {attempt}/{self.max_attempts} failed: {e}")
                except Exception as e:
                    logger.error(f"AI responder attempt {attempt}/{self.max_attempts} raised unexpectedly: {e}", exc_info=True)

                if attempt < self.max_attempts:
                    await self._sleep(self.backoff_delay(attempt))

        logger.error(f"AI responder unavailable after {self.max_attempts} attempts, using fallback response")
        return self.fallback_response

    async def _call(self, client: httpx.AsyncClient, payload: dict) -> Any:
        """One attempt. Every transport, status or decoding failure becomes ExternalServiceError."""
        try:
            resp = await client.post(self.base_url, json=payload)
        except httpx.TimeoutException as e:
            raise ExternalServiceError("AI responder timed out", details=str(e), error_type="timeout") from e
        except httpx.HTTPError as e:
            raise ExternalServiceError("AI responder unreachable", details=str(e), error_type="transport") from e

        if not resp.is_success:
            raise ExternalServiceError(
                "AI responder returned an error status",
                details=f"HTTP {resp.status_code}",
                status_code=resp.status_code,
                error_type="status",
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise ExternalServiceError("AI responder sent invalid JSON", details=str(e), error_type="parse") from e

        return data

    def _extract_text(self, data: Any) -> str:
        # A well-formed reply that is not an object carries none of the known fields
        if not isinstance(data, dict):
            return self.listening_prompt
        for field in RESPONSE_FIELDS:
            value = data.get(field)
            if value:
                return str(value)
        return self.listening_prompt
