from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

import httpx

from daybook.ai.errors import MalformedResponseError, RequestFailedError, UpstreamStatusError
from daybook.ai.parsing import strip_code_fences
from daybook.ai.rate_limiter import RequestLimiter
from daybook.ai.records import PromptMessage

logger = logging.getLogger(__name__)

_RETRYABLE_ERRORS = (httpx.HTTPError, TimeoutError, UpstreamStatusError, MalformedResponseError)


class ChatCompletionClient:
    """Client for an OpenAI-compatible ``/chat/completions`` endpoint.

    Every call waits on the shared limiter, then makes up to ``max_attempts``
    attempts with capped exponential backoff between them. The reply text is
    returned with code fences removed.
    """

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str,
        model: str,
        limiter: RequestLimiter,
        temperature: float = 0.3,
        max_tokens: int = 2048,
        timeout_seconds: float = 60.0,
        max_attempts: int = 5,
        backoff_base_seconds: float = 1.0,
        backoff_max_seconds: float = 10.0,
        client: httpx.AsyncClient | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._model = model
        self._limiter = limiter
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._timeout_seconds = timeout_seconds
        self._max_attempts = max_attempts
        self._backoff_base_seconds = backoff_base_seconds
        self._backoff_max_seconds = backoff_max_seconds
        self._sleep = sleep
        self._headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {api_key}",
        }
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout_seconds)

    async def close(self) -> None:
        await self._client.aclose()

    def backoff_delay(self, attempt: int) -> float:
        """Delay before retrying after the zero-based ``attempt`` failed."""
        return min(self._backoff_base_seconds * 2**attempt, self._backoff_max_seconds)

    async def execute(self, messages: Sequence[PromptMessage]) -> str:
        await self._limiter.wait_for_next()
        payload = self._build_payload(messages)
        last_error: Exception | None = None

        for attempt in range(self._max_attempts):
            start = time.perf_counter()
            try:
                async with asyncio.timeout(self._timeout_seconds):
                    response = await self._client.post("/chat/completions", json=payload, headers=self._headers)
                content = self._content_from_response(response)
            except _RETRYABLE_ERRORS as exc:
                last_error = exc
                final_attempt = attempt + 1 >= self._max_attempts
                self._log_attempt_failure(exc, attempt=attempt + 1, final_attempt=final_attempt)
                if final_attempt:
                    break
                await self._sleep(self.backoff_delay(attempt))
                continue

            logger.debug(
                "chat completion",
                extra={
                    "model": self._model,
                    "attempt": attempt + 1,
                    "latency_ms": int((time.perf_counter() - start) * 1000),
                },
            )
            return content

        raise RequestFailedError(self._max_attempts, last_error) from last_error

    def _build_payload(self, messages: Sequence[PromptMessage]) -> dict[str, Any]:
        return {
            "model": self._model,
            "messages": [message.model_dump() for message in messages],
            "temperature": self._temperature,
            "max_tokens": self._max_tokens,
            "stream": False,
            "presence_penalty": 0,
            "frequency_penalty": 0,
            "top_p": 0.95,
        }

    def _content_from_response(self, response: httpx.Response) -> str:
        if not response.is_success:
            raise UpstreamStatusError(status_code=response.status_code, message=self._error_message(response))

        try:
            data = response.json()
        except ValueError as exc:
            raise MalformedResponseError("chat completion reply is not JSON") from exc

        choices = data.get("choices") if isinstance(data, dict) else None
        content: Any = None
        if isinstance(choices, list) and choices and isinstance(choices[0], dict):
            message = choices[0].get("message")
            if isinstance(message, dict):
                content = message.get("content")

        text = strip_code_fences(content) if isinstance(content, str) else ""
        if not text:
            raise MalformedResponseError("chat completion reply has no usable content")
        return text

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            body = None
        error = body.get("error") if isinstance(body, dict) else None
        message = error.get("message") if isinstance(error, dict) else None
        return message if isinstance(message, str) and message else "unknown error"

    def _log_attempt_failure(self, exc: Exception, *, attempt: int, final_attempt: bool) -> None:
        level = logging.ERROR if final_attempt else logging.WARNING
        logger.log(
            level,
            "chat completion attempt failed",
            extra={
                "model": self._model,
                "attempt": attempt,
                "max_attempts": self._max_attempts,
                "error_type": exc.__class__.__name__,
                "error_message": str(exc) or None,
            },
        )
