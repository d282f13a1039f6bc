from __future__ import annotations

import punq
from fastapi import Request

from daybook.ai.client import ChatCompletionClient
from daybook.ai.rate_limiter import RequestLimiter
from daybook.core.settings import Settings
from daybook.services.contracts import (
    ChatCompletionClientProtocol,
    JournalAssistantProtocol,
    RequestLimiterProtocol,
    TaskAssistantProtocol,
)
from daybook.services.journal_assistant import JournalAssistant
from daybook.services.task_assistant import TaskAssistant


def _build_chat_client(settings: Settings, limiter: RequestLimiter) -> ChatCompletionClient:
    if not settings.ai_api_key:
        raise ValueError("AI_API_KEY required to build the chat completion client")
    return ChatCompletionClient(
        api_key=settings.ai_api_key,
        base_url=settings.ai_api_base_url,
        model=settings.ai_model,
        limiter=limiter,
        temperature=settings.ai_temperature,
        max_tokens=settings.ai_max_tokens,
        timeout_seconds=settings.ai_timeout_seconds,
        max_attempts=settings.ai_max_attempts,
        backoff_base_seconds=settings.ai_backoff_base_seconds,
        backoff_max_seconds=settings.ai_backoff_max_seconds,
    )


def build_container(settings: Settings) -> punq.Container:
    container = punq.Container()
    container.register(Settings, instance=settings)

    container.register(
        RequestLimiterProtocol,
        factory=lambda: RequestLimiter(min_interval_seconds=settings.ai_min_request_interval_seconds),
        scope=punq.Scope.singleton,
    )
    container.register(
        ChatCompletionClientProtocol,
        factory=lambda: _build_chat_client(settings, container.resolve(RequestLimiterProtocol)),
        scope=punq.Scope.singleton,
    )
    container.register(
        TaskAssistantProtocol,
        factory=lambda: TaskAssistant(client=container.resolve(ChatCompletionClientProtocol)),
        scope=punq.Scope.singleton,
    )
    container.register(
        JournalAssistantProtocol,
        factory=lambda: JournalAssistant(client=container.resolve(ChatCompletionClientProtocol)),
        scope=punq.Scope.singleton,
    )

    return container


def get_container(request: Request) -> punq.Container:
    return request.app.state.container
