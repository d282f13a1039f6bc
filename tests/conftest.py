"""Shared test utilities and fixtures for daybook tests."""

from __future__ import annotations

from types import SimpleNamespace

import pytest
import punq

from daybook.ai.records import PromptMessage
from daybook.core.settings import Settings


class ScriptedChatClient:
    """Chat client fake returning scripted replies in order and recording every prompt."""

    def __init__(self, *replies: str | Exception) -> None:
        self.replies: list[str | Exception] = list(replies)
        self.calls: list[list[PromptMessage]] = []
        self.closed = False

    async def execute(self, messages) -> str:
        self.calls.append(list(messages))
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    async def close(self) -> None:
        self.closed = True


class RecordingSleep:
    """Awaitable sleep replacement that records requested delays without waiting."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def test_settings() -> Settings:
    return Settings(AI_API_KEY="test-key")


def build_test_request(container: punq.Container, *, headers: dict[str, str] | None = None):
    """Build a request-shaped object using a real punq container in app state."""

    return SimpleNamespace(
        app=SimpleNamespace(state=SimpleNamespace(container=container)),
        headers=headers or {},
    )


def build_test_container(bindings: dict[object, object]) -> punq.Container:
    """Create a punq container and bind protocol/service keys to test doubles."""

    container = punq.Container()
    for key, value in bindings.items():
        container.register(key, instance=value)
    return container
