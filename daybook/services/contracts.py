from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from daybook.ai.records import (
    JournalInsight,
    PromptMessage,
    QuickStartSuggestion,
    ScheduleAdvice,
    ScheduleProposal,
    TaskDraft,
)
from daybook.services.models import Todo, UserPreferences


class RequestLimiterProtocol(Protocol):
    """Process-wide gate spacing outbound model requests."""

    async def wait_for_next(self) -> None:
        """Suspend until the minimum interval since the previous request has passed."""


class ChatCompletionClientProtocol(Protocol):
    """Text-generation contract the assistants depend on."""

    async def execute(self, messages: Sequence[PromptMessage]) -> str:
        """Send one conversation and return the fence-stripped reply text."""

    async def close(self) -> None:
        """Release network resources during application shutdown."""


class TaskAssistantProtocol(Protocol):
    """AI transforms over the to-do list."""

    async def split_tasks(self, content: str) -> list[TaskDraft]:
        """Turn free text into task drafts; an unusable reply yields no drafts."""

    async def plan_tasks(self, tasks: Sequence[Todo], preferences: UserPreferences) -> ScheduleProposal:
        """Assign start/end times to ``tasks`` as one all-or-nothing proposal."""

    async def generate_quick_start_suggestion(self, task: Todo) -> QuickStartSuggestion:
        """Suggest a one-minute first step and completion tips for ``task``."""

    async def refine_tasks(self, tasks: Sequence[TaskDraft]) -> list[TaskDraft]:
        """Break broad drafts into concrete ones with estimates and priorities."""

    async def suggest_schedule_optimization(
        self,
        tasks: Sequence[Todo],
        preferences: UserPreferences,
    ) -> list[ScheduleAdvice]:
        """Return free-text advice on ordering and pacing ``tasks``."""


class JournalAssistantProtocol(Protocol):
    """AI analysis of journal text."""

    async def analyze_journal(self, content: str) -> JournalInsight:
        """Analyze journal text into a structured insight."""

    async def analyze_journal_fields(self, content: str) -> list[str]:
        """Analyze journal text into the flat 11-slot field sequence."""
