from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from datetime import datetime, timedelta
from typing import Any

from pydantic import ValidationError

from daybook.ai.errors import EmptyInputError, InvalidScheduleError, ResponseParseError
from daybook.ai.parsing import parse_json, strip_control_characters
from daybook.ai.prompts import (
    build_plan_tasks_prompt,
    build_quick_start_prompt,
    build_refine_tasks_prompt,
    build_schedule_optimization_prompt,
    build_split_tasks_prompt,
)
from daybook.ai.records import QuickStartSuggestion, ScheduleAdvice, ScheduledTask, ScheduleProposal, TaskDraft
from daybook.services.contracts import ChatCompletionClientProtocol
from daybook.services.models import Todo, UserPreferences

logger = logging.getLogger(__name__)

QUICK_START_FALLBACK = "准备好工具，立即开始行动"
COMPLETION_FALLBACK = "• 专注当前步骤\n• 及时记录进度\n• 确保完成质量"
DEFAULT_ESTIMATED_MINUTES = 30
DEFAULT_PRIORITY = 2
MAX_PRIORITY = 3


def _local_now() -> datetime:
    return datetime.now().astimezone()


def _has_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _positive_int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        number = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return default
    return number if number > 0 else default


def _priority(value: Any) -> int:
    priority = _positive_int(value, DEFAULT_PRIORITY)
    return priority if priority <= MAX_PRIORITY else DEFAULT_PRIORITY


def _parse_timestamp(value: Any, now: datetime) -> datetime:
    if not isinstance(value, str):
        raise InvalidScheduleError(f"invalid timestamp {value!r}")
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError as exc:
        raise InvalidScheduleError(f"invalid timestamp {value!r}") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=now.tzinfo)
    return parsed


class TaskAssistant:
    """Use-case service turning to-do content into model-backed drafts, schedules and tips."""

    def __init__(self, client: ChatCompletionClientProtocol, now: Callable[[], datetime] = _local_now) -> None:
        self._client = client
        self._now = now

    async def split_tasks(self, content: str) -> list[TaskDraft]:
        if not content.strip():
            raise EmptyInputError("task content is empty")

        logger.info("splitting tasks", extra={"content_chars": len(content)})
        reply = await self._client.execute(build_split_tasks_prompt(content))
        parsed = parse_json(reply)
        if not isinstance(parsed, list):
            logger.info("split reply is not a task array", extra={"reply_type": type(parsed).__name__})
            return []
        return self._drafts_from(parsed)

    async def plan_tasks(self, tasks: Sequence[Todo], preferences: UserPreferences) -> ScheduleProposal:
        now = self._current_time()
        reply = await self._client.execute(build_plan_tasks_prompt(tasks, preferences, now))
        parsed = parse_json(strip_control_characters(reply))
        if not isinstance(parsed, dict):
            raise ResponseParseError("schedule reply is not a JSON object")

        entries = parsed.get("tasks")
        suggestion = parsed.get("suggestion")
        planning_logic = parsed.get("planning_logic") or parsed.get("planningLogic")
        if not isinstance(entries, list) or not entries or not _has_text(suggestion) or not _has_text(planning_logic):
            raise ResponseParseError("schedule reply is missing tasks, suggestion or planning_logic")

        known_ids = {task.id for task in tasks}
        scheduled = [self._scheduled_task(entry, known_ids=known_ids, now=now) for entry in entries]
        logger.info("planned tasks", extra={"task_count": len(scheduled)})
        return ScheduleProposal(tasks=scheduled, suggestion=suggestion, planning_logic=planning_logic)

    async def generate_quick_start_suggestion(self, task: Todo) -> QuickStartSuggestion:
        reply = await self._client.execute(build_quick_start_prompt(task))
        parsed = parse_json(reply)
        fields = parsed if isinstance(parsed, dict) else {}

        quick_start = fields.get("quickStart") or fields.get("quick_start")
        completion = fields.get("completion")
        return QuickStartSuggestion(
            quick_start=quick_start if _has_text(quick_start) else QUICK_START_FALLBACK,
            completion=completion if _has_text(completion) else COMPLETION_FALLBACK,
        )

    async def refine_tasks(self, tasks: Sequence[TaskDraft]) -> list[TaskDraft]:
        if not tasks:
            return []

        reply = await self._client.execute(build_refine_tasks_prompt(tasks))
        parsed = parse_json(reply)
        items = parsed.get("tasks") if isinstance(parsed, dict) else None
        if not isinstance(items, list):
            raise ResponseParseError("refine reply has no tasks array")
        return self._drafts_from(items)

    async def suggest_schedule_optimization(
        self,
        tasks: Sequence[Todo],
        preferences: UserPreferences,
    ) -> list[ScheduleAdvice]:
        if not tasks:
            return []

        reply = await self._client.execute(build_schedule_optimization_prompt(tasks, preferences))
        return [ScheduleAdvice(type="optimization", content=reply.strip())]

    def _current_time(self) -> datetime:
        now = self._now()
        return now if now.tzinfo is not None else now.astimezone()

    @staticmethod
    def _drafts_from(items: Iterable[Any]) -> list[TaskDraft]:
        try:
            return [TaskDraft.model_validate(item) for item in items]
        except ValidationError as exc:
            raise ResponseParseError(f"model returned invalid task drafts ({exc.error_count()} errors)") from exc

    @staticmethod
    def _scheduled_task(entry: Any, *, known_ids: set[str], now: datetime) -> ScheduledTask:
        if not isinstance(entry, dict):
            raise InvalidScheduleError("schedule entry is not an object")

        task_id = entry.get("id")
        if task_id is None or str(task_id) not in known_ids:
            raise InvalidScheduleError(f"schedule entry references unknown task {task_id!r}")

        estimated = _positive_int(entry.get("estimated_time"), DEFAULT_ESTIMATED_MINUTES)
        priority = _priority(entry.get("priority"))
        start = _parse_timestamp(entry["start_time"], now) if entry.get("start_time") else now
        try:
            end = _parse_timestamp(entry["end_time"], now) if entry.get("end_time") else start + timedelta(minutes=estimated)
            ordered = end >= start
        except OverflowError as exc:
            raise InvalidScheduleError(f"task {task_id!r} has an out-of-range time span") from exc
        if not ordered:
            raise InvalidScheduleError(f"task {task_id!r} ends before it starts")

        return ScheduledTask(
            id=str(task_id),
            start_time=start,
            end_time=end,
            estimated_time=estimated,
            priority=priority,
        )
