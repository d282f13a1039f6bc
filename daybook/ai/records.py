from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_ACTION_SUGGESTIONS: tuple[str, ...] = (
    "制定每日任务清单，合理分配时间",
    "建立规律的作息时间表",
    "适当休息和运动",
    "与朋友或家人交流分享",
)
DEFAULT_MINDFULNESS_TIPS: tuple[str, ...] = (
    "每天进行10分钟的深呼吸练习",
    "保持正念，专注当下的感受",
)
MAX_ACTION_SUGGESTIONS = 4
MAX_MINDFULNESS_TIPS = 2


class PromptMessage(BaseModel):
    role: Literal["system", "user"]
    content: str


class SubtaskDraft(BaseModel):
    id: str
    title: str
    completed: bool = False

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class TaskDraft(BaseModel):
    """Task proposed by the model, ready for the caller to persist."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=1)
    description: str | None = None
    priority: int = Field(default=2, ge=1, le=3, description="1 is highest, 3 is lowest")
    estimated_time_minutes: int | None = Field(default=None, ge=0, alias="estimated_time")
    subtasks: list[SubtaskDraft] = Field(default_factory=list)

    @field_validator("subtasks", mode="before")
    @classmethod
    def _none_subtasks(cls, value: Any) -> Any:
        return [] if value is None else value


class ScheduledTask(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    start_time: datetime
    end_time: datetime
    estimated_time_minutes: int = Field(..., alias="estimated_time")
    priority: int

    @model_validator(mode="after")
    def _ordered(self) -> ScheduledTask:
        if self.end_time < self.start_time:
            raise ValueError("end_time precedes start_time")
        return self


class ScheduleProposal(BaseModel):
    tasks: list[ScheduledTask]
    suggestion: str
    planning_logic: str


class QuickStartSuggestion(BaseModel):
    quick_start: str
    completion: str


class ScheduleAdvice(BaseModel):
    type: Literal["optimization", "scheduling", "breakdown"]
    content: str


class JournalInsight(BaseModel):
    """Structured reading of a journal entry."""

    emotional_state: str = ""
    emotion_cause: str = ""
    management_tips: str = ""
    thinking_patterns: str = ""
    cognitive_biases: str = ""
    action_suggestions: list[str] = Field(default_factory=lambda: list(DEFAULT_ACTION_SUGGESTIONS))
    mindfulness_tips: list[str] = Field(default_factory=lambda: list(DEFAULT_MINDFULNESS_TIPS))

    def as_fields(self) -> list[str]:
        """Flatten into the fixed 11-slot order used by positional callers.

        Slots 0-4 hold the scalar fields, 5-8 the action suggestions and 9-10
        the mindfulness tips. Missing list slots are filled with empty strings.
        """
        actions = self.action_suggestions[:MAX_ACTION_SUGGESTIONS]
        tips = self.mindfulness_tips[:MAX_MINDFULNESS_TIPS]
        return [
            self.emotional_state,
            self.emotion_cause,
            self.management_tips,
            self.thinking_patterns,
            self.cognitive_biases,
            *actions,
            *([""] * (MAX_ACTION_SUGGESTIONS - len(actions))),
            *tips,
            *([""] * (MAX_MINDFULNESS_TIPS - len(tips))),
        ]
