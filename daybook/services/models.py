from __future__ import annotations

import datetime as dt
from typing import Literal

from pydantic import BaseModel, Field

from daybook.ai.records import JournalInsight, SubtaskDraft

TaskStatus = Literal["pending", "in_progress", "completed"]


class Todo(BaseModel):
    """A persisted task as the client holds it."""

    id: str
    title: str
    description: str | None = None
    due_date: dt.date | None = None
    priority: int = Field(default=2, ge=1, le=3)
    status: TaskStatus = "pending"
    estimated_time: int | None = Field(default=None, ge=0, description="Estimated effort in minutes")
    start_time: dt.datetime | None = None
    end_time: dt.datetime | None = None
    subtasks: list[SubtaskDraft] = Field(default_factory=list)
    user_id: str | None = None


class UserPreferences(BaseModel):
    wake_time: str = Field(default="07:00", pattern=r"^\d{2}:\d{2}$")
    sleep_time: str = Field(default="23:00", pattern=r"^\d{2}:\d{2}$")
    focus_duration: int = Field(default=25, gt=0, description="Focus block length in minutes")
    break_duration: int = Field(default=5, ge=0, description="Break between tasks in minutes")
    daily_focus_goal: int = Field(default=240, ge=0, description="Daily focus target in minutes")


class JournalEntry(BaseModel):
    id: str
    date: dt.date
    content: str = ""


class StoredInsight(JournalInsight):
    id: str
    journal_id: str
    date: dt.date


class JournalSections(BaseModel):
    reflection: str = ""
    emotion: str = ""
    mindfulness: str = ""

    def combined_text(self) -> str:
        return "\n\n".join(part for part in (self.reflection, self.emotion, self.mindfulness) if part.strip())


class CalendarDay(BaseModel):
    date: dt.date
    tasks: list[Todo] = Field(default_factory=list)
    journal: JournalEntry | None = None
    insight: StoredInsight | None = None


class FocusRing(BaseModel):
    label: str
    remaining_seconds: int
    progress: float
    stroke_dasharray: float
    stroke_dashoffset: float
