from pydantic import BaseModel, Field

from daybook.ai.records import ScheduleAdvice, TaskDraft
from daybook.services.models import Todo, UserPreferences


class SplitTasksRequest(BaseModel):
    content: str = Field(..., description="Free-form task list, typically one task per line")


class TaskDraftsResponse(BaseModel):
    tasks: list[TaskDraft] = Field(default_factory=list, description="Drafts ready to be persisted by the caller")


class RefineTasksRequest(BaseModel):
    tasks: list[TaskDraft] = Field(default_factory=list, description="Drafts to break down and estimate")


class PlanTasksRequest(BaseModel):
    tasks: list[Todo] = Field(default_factory=list, description="In-progress tasks to schedule")
    preferences: UserPreferences = Field(default_factory=UserPreferences, description="Sleep time and break length")


class ScheduleAdviceResponse(BaseModel):
    suggestions: list[ScheduleAdvice] = Field(default_factory=list)


class QuickStartRequest(BaseModel):
    task: Todo = Field(..., description="Task the focus session is about")
