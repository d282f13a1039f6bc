from daybook.api.schemas.calendar import CalendarMonthRequest, CalendarMonthResponse
from daybook.api.schemas.journal import JournalAnalysisRequest, JournalAnalysisResponse
from daybook.api.schemas.tasks import (
    PlanTasksRequest,
    QuickStartRequest,
    RefineTasksRequest,
    ScheduleAdviceResponse,
    SplitTasksRequest,
    TaskDraftsResponse,
)

__all__ = [
    "CalendarMonthRequest",
    "CalendarMonthResponse",
    "JournalAnalysisRequest",
    "JournalAnalysisResponse",
    "PlanTasksRequest",
    "QuickStartRequest",
    "RefineTasksRequest",
    "ScheduleAdviceResponse",
    "SplitTasksRequest",
    "TaskDraftsResponse",
]
