from pydantic import BaseModel, Field

from daybook.services.models import CalendarDay, JournalEntry, StoredInsight, Todo


class CalendarMonthRequest(BaseModel):
    year: int = Field(..., ge=1, le=9999)
    month: int = Field(..., ge=1, le=12)
    tasks: list[Todo] = Field(default_factory=list)
    journals: list[JournalEntry] = Field(default_factory=list)
    insights: list[StoredInsight] = Field(default_factory=list)


class CalendarMonthResponse(BaseModel):
    days: list[CalendarDay] = Field(default_factory=list, description="One entry per day of the month, in order")
