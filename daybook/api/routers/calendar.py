from datetime import date

from fastapi import APIRouter

from daybook.api.schemas.calendar import CalendarMonthRequest, CalendarMonthResponse
from daybook.services.calendar_view import group_by_day, month_days

router = APIRouter(prefix="/calendar", tags=["calendar"])


@router.post(
    "/month",
    response_model=CalendarMonthResponse,
    summary="Group tasks, journals and insights by day",
)
async def calendar_month(payload: CalendarMonthRequest) -> CalendarMonthResponse:
    days = month_days(date(payload.year, payload.month, 1))
    return CalendarMonthResponse(days=group_by_day(days, payload.tasks, payload.journals, payload.insights))
