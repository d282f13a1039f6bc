from fastapi import APIRouter, Query

from daybook.services.focus_ring import ring_state
from daybook.services.models import FocusRing

router = APIRouter(prefix="/focus", tags=["focus"])


@router.get("/ring", response_model=FocusRing, summary="Countdown ring state for a focus session")
async def focus_ring(
    duration_minutes: int = Query(default=25, ge=1, le=600),
    remaining_seconds: int = Query(..., ge=0),
) -> FocusRing:
    return ring_state(duration_minutes, remaining_seconds)
