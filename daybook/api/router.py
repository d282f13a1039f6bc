from fastapi import APIRouter

from daybook.api.routers.calendar import router as calendar_router
from daybook.api.routers.focus import router as focus_router
from daybook.api.routers.journal import router as journal_router
from daybook.api.routers.tasks import router as tasks_router

api_router = APIRouter()
api_router.include_router(tasks_router)
api_router.include_router(journal_router)
api_router.include_router(calendar_router)
api_router.include_router(focus_router)
