from fastapi import APIRouter, HTTPException, Request, status

from daybook.ai.errors import AssistantError
from daybook.ai.records import QuickStartSuggestion, ScheduleProposal
from daybook.api.errors import map_assistant_error
from daybook.api.schemas.tasks import (
    PlanTasksRequest,
    QuickStartRequest,
    RefineTasksRequest,
    ScheduleAdviceResponse,
    SplitTasksRequest,
    TaskDraftsResponse,
)
from daybook.dependency_injection import get_container
from daybook.services.contracts import TaskAssistantProtocol

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.post(
    "/split",
    response_model=TaskDraftsResponse,
    summary="Split free text into task drafts",
)
async def split_tasks(payload: SplitTasksRequest, request: Request) -> TaskDraftsResponse:
    assistant = get_container(request).resolve(TaskAssistantProtocol)
    try:
        drafts = await assistant.split_tasks(payload.content)
    except AssistantError as exc:
        raise map_assistant_error(exc, operation="task split") from exc
    return TaskDraftsResponse(tasks=drafts)


@router.post("/refine", response_model=TaskDraftsResponse, summary="Break broad task drafts into concrete ones")
async def refine_tasks(payload: RefineTasksRequest, request: Request) -> TaskDraftsResponse:
    assistant = get_container(request).resolve(TaskAssistantProtocol)
    try:
        drafts = await assistant.refine_tasks(payload.tasks)
    except AssistantError as exc:
        raise map_assistant_error(exc, operation="task refinement") from exc
    return TaskDraftsResponse(tasks=drafts)


@router.post(
    "/plan",
    response_model=ScheduleProposal,
    summary="Schedule tasks before bedtime",
    description="Returns start/end times for every task, or fails without a partial schedule.",
)
async def plan_tasks(payload: PlanTasksRequest, request: Request) -> ScheduleProposal:
    if not payload.tasks:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="没有进行中的任务需要规划")
    assistant = get_container(request).resolve(TaskAssistantProtocol)
    try:
        return await assistant.plan_tasks(payload.tasks, payload.preferences)
    except AssistantError as exc:
        raise map_assistant_error(exc, operation="task planning") from exc


@router.post("/optimize", response_model=ScheduleAdviceResponse, summary="Advise on task order and pacing")
async def optimize_schedule(payload: PlanTasksRequest, request: Request) -> ScheduleAdviceResponse:
    assistant = get_container(request).resolve(TaskAssistantProtocol)
    try:
        suggestions = await assistant.suggest_schedule_optimization(payload.tasks, payload.preferences)
    except AssistantError as exc:
        raise map_assistant_error(exc, operation="schedule optimization") from exc
    return ScheduleAdviceResponse(suggestions=suggestions)


@router.post("/quick-start", response_model=QuickStartSuggestion, summary="Suggest how to start and finish a task")
async def quick_start(payload: QuickStartRequest, request: Request) -> QuickStartSuggestion:
    assistant = get_container(request).resolve(TaskAssistantProtocol)
    try:
        return await assistant.generate_quick_start_suggestion(payload.task)
    except AssistantError as exc:
        raise map_assistant_error(exc, operation="quick-start suggestion") from exc
