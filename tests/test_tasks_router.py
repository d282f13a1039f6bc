from __future__ import annotations

import httpx
import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient

from daybook.ai.errors import EmptyInputError, InvalidScheduleError, RequestFailedError, ResponseParseError
from daybook.ai.records import QuickStartSuggestion, ScheduleAdvice, TaskDraft
from daybook.api.router import api_router
from daybook.api.routers import tasks as tasks_router
from daybook.api.schemas.tasks import PlanTasksRequest, QuickStartRequest, SplitTasksRequest
from daybook.services.contracts import TaskAssistantProtocol
from daybook.services.models import Todo
from tests.conftest import build_test_container, build_test_request


class FakeTaskAssistant:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.calls: list[tuple[str, object]] = []

    def _record(self, name: str, value: object) -> None:
        self.calls.append((name, value))
        if self.error is not None:
            raise self.error

    async def split_tasks(self, content: str) -> list[TaskDraft]:
        self._record("split", content)
        return [TaskDraft(title=line) for line in content.splitlines()]

    async def refine_tasks(self, tasks):
        self._record("refine", tasks)
        return list(tasks)

    async def plan_tasks(self, tasks, preferences):
        self._record("plan", tasks)
        raise AssertionError("plan result not scripted")

    async def suggest_schedule_optimization(self, tasks, preferences) -> list[ScheduleAdvice]:
        self._record("optimize", tasks)
        return [ScheduleAdvice(type="optimization", content="先做重要的事")]

    async def generate_quick_start_suggestion(self, task) -> QuickStartSuggestion:
        self._record("quick_start", task)
        return QuickStartSuggestion(quick_start="打开文档", completion="• 写完")


def _request(assistant: FakeTaskAssistant):
    return build_test_request(build_test_container({TaskAssistantProtocol: assistant}))


@pytest.mark.asyncio
async def test_split_tasks_returns_drafts_from_assistant() -> None:
    assistant = FakeTaskAssistant()

    response = await tasks_router.split_tasks(payload=SplitTasksRequest(content="买菜\n健身"), request=_request(assistant))

    assert [draft.title for draft in response.tasks] == ["买菜", "健身"]
    assert assistant.calls == [("split", "买菜\n健身")]


@pytest.mark.asyncio
async def test_plan_tasks_rejects_empty_task_list_without_calling_assistant() -> None:
    assistant = FakeTaskAssistant()

    with pytest.raises(HTTPException) as exc_info:
        await tasks_router.plan_tasks(payload=PlanTasksRequest(tasks=[]), request=_request(assistant))

    assert exc_info.value.status_code == 400
    assert exc_info.value.detail == "没有进行中的任务需要规划"
    assert assistant.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("error", "status_code"),
    [
        (EmptyInputError("task content is empty"), 400),
        (ResponseParseError("model reply is not valid JSON"), 502),
        (InvalidScheduleError("task 't1' ends before it starts"), 502),
        (RequestFailedError(5, TimeoutError()), 504),
        (RequestFailedError(5, httpx.ConnectError("refused")), 502),
    ],
)
async def test_assistant_errors_map_to_http_status(error: Exception, status_code: int) -> None:
    assistant = FakeTaskAssistant(error=error)
    payload = PlanTasksRequest(tasks=[Todo(id="t1", title="写报告")])

    with pytest.raises(HTTPException) as exc_info:
        await tasks_router.plan_tasks(payload=payload, request=_request(assistant))

    assert exc_info.value.status_code == status_code
    assert str(error) in exc_info.value.detail
    assert exc_info.value.__cause__ is error


@pytest.mark.asyncio
async def test_quick_start_returns_assistant_suggestion() -> None:
    assistant = FakeTaskAssistant()
    task = Todo(id="t1", title="写报告", estimated_time=60)

    response = await tasks_router.quick_start(payload=QuickStartRequest(task=task), request=_request(assistant))

    assert response.quick_start == "打开文档"
    assert assistant.calls == [("quick_start", task)]


def test_api_tasks_endpoints_round_trip_json() -> None:
    assistant = FakeTaskAssistant()
    container = build_test_container({TaskAssistantProtocol: assistant})

    app = FastAPI()

    @app.middleware("http")
    async def attach_container(request, call_next):
        request.app.state.container = container
        return await call_next(request)

    app.include_router(api_router, prefix="/api")

    with TestClient(app) as client:
        split = client.post("/api/tasks/split", json={"content": "买菜"})
        refine = client.post("/api/tasks/refine", json={"tasks": [{"title": "报告", "estimated_time": 90}]})
        optimize = client.post("/api/tasks/optimize", json={"tasks": [{"id": "t1", "title": "写报告"}]})
        invalid = client.post("/api/tasks/split", json={})

    assert split.status_code == 200
    assert split.json()["tasks"][0]["title"] == "买菜"
    assert split.json()["tasks"][0]["priority"] == 2
    assert refine.json()["tasks"][0]["estimated_time"] == 90
    assert optimize.json() == {"suggestions": [{"type": "optimization", "content": "先做重要的事"}]}
    assert invalid.status_code == 422
