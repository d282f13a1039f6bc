"""Unit tests for journal, calendar and focus router response shaping."""

from __future__ import annotations

import json

import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient

from daybook.ai.errors import EmptyInputError, RequestFailedError
from daybook.ai.records import JournalInsight
from daybook.api.router import api_router
from daybook.api.routers import calendar as calendar_router
from daybook.api.routers import journal as journal_router
from daybook.api.schemas.calendar import CalendarMonthRequest
from daybook.api.schemas.journal import JournalAnalysisRequest
from daybook.services.contracts import JournalAssistantProtocol
from daybook.services.models import JournalSections, Todo
from tests.conftest import build_test_container, build_test_request


class FakeJournalAssistant:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.contents: list[str] = []

    async def analyze_journal(self, content: str) -> JournalInsight:
        self.contents.append(content)
        if self.error is not None:
            raise self.error
        if not content.strip():
            raise EmptyInputError("journal content is empty")
        return JournalInsight(emotional_state="平静", action_suggestions=["散步"], mindfulness_tips=["深呼吸"])

    async def analyze_journal_fields(self, content: str) -> list[str]:
        return (await self.analyze_journal(content)).as_fields()


def _request(assistant: FakeJournalAssistant):
    return build_test_request(build_test_container({JournalAssistantProtocol: assistant}))


@pytest.mark.asyncio
async def test_analyze_journal_returns_insight_and_flat_fields() -> None:
    assistant = FakeJournalAssistant()

    response = await journal_router.analyze_journal(
        payload=JournalAnalysisRequest(content="今天散步了"),
        request=_request(assistant),
    )

    assert response.insight.emotional_state == "平静"
    assert response.field_values == ["平静", "", "", "", "", "散步", "", "", "", "深呼吸", ""]
    assert assistant.contents == ["今天散步了"]


@pytest.mark.asyncio
async def test_analyze_journal_joins_sections_before_analysis() -> None:
    assistant = FakeJournalAssistant()
    payload = JournalAnalysisRequest(sections=JournalSections(reflection="完成报告", mindfulness="呼吸练习"))

    await journal_router.analyze_journal(payload=payload, request=_request(assistant))

    assert assistant.contents == ["完成报告\n\n呼吸练习"]


@pytest.mark.asyncio
async def test_analyze_journal_unpacks_stored_section_json() -> None:
    assistant = FakeJournalAssistant()
    stored = json.dumps({"reflection": "加班", "emotion": "疲惫"}, ensure_ascii=False)

    await journal_router.analyze_journal(payload=JournalAnalysisRequest(content=stored), request=_request(assistant))

    assert assistant.contents == ["加班\n\n疲惫"]


@pytest.mark.asyncio
async def test_analyze_journal_maps_blank_content_to_bad_request() -> None:
    with pytest.raises(HTTPException) as exc_info:
        await journal_router.analyze_journal(
            payload=JournalAnalysisRequest(content="   "),
            request=_request(FakeJournalAssistant()),
        )

    assert exc_info.value.status_code == 400


@pytest.mark.asyncio
async def test_analyze_journal_maps_exhausted_retries_to_gateway_timeout() -> None:
    assistant = FakeJournalAssistant(error=RequestFailedError(5, TimeoutError()))

    with pytest.raises(HTTPException) as exc_info:
        await journal_router.analyze_journal(payload=JournalAnalysisRequest(content="日记"), request=_request(assistant))

    assert exc_info.value.status_code == 504
    assert "after 5 attempts" in exc_info.value.detail


def test_journal_request_requires_content_or_sections() -> None:
    with pytest.raises(ValueError):
        JournalAnalysisRequest()


@pytest.mark.asyncio
async def test_calendar_month_returns_every_day_with_tasks() -> None:
    payload = CalendarMonthRequest(
        year=2026,
        month=4,
        tasks=[Todo(id="t1", title="交房租", due_date="2026-04-05")],
    )

    response = await calendar_router.calendar_month(payload=payload)

    assert len(response.days) == 30
    assert response.days[4].tasks[0].id == "t1"
    assert response.days[0].tasks == []


def test_api_journal_calendar_and_focus_endpoints() -> None:
    container = build_test_container({JournalAssistantProtocol: FakeJournalAssistant()})

    app = FastAPI()

    @app.middleware("http")
    async def attach_container(request, call_next):
        request.app.state.container = container
        return await call_next(request)

    app.include_router(api_router, prefix="/api")

    with TestClient(app) as client:
        analysis = client.post("/api/journal/analyze", json={"content": "今天散步了"})
        blank = client.post("/api/journal/analyze", json={"content": ""})
        calendar = client.post("/api/calendar/month", json={"year": 2024, "month": 2})
        ring = client.get("/api/focus/ring", params={"duration_minutes": 25, "remaining_seconds": 750})
        bad_ring = client.get("/api/focus/ring", params={"duration_minutes": 0, "remaining_seconds": 10})

    assert analysis.status_code == 200
    assert len(analysis.json()["field_values"]) == 11
    assert blank.status_code == 400
    assert len(calendar.json()["days"]) == 29
    assert ring.json()["label"] == "12:30"
    assert ring.json()["progress"] == pytest.approx(0.5)
    assert bad_ring.status_code == 422
