from fastapi import APIRouter, Request

from daybook.ai.errors import AssistantError
from daybook.api.errors import map_assistant_error
from daybook.api.schemas.journal import JournalAnalysisRequest, JournalAnalysisResponse
from daybook.dependency_injection import get_container
from daybook.services.contracts import JournalAssistantProtocol

router = APIRouter(prefix="/journal", tags=["journal"])


@router.post(
    "/analyze",
    response_model=JournalAnalysisResponse,
    summary="Analyze a journal entry",
    description="Returns the structured insight together with its flat 11-slot field view.",
)
async def analyze_journal(payload: JournalAnalysisRequest, request: Request) -> JournalAnalysisResponse:
    assistant = get_container(request).resolve(JournalAssistantProtocol)
    try:
        insight = await assistant.analyze_journal(payload.text())
    except AssistantError as exc:
        raise map_assistant_error(exc, operation="journal analysis") from exc
    return JournalAnalysisResponse(insight=insight, field_values=insight.as_fields())
