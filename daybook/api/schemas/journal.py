from pydantic import BaseModel, Field, model_validator

from daybook.ai.records import JournalInsight
from daybook.services.calendar_view import parse_journal_sections
from daybook.services.models import JournalSections


class JournalAnalysisRequest(BaseModel):
    content: str | None = Field(default=None, description="Journal text, plain or as stored section JSON")
    sections: JournalSections | None = Field(
        default=None,
        description="Reflection/emotion/mindfulness sections, joined before analysis",
    )

    @model_validator(mode="after")
    def _one_source(self) -> "JournalAnalysisRequest":
        if self.content is None and self.sections is None:
            raise ValueError("either content or sections is required")
        return self

    def text(self) -> str:
        sections = self.sections if self.sections is not None else parse_journal_sections(self.content or "")
        return sections.combined_text()


class JournalAnalysisResponse(BaseModel):
    insight: JournalInsight
    field_values: list[str] = Field(
        ...,
        min_length=11,
        max_length=11,
        description="Flat view: 5 scalar fields, 4 action suggestions, 2 mindfulness tips",
    )
