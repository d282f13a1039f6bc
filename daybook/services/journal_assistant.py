from __future__ import annotations

import logging

from daybook.ai.errors import EmptyInputError
from daybook.ai.parsing import parse_journal_analysis
from daybook.ai.prompts import build_journal_analysis_prompt
from daybook.ai.records import JournalInsight
from daybook.services.contracts import ChatCompletionClientProtocol

logger = logging.getLogger(__name__)


class JournalAssistant:
    """Use-case service producing emotional and cognitive insights from journal text."""

    def __init__(self, client: ChatCompletionClientProtocol) -> None:
        self._client = client

    async def analyze_journal(self, content: str) -> JournalInsight:
        if not content.strip():
            raise EmptyInputError("journal content is empty")

        logger.info("analyzing journal", extra={"content_chars": len(content)})
        reply = await self._client.execute(build_journal_analysis_prompt(content))
        return parse_journal_analysis(reply)

    async def analyze_journal_fields(self, content: str) -> list[str]:
        insight = await self.analyze_journal(content)
        return insight.as_fields()
