from __future__ import annotations

import calendar
import json
from collections import defaultdict
from collections.abc import Sequence
from datetime import date, timedelta

from pydantic import ValidationError

from daybook.services.models import CalendarDay, JournalEntry, JournalSections, StoredInsight, Todo


def month_days(anchor: date) -> list[date]:
    """Every date in the month containing ``anchor``."""
    first = anchor.replace(day=1)
    _, length = calendar.monthrange(first.year, first.month)
    return [first + timedelta(days=offset) for offset in range(length)]


def parse_journal_sections(content: str) -> JournalSections:
    """Read stored journal content; plain text is treated as the reflection section."""
    try:
        payload = json.loads(content)
    except (TypeError, ValueError):
        return JournalSections(reflection=content)
    if not isinstance(payload, dict):
        return JournalSections(reflection=content)
    try:
        return JournalSections.model_validate(payload)
    except ValidationError:
        return JournalSections(reflection=content)


def group_by_day(
    days: Sequence[date],
    tasks: Sequence[Todo],
    journals: Sequence[JournalEntry],
    insights: Sequence[StoredInsight],
) -> list[CalendarDay]:
    tasks_by_day: dict[date, list[Todo]] = defaultdict(list)
    for task in tasks:
        if task.due_date is not None:
            tasks_by_day[task.due_date].append(task)

    journal_by_day: dict[date, JournalEntry] = {}
    for journal in journals:
        journal_by_day.setdefault(journal.date, journal)

    insight_by_journal: dict[str, StoredInsight] = {}
    insight_by_day: dict[date, StoredInsight] = {}
    for insight in insights:
        insight_by_journal.setdefault(insight.journal_id, insight)
        insight_by_day.setdefault(insight.date, insight)

    result: list[CalendarDay] = []
    for day in days:
        journal = journal_by_day.get(day)
        insight = insight_by_journal.get(journal.id) if journal is not None else None
        result.append(
            CalendarDay(
                date=day,
                tasks=tasks_by_day.get(day, []),
                journal=journal,
                insight=insight or insight_by_day.get(day),
            )
        )
    return result
