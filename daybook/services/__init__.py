"""Service layer orchestrating assistant use-cases."""

from daybook.services.journal_assistant import JournalAssistant
from daybook.services.task_assistant import TaskAssistant

__all__ = ["JournalAssistant", "TaskAssistant"]
