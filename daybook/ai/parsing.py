from __future__ import annotations

import json
import logging
import re
from typing import Any

from daybook.ai.errors import ResponseParseError
from daybook.ai.records import (
    DEFAULT_ACTION_SUGGESTIONS,
    DEFAULT_MINDFULNESS_TIPS,
    MAX_ACTION_SUGGESTIONS,
    MAX_MINDFULNESS_TIPS,
    JournalInsight,
)

logger = logging.getLogger(__name__)

_LEADING_FENCE = re.compile(r"^\s*```(?:json)?\s*")
_TRAILING_FENCE = re.compile(r"\s*```\s*$")
_CONTROL_CHARACTERS = re.compile(r"[\x00-\x1f\x7f-\x9f]")

BULLET_PREFIX = "• "

# label -> JournalInsight field
_SCALAR_LABELS: dict[str, str] = {
    "情绪状态：": "emotional_state",
    "情绪原因：": "emotion_cause",
    "管理建议：": "management_tips",
    "思维模式：": "thinking_patterns",
    "认知偏差：": "cognitive_biases",
}
ACTION_LABEL = "行为建议："
MINDFULNESS_LABEL = "正念提醒："


def strip_code_fences(text: str) -> str:
    stripped = _LEADING_FENCE.sub("", text, count=1)
    stripped = _TRAILING_FENCE.sub("", stripped, count=1)
    return stripped.strip()


def strip_control_characters(text: str) -> str:
    return _CONTROL_CHARACTERS.sub("", text)


def parse_json(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ResponseParseError(f"model reply is not valid JSON: {exc.msg}") from exc


def parse_journal_analysis(text: str) -> JournalInsight:
    """Parse the labeled-line journal analysis format into an insight record.

    Scalar fields come from ``<label>：<value>`` lines. The two list sections
    are opened by their label line and filled from the ``• `` bullet lines
    that follow, up to four action suggestions and two mindfulness tips.
    Lines matching no known prefix are skipped. Empty lists fall back to the
    default suggestions.
    """
    scalars: dict[str, str] = {}
    actions: list[str] = []
    tips: list[str] = []
    section: str | None = None

    for line in (raw for raw in text.split("\n") if raw.strip()):
        label = next((candidate for candidate in _SCALAR_LABELS if line.startswith(candidate)), None)
        if label is not None:
            scalars[_SCALAR_LABELS[label]] = line.replace(label, "", 1).strip()
        elif line.startswith(ACTION_LABEL):
            section = "action"
        elif line.startswith(MINDFULNESS_LABEL):
            section = "mindfulness"
        elif line.startswith(BULLET_PREFIX):
            item = line.replace(BULLET_PREFIX, "", 1).strip()
            if section == "action" and len(actions) < MAX_ACTION_SUGGESTIONS:
                actions.append(item)
            elif section == "mindfulness" and len(tips) < MAX_MINDFULNESS_TIPS:
                tips.append(item)
        else:
            logger.debug("skipping unrecognized journal analysis line", extra={"line": line[:80]})

    return JournalInsight(
        **scalars,
        action_suggestions=actions or list(DEFAULT_ACTION_SUGGESTIONS),
        mindfulness_tips=tips or list(DEFAULT_MINDFULNESS_TIPS),
    )
