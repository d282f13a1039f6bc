"""Prompt builders for each assistant call site.

Every builder returns a system message followed by a single user message.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from datetime import datetime
from typing import TYPE_CHECKING

from daybook.ai.records import PromptMessage, TaskDraft

if TYPE_CHECKING:
    from daybook.services.models import Todo, UserPreferences

_SPLIT_TASKS_SYSTEM = """你是一个任务分析专家。请将用户输入的任务列表拆分为结构化的格式。要求：
1. 每个任务都应该具体且可执行
2. 设置合理的优先级（1最高-3最低）
3. 估算所需时间（分钟）
4. 必要时添加子任务

返回格式示例：
[
  {
    "title": "任务标题",
    "description": "简短描述",
    "priority": 1,
    "estimated_time": 30,
    "subtasks": [
      {
        "id": "1",
        "title": "子任务1",
        "completed": false
      }
    ]
  }
]"""

_PLAN_TASKS_SYSTEM = """你是一个时间管理AI助手。请分析任务并返回JSON格式的时间规划建议。
返回格式必须是有效的JSON，不要包含任何控制字符：
{
  "tasks": [
    {
      "id": "任务ID",
      "start_time": "ISO时间格式",
      "end_time": "ISO时间格式",
      "estimated_time": "预计用时(分钟)",
      "priority": "优先级(1-3)"
    }
  ],
  "suggestion": "整体执行建议",
  "planningLogic": "时间安排逻辑说明"
}"""

_QUICK_START_SYSTEM = """你是一位专业的任务教练。请提供两种建议：
1. 快速启动：用一句话说明如何在1分钟内开始这个任务（不超过30字）
2. 完成建议：3-4点简短的任务完成策略

建议要求：
- 快速启动要具体、立即可执行
- 完成建议要简洁、可操作
- 使用鼓励性的语言
- 避免空泛的建议"""

_JOURNAL_ANALYSIS_SYSTEM = """作为一位专业的心理分析师，请分析用户的日记内容，并严格按照以下格式返回分析结果：

情绪状态：[描述当前的情绪状态]
情绪原因：[分析导致这些情绪的原因]
管理建议：[如何管理和改善这些情绪]
思维模式：[分析体现出的思维方式]
认知偏差：[指出可能存在的认知偏差]
行为建议：
• [具体建议1]
• [具体建议2]
• [具体建议3]
• [具体建议4]
正念提醒：
• [放松提示1]
• [放松提示2]

注意：
1. 必须严格按照上述格式返回，包括"•"符号
2. 行为建议必须提供4条
3. 正念提醒必须提供2条
4. 所有建议要具体可执行
5. 分析要与日记内容紧密相关"""

_REFINE_TASKS_SYSTEM = "你是任务管理专家。分析并拆分任务，返回JSON格式结果。注重实用性和可执行性。"

_SCHEDULE_OPTIMIZATION_SYSTEM = "你是专业的时间管理顾问。请提供具体、可执行的时间规划建议。"


def _conversation(system: str, user: str) -> list[PromptMessage]:
    return [PromptMessage(role="system", content=system), PromptMessage(role="user", content=user)]


def build_split_tasks_prompt(content: str) -> list[PromptMessage]:
    return _conversation(_SPLIT_TASKS_SYSTEM, f"任务列表：\n{content}")


def build_plan_tasks_prompt(tasks: Sequence[Todo], preferences: UserPreferences, now: datetime) -> list[PromptMessage]:
    task_json = json.dumps(
        [task.model_dump(mode="json", exclude_none=True) for task in tasks],
        ensure_ascii=False,
        indent=2,
    )
    user = (
        "请为以下任务安排时间：\n"
        f"任务列表：{task_json}\n"
        "\n"
        "限制条件：\n"
        f"1. 从{now:%H:%M}开始安排\n"
        f"2. 睡觉时间：{preferences.sleep_time}前完成\n"
        f"3. 任务间隔：{preferences.break_duration}分钟休息\n"
        "4. 按优先级和预计用时合理安排"
    )
    return _conversation(_PLAN_TASKS_SYSTEM, user)


def build_quick_start_prompt(task: Todo) -> list[PromptMessage]:
    estimated = task.estimated_time if task.estimated_time else "未设置"
    user = (
        f"任务：{task.title}\n"
        f"预计用时：{estimated}分钟\n"
        f"优先级：{task.priority}\n"
        "\n"
        "请提供：\n"
        "1. 一句话的快速启动建议\n"
        "2. 3-4点完成策略\n"
        "\n"
        "返回格式：\n"
        "{\n"
        '  "quickStart": "准备好笔记本，立即写下第一个想法",\n'
        '  "completion": "• 记录关键思路\\n• 分段完成\\n• 及时总结"\n'
        "}"
    )
    return _conversation(_QUICK_START_SYSTEM, user)


def build_journal_analysis_prompt(content: str) -> list[PromptMessage]:
    return _conversation(_JOURNAL_ANALYSIS_SYSTEM, f"请分析以下日记内容：\n\n{content}")


def build_refine_tasks_prompt(tasks: Sequence[TaskDraft]) -> list[PromptMessage]:
    task_json = json.dumps(
        [task.model_dump(by_alias=True, exclude_none=True) for task in tasks],
        ensure_ascii=False,
    )
    user = (
        "作为任务分析专家，请分析并拆分以下任务列表。\n"
        "对于每个任务：\n"
        "1. 如果任务描述过于宽泛，将其拆分为更具体、可执行的子任务\n"
        "2. 为每个任务估算合理的完成时间（分钟）\n"
        "3. 设置任务优先级（1最高，3最低）\n"
        "\n"
        "请返回JSON格式：\n"
        "{\n"
        '  "tasks": [\n'
        "    {\n"
        '      "title": "具体的任务描述",\n'
        '      "estimated_time": 预计时间（分钟）,\n'
        '      "priority": 优先级（1-3）\n'
        "    }\n"
        "  ]\n"
        "}\n"
        "\n"
        f"任务列表：{task_json}"
    )
    return _conversation(_REFINE_TASKS_SYSTEM, user)


def build_schedule_optimization_prompt(tasks: Sequence[Todo], preferences: UserPreferences) -> list[PromptMessage]:
    task_lines = "\n".join(f"- {task.title}（预计{task.estimated_time}分钟）" for task in tasks)
    user = (
        "作为时间管理专家，请根据以下信息制定任务执行计划：\n"
        "\n"
        "用户偏好：\n"
        f"- 起床时间：{preferences.wake_time}\n"
        f"- 睡觉时间：{preferences.sleep_time}\n"
        f"- 专注时长：{preferences.focus_duration}分钟\n"
        f"- 休息时长：{preferences.break_duration}分钟\n"
        f"- 每日目标：{preferences.daily_focus_goal}分钟\n"
        "\n"
        "待处理任务：\n"
        f"{task_lines}\n"
        "\n"
        "请提供一个结构化的时间规划建议（200字左右），包含：\n"
        "\n"
        "1. 任务优先级和执行顺序\n"
        "2. 具体的时间段安排\n"
        "3. 休息时间建议\n"
        "4. 注意事项\n"
        "\n"
        "格式要求：\n"
        "- 分点列出，简明扼要\n"
        "- 重点突出时间安排\n"
        "- 考虑用户作息习惯\n"
        "- 建议切实可行"
    )
    return _conversation(_SCHEDULE_OPTIMIZATION_SYSTEM, user)
