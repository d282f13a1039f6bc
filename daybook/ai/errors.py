from __future__ import annotations

from dataclasses import dataclass


class AssistantError(RuntimeError):
    """Base class for failures raised by the AI assistant layer."""


class EmptyInputError(AssistantError):
    """Raised when a caller passes blank text; no request is issued."""


class MalformedResponseError(AssistantError):
    """Raised when the upstream call succeeds but yields no usable text."""


class ResponseParseError(AssistantError):
    """Raised when reply text is not valid JSON or lacks required fields."""


class InvalidScheduleError(AssistantError):
    """Raised when a schedule proposal holds an unusable time range or task id."""


@dataclass
class UpstreamStatusError(Exception):
    status_code: int
    message: str

    def __str__(self) -> str:
        return f"chat completion request failed: {self.status_code} - {self.message}"


class RequestFailedError(AssistantError):
    """Raised after every attempt against the chat-completion endpoint failed."""

    def __init__(self, attempts: int, last_error: BaseException | None) -> None:
        detail = (str(last_error) or last_error.__class__.__name__) if last_error is not None else "unknown error"
        super().__init__(f"chat completion failed after {attempts} attempts: {detail}")
        self.attempts = attempts
        self.last_error = last_error
