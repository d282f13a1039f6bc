from __future__ import annotations

import logging

import httpx
from fastapi import HTTPException, status

from daybook.ai.errors import (
    AssistantError,
    EmptyInputError,
    InvalidScheduleError,
    MalformedResponseError,
    RequestFailedError,
    ResponseParseError,
)

logger = logging.getLogger(__name__)


def map_assistant_error(exc: AssistantError, *, operation: str) -> HTTPException:
    if isinstance(exc, EmptyInputError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))

    logger.warning("assistant operation failed", extra={"operation": operation, "error_type": exc.__class__.__name__})
    if isinstance(exc, RequestFailedError):
        timed_out = isinstance(exc.last_error, (TimeoutError, httpx.TimeoutException))
        return HTTPException(
            status_code=status.HTTP_504_GATEWAY_TIMEOUT if timed_out else status.HTTP_502_BAD_GATEWAY,
            detail=f"{operation} failed: {exc}",
        )
    if isinstance(exc, (InvalidScheduleError, ResponseParseError, MalformedResponseError)):
        return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=f"{operation} failed: {exc}")
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=f"Unexpected assistant error during {operation}")
