from __future__ import annotations

import math

from daybook.services.models import FocusRing

RING_RADIUS = 88
RING_CIRCUMFERENCE = 2 * math.pi * RING_RADIUS


def format_clock(seconds: int) -> str:
    minutes, remainder = divmod(max(seconds, 0), 60)
    return f"{minutes:02d}:{remainder:02d}"


def ring_state(duration_minutes: int, remaining_seconds: int) -> FocusRing:
    """Countdown ring geometry for a focus session of ``duration_minutes``."""
    if duration_minutes <= 0:
        raise ValueError("duration_minutes must be positive")

    total = duration_minutes * 60
    remaining = min(max(remaining_seconds, 0), total)
    progress = 1 - remaining / total
    return FocusRing(
        label=format_clock(remaining),
        remaining_seconds=remaining,
        progress=progress,
        stroke_dasharray=RING_CIRCUMFERENCE,
        stroke_dashoffset=RING_CIRCUMFERENCE * progress,
    )
