"""Common types and helpers shared across models."""

import math
from collections.abc import Callable
from datetime import UTC, datetime
from typing import TypeAlias

Clock: TypeAlias = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (-2.5 -> -2)."""
    return math.floor(value + 0.5)


def format_number(value: float | int) -> str:
    """Render a number without a trailing '.0' (0.0 -> '0', 0.4 -> '0.4')."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
