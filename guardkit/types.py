from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime
from typing import TypeAlias, TypeVar

T = TypeVar("T")

Guard: TypeAlias = Callable[[object], T]
"""A configured guard: narrows one untrusted value or raises a classified error."""

# Element types for which set membership is unambiguous without a key function.
SCALAR_TYPES: tuple[type, ...] = (str, bytes, int, float, bool, type(None), date)


@dataclass(frozen=True)
class DateRange:
    start: datetime
    end: datetime
