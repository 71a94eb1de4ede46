"""Guards composed from primitives to express structural constraints.

Errors raised by the primitives used inside a combinator propagate unchanged.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Hashable, Sequence
from typing import TypeVar

from guardkit.errors import BadRequest, Internal
from guardkit.primitives import (
    coerce_number,
    parse_iso_datetime,
    to_date_or_null,
    to_trimmed,
)
from guardkit.types import SCALAR_TYPES, DateRange, Guard

T = TypeVar("T")

_ISO_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def non_empty_array(label: str) -> Guard[list[object]]:
    """A non-empty ``list``; elements are left for the caller to check."""

    def narrow(value: object) -> list[object]:
        if not isinstance(value, list) or not value:
            raise BadRequest(f"{label} must be a non-empty array", label=label)
        return value

    return narrow


def unique(
    label: str, key: Callable[[T], Hashable] | None = None
) -> Callable[[Sequence[T]], Sequence[T]]:
    """Reject lists in which two elements share a key.

    Without ``key`` each element is its own key, paired with its type so that
    ``1``, ``1.0`` and ``True`` stay distinct. That default only applies to
    scalar elements; sequences of records need an explicit ``key``, and
    omitting it is reported as :class:`~guardkit.errors.Internal`.
    """

    def key_of(item: T) -> Hashable:
        if key is not None:
            return key(item)
        if not isinstance(item, SCALAR_TYPES):
            raise Internal(
                f"{label}: unique() needs a key function for "
                f"{type(item).__name__} elements",
                label=label,
            )
        return (type(item), item)

    def narrow(items: Sequence[T]) -> Sequence[T]:
        if not isinstance(items, list):
            raise BadRequest(f"{label} must be an array", label=label)
        seen: set[Hashable] = set()
        for item in items:
            k = key_of(item)
            try:
                hash(k)
            except TypeError as exc:
                raise Internal(
                    f"{label}: unique() key is not hashable", label=label
                ) from exc
            if k in seen:
                raise BadRequest(f"{label} contains duplicates", label=label)
            seen.add(k)
        return items

    return narrow


def to_iso_date_only(label: str) -> Guard[str]:
    """A ``YYYY-MM-DD`` string naming a real calendar day; returned trimmed."""
    trimmed = to_trimmed(label)

    def narrow(value: object) -> str:
        s = trimmed(value)
        if _ISO_DATE_RE.fullmatch(s) is None:
            raise BadRequest(f"{label} must be YYYY-MM-DD", label=label)
        if parse_iso_datetime(f"{s}T00:00:00Z") is None:
            raise BadRequest(f"{label} invalid date", label=label)
        return s

    return narrow


def to_date_range(
    label_start: str = "start", label_end: str = "end"
) -> Callable[[object, object], DateRange]:
    """Both bounds are required here, unlike :func:`to_date_or_null` alone."""

    def narrow(start_raw: object, end_raw: object) -> DateRange:
        start = to_date_or_null(start_raw)
        end = to_date_or_null(end_raw)
        if start is None or end is None:
            raise BadRequest(f"Both {label_start} and {label_end} required")
        if start > end:
            raise BadRequest(f"{label_start} must be <= {label_end}", label=label_start)
        return DateRange(start=start, end=end)

    return narrow


def parse_csv_numbers(label: str) -> Guard[list[float]]:
    """``"1, 2,3"`` -> ``[1.0, 2.0, 3.0]``. Empty segments fail."""

    def narrow(raw: object) -> list[float]:
        if not isinstance(raw, str):
            raise BadRequest(f"{label} must be CSV string", label=label)
        nums: list[float] = []
        for part in raw.split(","):
            n = coerce_number(part)
            if n is None:
                raise BadRequest(f"{label} must contain only numbers", label=label)
            nums.append(n)
        return nums

    return narrow
