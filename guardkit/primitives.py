"""Primitive guards.

Each factory takes a label (and options where relevant) and returns a
single-argument guard. A guard either returns a fully narrowed value or raises
:class:`~guardkit.errors.BadRequest` with the label embedded in the message.
Guards hold no state, so a configured guard can be reused across inputs and
threads.

``bool`` is rejected wherever a number is expected even though it is an
``int`` subclass.
"""

from __future__ import annotations

import calendar
import json
import math
import re
from collections.abc import Sequence
from datetime import date, datetime, timedelta, timezone
from typing import TypeVar

from guardkit.errors import BadRequest
from guardkit.types import Guard

T = TypeVar("T")

DEFAULT_JSON_MAX_BYTES = 1_000_000

UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

_NUMBER_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
# int() refuses digit strings past the interpreter's conversion limit.
_INT_RE = re.compile(r"[+-]?[0-9]{1,4000}")
_ISO_RE = re.compile(
    r"(?P<year>[0-9]{4})"
    r"(?:-(?P<month>[0-9]{2})"
    r"(?:-(?P<day>[0-9]{2})"
    r"(?:[T ](?P<hour>[0-9]{2}):(?P<minute>[0-9]{2})"
    r"(?::(?P<second>[0-9]{2})(?:\.(?P<fraction>[0-9]{1,9}))?)?"
    r"(?P<offset>Z|[+-][0-9]{2}:?[0-9]{2})?"
    r")?)?)?"
)


def coerce_number(value: object) -> float | None:
    """Numeric value of an int, float or numeric string; ``None`` otherwise."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        # Wider ints would overflow float().
        return float(value) if value.bit_length() <= 1023 else None
    if isinstance(value, float):
        return None if math.isnan(value) else value
    if isinstance(value, str):
        text = value.strip()
        return float(text) if _NUMBER_RE.fullmatch(text) else None
    return None


def _coerce_int(value: object) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        text = value.strip()
        return int(text) if _INT_RE.fullmatch(text) else None
    return None


def _check_bounds(
    label: str, n: float, ge: float | None, le: float | None
) -> None:
    if ge is not None and n < ge:
        raise BadRequest(f"{label} >= {ge}", label=label)
    if le is not None and n > le:
        raise BadRequest(f"{label} <= {le}", label=label)


def _parse_offset(token: str | None) -> timezone | None:
    if token is None or token == "Z":
        return timezone.utc
    sign = -1 if token[0] == "-" else 1
    digits = token[1:].replace(":", "")
    hours, minutes = int(digits[:2]), int(digits[2:])
    if hours > 23 or minutes > 59:
        return None
    return timezone(sign * timedelta(hours=hours, minutes=minutes))


def parse_iso_datetime(text: str) -> datetime | None:
    """Parse an ISO-8601 date or date-time into an aware UTC ``datetime``.

    Accepts ``YYYY``, ``YYYY-MM``, ``YYYY-MM-DD`` and date-times with optional
    seconds, fraction and offset. Values without an offset are taken as UTC.
    Returns ``None`` for anything that is not a real calendar instant.
    """
    m = _ISO_RE.fullmatch(text.strip())
    if m is None:
        return None
    year = int(m["year"])
    month = int(m["month"] or 1)
    day = int(m["day"] or 1)
    hour = int(m["hour"] or 0)
    minute = int(m["minute"] or 0)
    second = int(m["second"] or 0)
    micros = int((m["fraction"] or "0")[:6].ljust(6, "0"))
    if year < 1 or not 1 <= month <= 12:
        return None
    if day < 1 or day > calendar.monthrange(year, month)[1]:
        return None
    if hour > 23 or minute > 59 or second > 59:
        return None
    tz = _parse_offset(m["offset"])
    if tz is None:
        return None
    # Shifting the first or last representable year by an offset overflows.
    if tz.utcoffset(None) and year in (1, 9999):
        return None
    local = datetime(year, month, day, hour, minute, second, micros, tzinfo=tz)
    return local.astimezone(timezone.utc)


def to_trimmed(label: str) -> Guard[str]:
    def narrow(value: object) -> str:
        if not isinstance(value, str):
            raise BadRequest(f"{label} must be string", label=label)
        return value.strip()

    return narrow


def non_empty(label: str) -> Guard[str]:
    trimmed = to_trimmed(label)

    def narrow(value: object) -> str:
        s = trimmed(value)
        if not s:
            raise BadRequest(f"{label} must not be empty", label=label)
        return s

    return narrow


def with_length(
    label: str, *, min_length: int = 0, max_length: int | None = None
) -> Guard[str]:
    """Trimmed string whose length lies in ``[min_length, max_length]``."""
    trimmed = to_trimmed(label)

    def narrow(value: object) -> str:
        s = trimmed(value)
        if len(s) < min_length:
            raise BadRequest(f"{label} length >= {min_length}", label=label)
        if max_length is not None and len(s) > max_length:
            raise BadRequest(f"{label} length <= {max_length}", label=label)
        return s

    return narrow


def matches(
    label: str, pattern: str | re.Pattern[str], hint: str | None = None
) -> Guard[str]:
    """Trimmed string in which ``pattern`` is found (``re.search`` semantics).

    Anchor the pattern to require a whole-string match. ``hint`` is appended
    to the failure message in parentheses.
    """
    compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
    trimmed = to_trimmed(label)
    suffix = f" ({hint})" if hint else ""

    def narrow(value: object) -> str:
        s = trimmed(value)
        if compiled.search(s) is None:
            raise BadRequest(f"{label} invalid{suffix}", label=label)
        return s

    return narrow


def is_uuid(label: str = "id") -> Guard[str]:
    return matches(label, UUID_PATTERN, "uuid v4")


def is_email(label: str = "email") -> Guard[str]:
    return matches(label, EMAIL_PATTERN)


def to_int(label: str, *, ge: int | None = None, le: int | None = None) -> Guard[int]:
    """Integer from an ``int``, an integral ``float`` or a decimal string.

    Strings must hold an integer literal; ``"4.2"`` and ``"42abc"`` fail.
    """

    def narrow(value: object) -> int:
        n = _coerce_int(value)
        if n is None:
            raise BadRequest(f"{label} must be an integer", label=label)
        _check_bounds(label, n, ge, le)
        return n

    return narrow


def to_number(
    label: str, *, ge: float | None = None, le: float | None = None
) -> Guard[float]:
    def narrow(value: object) -> float:
        n = coerce_number(value)
        if n is None:
            raise BadRequest(f"{label} must be a number", label=label)
        _check_bounds(label, n, ge, le)
        return n

    return narrow


def to_bool(label: str) -> Guard[bool]:
    """Accepts ``True``/``False``, ``"true"``/``"false"``, ``1``/``0``, ``"1"``/``"0"``."""

    def narrow(value: object) -> bool:
        if isinstance(value, bool):
            return value
        if value in ("true", "1") or (isinstance(value, (int, float)) and value == 1):
            return True
        if value in ("false", "0") or (isinstance(value, (int, float)) and value == 0):
            return False
        raise BadRequest(f"{label} must be boolean", label=label)

    return narrow


def one_of(label: str, allowed: Sequence[T]) -> Guard[T]:
    """Membership in ``allowed``; type must match too, so ``True`` is not ``1``."""
    options = tuple(allowed)
    listing = ", ".join(str(option) for option in options)

    def narrow(value: object) -> T:
        for option in options:
            if type(option) is type(value) and option == value:
                return option
        raise BadRequest(f"{label} must be one of: {listing}", label=label)

    return narrow


def parse_json(label: str, max_bytes: int = DEFAULT_JSON_MAX_BYTES) -> Guard[object]:
    """Decode a JSON document held in a string.

    The length ceiling is checked on the raw string before decoding. The
    non-standard ``NaN``/``Infinity`` tokens are rejected.
    """

    def reject_constant(token: str) -> object:
        raise BadRequest(f"{label} is not valid JSON", label=label)

    def narrow(raw: object) -> object:
        if not isinstance(raw, str):
            raise BadRequest(f"{label} must be JSON string", label=label)
        if len(raw) > max_bytes:
            raise BadRequest(f"{label} too large", label=label)
        try:
            parsed: object = json.loads(raw, parse_constant=reject_constant)
        except (ValueError, RecursionError) as exc:
            raise BadRequest(f"{label} is not valid JSON", label=label) from exc
        return parsed

    return narrow


def parse_number_array(label: str) -> Guard[list[float]]:
    """Numbers from a ``list`` or a JSON-encoded array; numeric strings are coerced."""

    def narrow(raw: object) -> list[float]:
        items: object = raw
        if isinstance(raw, str):
            try:
                items = json.loads(raw)
            except (ValueError, RecursionError) as exc:
                raise BadRequest(f"Invalid {label}: expected array", label=label) from exc
        if not isinstance(items, list):
            raise BadRequest(f"Invalid {label}: expected array", label=label)
        nums: list[float] = []
        for item in items:
            n = coerce_number(item)
            if n is None:
                raise BadRequest(f"{label} must contain numeric ids", label=label)
            nums.append(n)
        return nums

    return narrow


def to_date_or_null(raw: object) -> datetime | None:
    """Lenient date: ``None`` for absent or unparsable input, never an error.

    Naive ``datetime`` values and plain ``date`` values are placed in UTC.
    """
    if raw is None:
        return None
    if isinstance(raw, datetime):
        return raw if raw.tzinfo is not None else raw.replace(tzinfo=timezone.utc)
    if isinstance(raw, date):
        return datetime(raw.year, raw.month, raw.day, tzinfo=timezone.utc)
    if isinstance(raw, str) and raw:
        return parse_iso_datetime(raw)
    return None


def to_year_or_null(raw: object) -> int | None:
    d = to_date_or_null(raw)
    return None if d is None else d.year
