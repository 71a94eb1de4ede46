"""Assertion helpers that raise classified errors instead of ``AssertionError``."""

from __future__ import annotations

from typing import Never, TypeVar

from guardkit.errors import BadRequest

T = TypeVar("T")


def invariant(cond: object, msg: str = "Invariant failed") -> None:
    if not cond:
        raise BadRequest(msg)


def expect(value: T | None, msg: str = "Value missing") -> T:
    """Return ``value`` with ``None`` excluded from its type."""
    if value is None:
        raise BadRequest(msg)
    return value


def require_present(value: object, msg: str) -> None:
    """Statement form of :func:`expect` for code that keeps the original name."""
    if value is None:
        raise BadRequest(msg)


def assert_never(value: Never, msg: str = "Unexpected variant") -> Never:
    """Exhaustiveness check for closed sets of cases.

    Reaching this is a defect in the calling code, so the error is left
    unclassified.
    """
    raise AssertionError(f"{msg}: {value!s}")
