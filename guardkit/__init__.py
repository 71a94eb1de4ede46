"""Composable guards for untrusted boundary input.

A guard is built once from a label (and options) and then applied to raw
values; it returns a narrowed value or raises a classified error from
:mod:`guardkit.errors`.
"""

from __future__ import annotations

from guardkit.assertions import assert_never, expect, invariant, require_present
from guardkit.combinators import (
    non_empty_array,
    parse_csv_numbers,
    to_date_range,
    to_iso_date_only,
    unique,
)
from guardkit.errors import (
    BadRequest,
    ConfigError,
    ErrorPayload,
    GuardError,
    Internal,
    NotFound,
    error_payload,
)
from guardkit.primitives import (
    is_email,
    is_uuid,
    matches,
    non_empty,
    one_of,
    parse_json,
    parse_number_array,
    to_bool,
    to_date_or_null,
    to_int,
    to_number,
    to_trimmed,
    to_year_or_null,
    with_length,
)
from guardkit.types import DateRange, Guard

__all__ = [
    # Errors
    "BadRequest",
    "ConfigError",
    "ErrorPayload",
    "GuardError",
    "Internal",
    "NotFound",
    "error_payload",
    # Assertions
    "assert_never",
    "expect",
    "invariant",
    "require_present",
    # Primitives
    "is_email",
    "is_uuid",
    "matches",
    "non_empty",
    "one_of",
    "parse_json",
    "parse_number_array",
    "to_bool",
    "to_date_or_null",
    "to_int",
    "to_number",
    "to_trimmed",
    "to_year_or_null",
    "with_length",
    # Combinators
    "non_empty_array",
    "parse_csv_numbers",
    "to_date_range",
    "to_iso_date_only",
    "unique",
    # Types
    "DateRange",
    "Guard",
]
