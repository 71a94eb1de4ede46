from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar, Literal

from pydantic import BaseModel

ErrorKind = Literal["bad_request", "not_found", "internal"]
ErrorCode = Literal["INVALID_REQUEST", "NOT_FOUND", "INTERNAL_ERROR"]


class GuardError(Exception):
    """Base class for classified failures.

    Callers branch on the subclass (or on ``kind``/``code``) instead of matching
    message text. ``label`` names the field that failed when one is known.
    """

    kind: ClassVar[ErrorKind] = "internal"
    code: ClassVar[ErrorCode] = "INTERNAL_ERROR"

    def __init__(self, message: str, *, label: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.label = label


class BadRequest(GuardError):
    """Caller-supplied data failed a validation rule."""

    kind: ClassVar[ErrorKind] = "bad_request"
    code: ClassVar[ErrorCode] = "INVALID_REQUEST"


class NotFound(GuardError):
    """A referenced entity does not exist."""

    kind: ClassVar[ErrorKind] = "not_found"
    code: ClassVar[ErrorCode] = "NOT_FOUND"


class Internal(GuardError):
    """The system's own contract was violated."""

    kind: ClassVar[ErrorKind] = "internal"
    code: ClassVar[ErrorCode] = "INTERNAL_ERROR"


class ConfigError(Internal):
    """Process configuration is missing or malformed."""


class ErrorPayload(BaseModel):
    error: str
    code: ErrorCode
    kind: ErrorKind
    label: str | None = None
    details: dict[str, object] | None = None
    timestamp: datetime


def error_payload(
    exc: GuardError, details: dict[str, object] | None = None
) -> ErrorPayload:
    """Build a serializable record of a classified error."""
    return ErrorPayload(
        error=exc.message,
        code=exc.code,
        kind=exc.kind,
        label=exc.label,
        details=details,
        timestamp=datetime.now(timezone.utc),
    )
