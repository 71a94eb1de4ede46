from __future__ import annotations

import pytest

from guardkit.errors import (
    BadRequest,
    ConfigError,
    GuardError,
    Internal,
    NotFound,
    error_payload,
)


def test_kinds_are_distinct_types() -> None:
    kinds = {BadRequest, NotFound, Internal}
    for kind in kinds:
        assert issubclass(kind, GuardError)
        for other in kinds - {kind}:
            assert not issubclass(kind, other)


def test_codes_and_kinds() -> None:
    assert (BadRequest.kind, BadRequest.code) == ("bad_request", "INVALID_REQUEST")
    assert (NotFound.kind, NotFound.code) == ("not_found", "NOT_FOUND")
    assert (Internal.kind, Internal.code) == ("internal", "INTERNAL_ERROR")
    assert issubclass(ConfigError, Internal)


def test_message_and_label_are_kept() -> None:
    exc = BadRequest("age must be an integer", label="age")
    assert str(exc) == "age must be an integer"
    assert exc.message == "age must be an integer"
    assert exc.label == "age"
    assert NotFound("user 7 not found").label is None


def test_callers_can_branch_on_kind() -> None:
    with pytest.raises(GuardError) as info:
        raise NotFound("user 7 not found")
    assert isinstance(info.value, NotFound)
    assert info.value.kind == "not_found"


def test_error_payload_serializes() -> None:
    payload = error_payload(BadRequest("ids contains duplicates", label="ids"))
    data = payload.model_dump(mode="json")
    assert data["error"] == "ids contains duplicates"
    assert data["code"] == "INVALID_REQUEST"
    assert data["kind"] == "bad_request"
    assert data["label"] == "ids"
    assert data["details"] is None
    assert isinstance(data["timestamp"], str)


def test_error_payload_with_details() -> None:
    payload = error_payload(Internal("boom"), details={"type": "RuntimeError"})
    assert payload.code == "INTERNAL_ERROR"
    assert payload.details == {"type": "RuntimeError"}
    assert payload.label is None
