from __future__ import annotations

from collections.abc import Callable, Hashable
from dataclasses import dataclass

import pytest

from guardkit.combinators import non_empty_array, parse_csv_numbers, unique
from guardkit.errors import BadRequest, Internal


def test_non_empty_array_returns_input_unchanged() -> None:
    items: list[object] = [1, "two", None]
    assert non_empty_array("tags")(items) is items


@pytest.mark.parametrize("raw", [[], (1, 2), "abc", None, {"a": 1}])
def test_non_empty_array_rejects(raw: object) -> None:
    with pytest.raises(BadRequest, match="tags must be a non-empty array"):
        non_empty_array("tags")(raw)


def test_unique_detects_duplicates() -> None:
    with pytest.raises(BadRequest, match="ids contains duplicates") as info:
        unique("ids")([1, 2, 2, 3])
    assert info.value.label == "ids"


def test_unique_returns_input_unchanged() -> None:
    items = [3, 1, 2]
    assert unique("ids")(items) is items
    assert unique("ids")([]) == []


def test_unique_default_key_keeps_types_apart() -> None:
    mixed: list[object] = [1, 1.5, True, "1", None]
    assert unique("values")(mixed) == mixed


def test_unique_with_key_function() -> None:
    rows = [{"id": 1}, {"id": 2}]
    assert unique("rows", lambda row: row["id"])(rows) is rows
    with pytest.raises(BadRequest, match="rows contains duplicates"):
        unique("rows", lambda row: row["id"])([{"id": 1}, {"id": 1, "x": 0}])


@dataclass(frozen=True)
class _Point:
    x: int
    y: int


def test_unique_records_need_a_key() -> None:
    points = [_Point(0, 0), _Point(1, 0)]
    with pytest.raises(Internal, match="needs a key function for _Point"):
        unique("points")(points)
    assert unique("points", lambda p: (p.x, p.y))(points) is points


@pytest.mark.parametrize(
    "key", [lambda row: [row], lambda row: (row, [row])], ids=["list", "tuple-of-list"]
)
def test_unique_unhashable_key_is_internal(key: Callable[[int], Hashable]) -> None:
    with pytest.raises(Internal, match="key is not hashable"):
        unique("rows", key)([1, 2])


@pytest.mark.parametrize("raw", [None, 5, {"a": 1}, "aa", (1, 2)])
def test_unique_rejects_non_arrays(raw: object) -> None:
    with pytest.raises(BadRequest, match="ids must be an array"):
        unique("ids")(raw)


def test_unique_allocates_fresh_state_per_call() -> None:
    guard = unique("ids")
    assert guard([1, 2]) == [1, 2]
    assert guard([1, 2]) == [1, 2]


def test_parse_csv_numbers() -> None:
    assert parse_csv_numbers("xs")("1, 2,3") == [1, 2, 3]
    assert parse_csv_numbers("xs")("-1.5") == [-1.5]


@pytest.mark.parametrize("raw", ["1,,3", "", "1,a", "1, 2,"])
def test_parse_csv_numbers_rejects_bad_segments(raw: str) -> None:
    with pytest.raises(BadRequest, match="xs must contain only numbers"):
        parse_csv_numbers("xs")(raw)


def test_parse_csv_numbers_requires_string() -> None:
    with pytest.raises(BadRequest, match="xs must be CSV string"):
        parse_csv_numbers("xs")([1, 2])
