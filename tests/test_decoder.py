from __future__ import annotations

from dataclasses import dataclass

import pytest

from nativejson.decoder import decode
from nativejson.errors import FailureKind, HostError, ImpossibleNumber, to_host_error
from nativejson.host import PythonHost
from nativejson.json_value import (
    JSON_NULL,
    U64_MAX,
    JsonArray,
    JsonBool,
    JsonNumber,
    JsonObject,
    JsonString,
    NumberKind,
)
from nativejson.result import Err, Ok


@dataclass(frozen=True)
class RefusingInsertHost(PythonHost):
    def mapping_insert(self, mapping: object, key: str, value: object) -> None:
        raise KeyError(f"refused {key}")


@dataclass(frozen=True)
class TupleHost(PythonHost):
    def new_list(self, items: list[object]) -> object:
        return tuple(items)


def test_scalars_decode_to_native_values() -> None:
    assert decode(JSON_NULL) == Ok(None)
    assert decode(JsonBool(True)) == Ok(True)
    assert decode(JsonString("txt")) == Ok("txt")


@pytest.mark.parametrize(
    ("number", "expected", "expected_type"),
    [
        (JsonNumber(NumberKind.UNSIGNED, U64_MAX), U64_MAX, int),
        (JsonNumber(NumberKind.SIGNED, -9), -9, int),
        (JsonNumber(NumberKind.FLOAT, 2.0), 2.0, float),
    ],
)
def test_numbers_follow_their_active_subkind(
    number: JsonNumber, expected: object, expected_type: type
) -> None:
    result = decode(number)
    assert result == Ok(expected)
    assert type(result.unwrap()) is expected_type


def test_array_decodes_to_list_in_order() -> None:
    result = decode(JsonArray((JsonNumber(NumberKind.UNSIGNED, 1), JsonString("a"), JSON_NULL)))
    assert isinstance(result, Ok)
    assert result.value == [1, "a", None]
    assert result.value[2] is None


def test_object_decodes_to_fresh_dicts() -> None:
    value = JsonObject({"a": JsonObject({"b": JsonArray()}), "c": JsonBool(False)})
    first = decode(value).unwrap()
    second = decode(value).unwrap()
    assert first == {"a": {"b": []}, "c": False}
    assert first is not second
    assert first["a"] is not second["a"]


def test_null_decodes_to_the_none_singleton() -> None:
    assert decode(JSON_NULL).unwrap() is None


def test_decode_uses_the_supplied_host() -> None:
    result = decode(JsonArray((JsonArray(), JsonBool(True))), host=TupleHost())
    assert result == Ok(((), True))


def test_insertion_failures_are_host_errors() -> None:
    result = decode(
        JsonArray((JsonObject({"k": JSON_NULL}),)),
        host=RefusingInsertHost(),
    )
    assert isinstance(result, Err)
    assert isinstance(result.error, HostError)
    assert isinstance(result.error.error, KeyError)
    assert to_host_error(result.error) is result.error.error


def test_number_without_a_known_subkind_is_impossible() -> None:
    number = JsonNumber(NumberKind.UNSIGNED, 1)
    # Bypass the constructor invariants to simulate a corrupted value.
    object.__setattr__(number, "kind", "decimal")
    result = decode(JsonObject({"n": number}))
    assert result == Err(ImpossibleNumber())
    assert result.error.kind is FailureKind.IMPOSSIBLE_NUMBER
    error = to_host_error(result.error)
    assert isinstance(error, ValueError)
    assert str(error) == "a value was somehow not an integer or float"
