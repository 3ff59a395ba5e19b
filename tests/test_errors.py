from __future__ import annotations

from dataclasses import dataclass

import pytest

from nativejson.encoder import encode
from nativejson.errors import (
    FailureKind,
    HostError,
    ImpossibleNumber,
    InvalidFloat,
    KeyNotTextCoercible,
    NotRepresentable,
    raise_for_failure,
    to_host_error,
)
from nativejson.exceptions import NeverThrown
from nativejson.host import PythonHost
from nativejson.json_value import JSON_NULL
from nativejson.result import Err, Ok


@dataclass(frozen=True)
class BrokenErrorHost(PythonHost):
    def make_type_error(self, message: str) -> BaseException:
        raise MemoryError("cannot allocate exception")


@pytest.mark.parametrize(
    ("failure", "error_type", "message"),
    [
        (KeyNotTextCoercible(None), TypeError, "keys must be a string"),
        (InvalidFloat(), ValueError, "inf and nan are not supported in JSON"),
        (ImpossibleNumber(), ValueError, "a value was somehow not an integer or float"),
        (
            NotRepresentable("datetime.datetime", Ok("datetime.datetime(1, 1, 1, 0, 0)")),
            TypeError,
            "datetime.datetime(1, 1, 1, 0, 0) is not JSON serializable",
        ),
    ],
)
def test_failures_translate_to_host_exceptions(
    failure: object, error_type: type, message: str
) -> None:
    error = to_host_error(failure)  # type: ignore[arg-type]
    assert type(error) is error_type
    assert str(error) == message


def test_host_error_is_passed_through_unchanged() -> None:
    original = KeyError("boom")
    assert to_host_error(HostError(original)) is original


def test_host_error_wrapping_a_translated_failure_keeps_its_message() -> None:
    inner = to_host_error(KeyNotTextCoercible(None))
    error = to_host_error(HostError(inner))
    assert isinstance(error, TypeError)
    assert str(error) == "keys must be a string"


def test_failed_repr_translates_to_the_secondary_error() -> None:
    secondary = to_host_error(KeyNotTextCoercible(None))
    error = to_host_error(NotRepresentable("datetime.datetime", Err(secondary)))
    assert error is secondary
    assert str(error) == "keys must be a string"


def test_translation_substitutes_host_failures() -> None:
    error = to_host_error(KeyNotTextCoercible("k"), BrokenErrorHost())
    assert isinstance(error, MemoryError)
    assert str(error) == "cannot allocate exception"


def test_translation_rejects_unknown_failure_records() -> None:
    with pytest.raises(NeverThrown):
        to_host_error(object())  # type: ignore[arg-type]


def test_failure_kinds_are_distinct() -> None:
    kinds = {
        HostError(RuntimeError()).kind,
        NotRepresentable("x", Ok("x")).kind,
        KeyNotTextCoercible(1).kind,
        InvalidFloat().kind,
        ImpossibleNumber().kind,
    }
    assert kinds == set(FailureKind)


def test_raise_for_failure_returns_ok_values() -> None:
    assert raise_for_failure(encode(None)) == JSON_NULL


def test_raise_for_failure_raises_the_translated_error() -> None:
    with pytest.raises(ValueError, match="inf and nan are not supported in JSON"):
        raise_for_failure(encode(float("inf")))
    with pytest.raises(TypeError, match="keys must be a string"):
        raise_for_failure(encode({3: 4}))


def test_result_accessors() -> None:
    assert Ok(1).is_ok() and not Ok(1).is_err()
    assert Err("e").is_err() and not Err("e").is_ok()
    assert Err("e").unwrap_err() == "e"
    with pytest.raises(NeverThrown):
        Err("e").unwrap()
    with pytest.raises(NeverThrown):
        Ok(1).unwrap_err()
