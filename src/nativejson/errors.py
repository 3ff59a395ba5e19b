"""Conversion failure taxonomy and its translation into host exceptions.

`encode` and `decode` never raise for an unconvertible value; they return one
of the failure records below. `to_host_error` is the single place where a
failure is rendered into a message and an exception object.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias, TypeVar

from nativejson.exceptions import NeverThrown
from nativejson.host import PYTHON_HOST, HostContext
from nativejson.invariants import never
from nativejson.result import Err, Ok

T = TypeVar("T")

NOT_SERIALIZABLE_SUFFIX = "is not JSON serializable"
KEY_NOT_STRING_MESSAGE = "keys must be a string"
INVALID_FLOAT_MESSAGE = "inf and nan are not supported in JSON"
IMPOSSIBLE_NUMBER_MESSAGE = "a value was somehow not an integer or float"


class FailureKind(str, Enum):
    HOST_ERROR = "host_error"
    NOT_REPRESENTABLE = "not_representable"
    KEY_NOT_TEXT_COERCIBLE = "key_not_text_coercible"
    INVALID_FLOAT = "invalid_float"
    IMPOSSIBLE_NUMBER = "impossible_number"


ReprResult: TypeAlias = "Ok[str] | Err[BaseException]"


@dataclass(frozen=True)
class HostError:
    """An exception raised by the host runtime during a boundary call."""

    error: BaseException

    @property
    def kind(self) -> FailureKind:
        return FailureKind.HOST_ERROR


@dataclass(frozen=True)
class NotRepresentable:
    """A value matched none of the encodable shapes.

    `repr_result` holds the rendered value, or the exception raised while
    rendering it, so translation can tell the two apart.
    """

    type_name: str
    repr_result: ReprResult

    @property
    def kind(self) -> FailureKind:
        return FailureKind.NOT_REPRESENTABLE


@dataclass(frozen=True)
class KeyNotTextCoercible:
    key: object

    @property
    def kind(self) -> FailureKind:
        return FailureKind.KEY_NOT_TEXT_COERCIBLE


@dataclass(frozen=True)
class InvalidFloat:
    @property
    def kind(self) -> FailureKind:
        return FailureKind.INVALID_FLOAT


@dataclass(frozen=True)
class ImpossibleNumber:
    """A JSON number carried no recognized subkind."""

    @property
    def kind(self) -> FailureKind:
        return FailureKind.IMPOSSIBLE_NUMBER


ConversionFailure: TypeAlias = (
    HostError | NotRepresentable | KeyNotTextCoercible | InvalidFloat | ImpossibleNumber
)


def _translate(failure: ConversionFailure, host: HostContext) -> BaseException:
    match failure:
        case HostError(error=error):
            return error
        case NotRepresentable(repr_result=Ok(value=text)):
            return host.make_type_error(f"{text} {NOT_SERIALIZABLE_SUFFIX}")
        case NotRepresentable(repr_result=Err(error=error)):
            return error
        case KeyNotTextCoercible():
            return host.make_type_error(KEY_NOT_STRING_MESSAGE)
        case InvalidFloat():
            return host.make_value_error(INVALID_FLOAT_MESSAGE)
        case ImpossibleNumber():
            return host.make_value_error(IMPOSSIBLE_NUMBER_MESSAGE)
        case _:
            never("unknown conversion failure", failure_type=type(failure).__name__)


def to_host_error(
    failure: ConversionFailure,
    host: HostContext = PYTHON_HOST,
) -> BaseException:
    """Translate a conversion failure into a host exception object.

    The exception is returned, not raised. If building the exception itself
    fails inside the host, the exception raised by the host is returned in
    its place.
    """
    try:
        return _translate(failure, host)
    except NeverThrown:
        raise
    except Exception as exc:
        return exc


def raise_for_failure(
    result: "Ok[T] | Err[ConversionFailure]",
    host: HostContext = PYTHON_HOST,
) -> T:
    match result:
        case Ok(value=value):
            return value
        case Err(error=failure):
            raise to_host_error(failure, host)
        case _:
            never("raise_for_failure() expects Ok or Err", result_type=type(result).__name__)
