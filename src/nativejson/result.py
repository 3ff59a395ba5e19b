"""Two-variant result carrier used by the conversion engine.

Conversions report failure by value: callers pattern-match on `Ok`/`Err`
instead of catching exceptions, and recursion stops at the first `Err`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, NoReturn, TypeAlias, TypeVar

from nativejson.invariants import never

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_err(self) -> NoReturn:
        never("unwrap_err() called on Ok", value_type=type(self.value).__name__)


@dataclass(frozen=True)
class Err(Generic[E]):
    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        never("unwrap() called on Err", error_type=type(self.error).__name__)

    def unwrap_err(self) -> E:
        return self.error


Result: TypeAlias = "Ok[T] | Err[E]"
