"""Host runtime capabilities consumed by the conversion engine.

The engine never touches Python objects directly; every read, extraction and
construction goes through a `HostContext`. Extraction and downcast attempts
return `None` on a type mismatch and have no side effects. Any other failure
is reported by raising, and the engine turns the raised exception into a
`HostError` failure.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
import operator
from typing import Protocol

from nativejson.json_value import I64_MAX, I64_MIN, U64_MAX


class HostContext(Protocol):
    def is_none(self, value: object) -> bool:
        """Identity test against the host null singleton."""

    def none(self) -> object:
        """Return the host null singleton."""

    def type_name(self, value: object) -> str:
        """Return the dynamic type name of `value`."""

    def repr(self, value: object) -> str:
        """Render `value` for diagnostics; may raise."""

    def to_text(self, value: object) -> str:
        """Generic text coercion; may raise."""

    def extract_text(self, value: object) -> str | None: ...

    def extract_bool(self, value: object) -> bool | None: ...

    def extract_u64(self, value: object) -> int | None: ...

    def extract_i64(self, value: object) -> int | None: ...

    def as_float(self, value: object) -> float | None: ...

    def as_mapping(self, value: object) -> Mapping[object, object] | None: ...

    def as_list(self, value: object) -> list[object] | None: ...

    def as_tuple(self, value: object) -> tuple[object, ...] | None: ...

    def mapping_items(self, mapping: Mapping[object, object]) -> list[tuple[object, object]]: ...

    def sequence_items(self, sequence: Iterable[object]) -> list[object]: ...

    def new_bool(self, value: bool) -> object: ...

    def new_int(self, value: int) -> object: ...

    def new_float(self, value: float) -> object: ...

    def new_text(self, value: str) -> object: ...

    def new_list(self, items: list[object]) -> object: ...

    def new_mapping(self) -> object: ...

    def mapping_insert(self, mapping: object, key: str, value: object) -> None: ...

    def make_type_error(self, message: str) -> BaseException: ...

    def make_value_error(self, message: str) -> BaseException: ...


def _index_or_none(value: object) -> int | None:
    try:
        return operator.index(value)
    except TypeError:
        return None


@dataclass(frozen=True)
class PythonHost:
    """`HostContext` backed by the running CPython interpreter."""

    def is_none(self, value: object) -> bool:
        return value is None

    def none(self) -> object:
        return None

    def type_name(self, value: object) -> str:
        value_type = type(value)
        module = getattr(value_type, "__module__", "") or ""
        if not module or module == "builtins":
            return value_type.__qualname__
        return f"{module}.{value_type.__qualname__}"

    def repr(self, value: object) -> str:
        return repr(value)

    def to_text(self, value: object) -> str:
        return str(value)

    def extract_text(self, value: object) -> str | None:
        if isinstance(value, str):
            # Read str subclasses as their plain character data.
            return str.__str__(value)
        return None

    def extract_bool(self, value: object) -> bool | None:
        if isinstance(value, bool):
            return bool(value)
        return None

    def extract_u64(self, value: object) -> int | None:
        number = _index_or_none(value)
        if number is None or not 0 <= number <= U64_MAX:
            return None
        return number

    def extract_i64(self, value: object) -> int | None:
        number = _index_or_none(value)
        if number is None or not I64_MIN <= number <= I64_MAX:
            return None
        return number

    def as_float(self, value: object) -> float | None:
        if isinstance(value, float):
            return float(value)
        return None

    def as_mapping(self, value: object) -> Mapping[object, object] | None:
        if isinstance(value, Mapping):
            return value
        return None

    def as_list(self, value: object) -> list[object] | None:
        if isinstance(value, list):
            return value
        return None

    def as_tuple(self, value: object) -> tuple[object, ...] | None:
        if isinstance(value, tuple):
            return value
        return None

    def mapping_items(self, mapping: Mapping[object, object]) -> list[tuple[object, object]]:
        return list(mapping.items())

    def sequence_items(self, sequence: Iterable[object]) -> list[object]:
        return list(sequence)

    def new_bool(self, value: bool) -> object:
        return bool(value)

    def new_int(self, value: int) -> object:
        return int(value)

    def new_float(self, value: float) -> object:
        return float(value)

    def new_text(self, value: str) -> object:
        return str(value)

    def new_list(self, items: list[object]) -> object:
        return list(items)

    def new_mapping(self) -> object:
        return {}

    def mapping_insert(self, mapping: object, key: str, value: object) -> None:
        if not isinstance(mapping, dict):
            raise TypeError(f"cannot insert into {type(mapping).__name__}")
        mapping[key] = value

    def make_type_error(self, message: str) -> BaseException:
        return TypeError(message)

    def make_value_error(self, message: str) -> BaseException:
        return ValueError(message)


PYTHON_HOST = PythonHost()
