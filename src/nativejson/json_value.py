"""Closed JSON value model exchanged with the conversion engine.

Each JSON variant is a frozen dataclass; `JsonValue` is their union. Numbers
carry an explicit subkind so integral values never degrade into floats and
producers always pick the narrowest faithful representation.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
import math
from types import MappingProxyType
from typing import Final, TypeAlias

from nativejson.invariants import never

U64_MAX: Final[int] = 2**64 - 1
I64_MIN: Final[int] = -(2**63)
I64_MAX: Final[int] = 2**63 - 1


class NumberKind(str, Enum):
    UNSIGNED = "unsigned"
    SIGNED = "signed"
    FLOAT = "float"


@dataclass(frozen=True)
class JsonNull:
    pass


JSON_NULL: Final[JsonNull] = JsonNull()


@dataclass(frozen=True)
class JsonBool:
    value: bool


@dataclass(frozen=True)
class JsonNumber:
    """A JSON number with exactly one active subkind.

    `UNSIGNED` holds 0..2**64-1, `SIGNED` holds negative values down to
    -2**63, and `FLOAT` holds a finite float. Use `from_int`/`from_float`
    rather than the raw constructor.
    """

    kind: NumberKind
    value: int | float

    def __post_init__(self) -> None:
        match self.kind:
            case NumberKind.UNSIGNED:
                if type(self.value) is not int or not 0 <= self.value <= U64_MAX:
                    never("unsigned json number out of range", value=self.value)
            case NumberKind.SIGNED:
                if type(self.value) is not int or not I64_MIN <= self.value < 0:
                    never("signed json number out of range", value=self.value)
            case NumberKind.FLOAT:
                if type(self.value) is not float or not math.isfinite(self.value):
                    never("float json number must be finite", value=self.value)
            case _:
                never("unknown json number kind", kind=self.kind)

    @classmethod
    def from_int(cls, value: int) -> JsonNumber | None:
        number = int(value)
        if 0 <= number <= U64_MAX:
            return cls(NumberKind.UNSIGNED, number)
        if I64_MIN <= number < 0:
            return cls(NumberKind.SIGNED, number)
        return None

    @classmethod
    def from_float(cls, value: float) -> JsonNumber | None:
        number = float(value)
        if not math.isfinite(number):
            return None
        return cls(NumberKind.FLOAT, number)

    def as_u64(self) -> int | None:
        if self.kind is NumberKind.UNSIGNED:
            return int(self.value)
        return None

    def as_i64(self) -> int | None:
        if self.kind is NumberKind.SIGNED:
            return int(self.value)
        if self.kind is NumberKind.UNSIGNED and self.value <= I64_MAX:
            return int(self.value)
        return None

    def as_f64(self) -> float:
        return float(self.value)


@dataclass(frozen=True)
class JsonString:
    value: str


@dataclass(frozen=True)
class JsonArray:
    items: tuple["JsonValue", ...] = ()


@dataclass(frozen=True)
class JsonObject:
    # Key order is not significant; mapping equality already ignores it.
    members: Mapping[str, "JsonValue"] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "members", MappingProxyType(dict(self.members)))

    def __hash__(self) -> int:
        return hash(frozenset(self.members.items()))


JsonValue: TypeAlias = JsonNull | JsonBool | JsonNumber | JsonString | JsonArray | JsonObject


def json_kind(value: JsonValue) -> str:
    match value:
        case JsonNull():
            return "null"
        case JsonBool():
            return "bool"
        case JsonNumber(kind=kind):
            return f"number:{kind.value}"
        case JsonString():
            return "string"
        case JsonArray():
            return "array"
        case JsonObject():
            return "object"
        case _:
            never("json_kind() received non-json value", value_type=type(value).__name__)
