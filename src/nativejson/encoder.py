"""Native value -> JSON value conversion.

Dispatch is an ordered, first-match-wins chain of typed extraction attempts
(`classify`). The order is part of the contract:

1. mapping
2. list, then tuple
3. text
4. bool, tried before any integer extraction since a bool also reads as 0/1
5. float
6. unsigned 64-bit integer, then signed 64-bit integer
7. the null singleton

Anything else is reported as `NotRepresentable`.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import logging
from typing import TypeAlias

from nativejson.config import EncoderConfig, KeyPolicy, current_encoder_config
from nativejson.errors import (
    ConversionFailure,
    HostError,
    InvalidFloat,
    KeyNotTextCoercible,
    NotRepresentable,
)
from nativejson.host import PYTHON_HOST, HostContext
from nativejson.invariants import never
from nativejson.json_value import (
    JSON_NULL,
    JsonArray,
    JsonBool,
    JsonNumber,
    JsonObject,
    JsonString,
    JsonValue,
)
from nativejson.result import Err, Ok

logger = logging.getLogger(__name__)

EncodeResult: TypeAlias = "Ok[JsonValue] | Err[ConversionFailure]"


@dataclass(frozen=True)
class MappingShape:
    items: tuple[tuple[object, object], ...]


@dataclass(frozen=True)
class SequenceShape:
    items: tuple[object, ...]


@dataclass(frozen=True)
class TextShape:
    text: str


@dataclass(frozen=True)
class BoolShape:
    flag: bool


@dataclass(frozen=True)
class FloatShape:
    number: float


@dataclass(frozen=True)
class UnsignedShape:
    number: int


@dataclass(frozen=True)
class SignedShape:
    number: int


@dataclass(frozen=True)
class NoneShape:
    pass


@dataclass(frozen=True)
class UnknownShape:
    pass


NativeShape: TypeAlias = (
    MappingShape
    | SequenceShape
    | TextShape
    | BoolShape
    | FloatShape
    | UnsignedShape
    | SignedShape
    | NoneShape
    | UnknownShape
)

ShapeAttempt: TypeAlias = Callable[[HostContext, object], "NativeShape | None"]


def _try_mapping(host: HostContext, value: object) -> NativeShape | None:
    mapping = host.as_mapping(value)
    if mapping is None:
        return None
    return MappingShape(tuple(host.mapping_items(mapping)))


def _try_list(host: HostContext, value: object) -> NativeShape | None:
    sequence = host.as_list(value)
    if sequence is None:
        return None
    return SequenceShape(tuple(host.sequence_items(sequence)))


def _try_tuple(host: HostContext, value: object) -> NativeShape | None:
    sequence = host.as_tuple(value)
    if sequence is None:
        return None
    return SequenceShape(tuple(host.sequence_items(sequence)))


def _try_text(host: HostContext, value: object) -> NativeShape | None:
    text = host.extract_text(value)
    return None if text is None else TextShape(text)


def _try_bool(host: HostContext, value: object) -> NativeShape | None:
    flag = host.extract_bool(value)
    return None if flag is None else BoolShape(flag)


def _try_float(host: HostContext, value: object) -> NativeShape | None:
    number = host.as_float(value)
    return None if number is None else FloatShape(number)


def _try_unsigned(host: HostContext, value: object) -> NativeShape | None:
    number = host.extract_u64(value)
    return None if number is None else UnsignedShape(number)


def _try_signed(host: HostContext, value: object) -> NativeShape | None:
    number = host.extract_i64(value)
    return None if number is None else SignedShape(number)


def _try_none(host: HostContext, value: object) -> NativeShape | None:
    return NoneShape() if host.is_none(value) else None


SHAPE_ATTEMPTS: tuple[ShapeAttempt, ...] = (
    _try_mapping,
    _try_list,
    _try_tuple,
    _try_text,
    _try_bool,
    _try_float,
    _try_unsigned,
    _try_signed,
    _try_none,
)


def classify(host: HostContext, value: object) -> NativeShape:
    """Return the first shape whose extraction succeeds, in dispatch order.

    Host exceptions raised by an attempt propagate to the caller.
    """
    for attempt in SHAPE_ATTEMPTS:
        shape = attempt(host, value)
        if shape is not None:
            return shape
    return UnknownShape()


def coerce_key(
    host: HostContext,
    key: object,
    *,
    key_policy: KeyPolicy = KeyPolicy.STRICT,
) -> "Ok[str] | Err[ConversionFailure]":
    if host.is_none(key):
        return Ok("null")
    flag = host.extract_bool(key)
    if flag is not None:
        return Ok("true" if flag else "false")
    text = host.extract_text(key)
    if text is not None:
        return Ok(text)
    if key_policy is KeyPolicy.STRINGIFY:
        try:
            return Ok(host.to_text(key))
        except Exception:
            return Err(KeyNotTextCoercible(key))
    return Err(KeyNotTextCoercible(key))


def _not_representable(host: HostContext, value: object) -> ConversionFailure:
    try:
        type_name = host.type_name(value)
    except Exception as exc:
        return HostError(exc)
    try:
        repr_result: Ok[str] | Err[BaseException] = Ok(host.repr(value))
    except Exception as exc:
        repr_result = Err(exc)
    return NotRepresentable(type_name, repr_result)


def _encode_mapping(
    host: HostContext,
    items: tuple[tuple[object, object], ...],
    config: EncoderConfig,
) -> EncodeResult:
    members: dict[str, JsonValue] = {}
    for key, item in items:
        try:
            key_result = coerce_key(host, key, key_policy=config.key_policy)
        except Exception as exc:
            return Err(HostError(exc))
        if isinstance(key_result, Err):
            return key_result
        encoded = _encode(host, item, config)
        if isinstance(encoded, Err):
            return encoded
        members[key_result.value] = encoded.value
    return Ok(JsonObject(members))


def _encode_sequence(
    host: HostContext,
    items: tuple[object, ...],
    config: EncoderConfig,
) -> EncodeResult:
    encoded_items: list[JsonValue] = []
    for item in items:
        encoded = _encode(host, item, config)
        if isinstance(encoded, Err):
            return encoded
        encoded_items.append(encoded.value)
    return Ok(JsonArray(tuple(encoded_items)))


def _encode_int(host: HostContext, value: object, number: int) -> EncodeResult:
    json_number = JsonNumber.from_int(number)
    if json_number is None:
        # Host reported an in-range integer that the number model rejects.
        return Err(_not_representable(host, value))
    return Ok(json_number)


def _encode(host: HostContext, value: object, config: EncoderConfig) -> EncodeResult:
    try:
        shape = classify(host, value)
    except Exception as exc:
        return Err(HostError(exc))
    match shape:
        case MappingShape(items=items):
            return _encode_mapping(host, items, config)
        case SequenceShape(items=items):
            return _encode_sequence(host, items, config)
        case TextShape(text=text):
            return Ok(JsonString(text))
        case BoolShape(flag=flag):
            return Ok(JsonBool(flag))
        case FloatShape(number=number):
            json_number = JsonNumber.from_float(number)
            if json_number is None:
                return Err(InvalidFloat())
            return Ok(json_number)
        case UnsignedShape(number=number) | SignedShape(number=number):
            return _encode_int(host, value, number)
        case NoneShape():
            return Ok(JSON_NULL)
        case UnknownShape():
            return Err(_not_representable(host, value))
        case _:
            never("classify() returned an unknown shape", shape_type=type(shape).__name__)


def encode(
    value: object,
    *,
    host: HostContext = PYTHON_HOST,
    config: EncoderConfig | None = None,
) -> EncodeResult:
    """Convert a native value into a JSON value.

    Returns `Ok(JsonValue)` or `Err(ConversionFailure)`; the first failure met
    anywhere in a nested structure aborts the whole conversion. When `config`
    is omitted the context-scoped encoder configuration applies.
    """
    resolved = config if config is not None else current_encoder_config()
    result = _encode(host, value, resolved)
    if isinstance(result, Err):
        logger.debug("encode failed: %s", result.error.kind.value)
    return result
