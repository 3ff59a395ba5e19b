"""JSON value -> native value conversion."""

from __future__ import annotations

import logging
from typing import TypeAlias

from nativejson.errors import ConversionFailure, HostError, ImpossibleNumber
from nativejson.exceptions import NeverThrown
from nativejson.host import PYTHON_HOST, HostContext
from nativejson.invariants import never
from nativejson.json_value import (
    JsonArray,
    JsonBool,
    JsonNull,
    JsonNumber,
    JsonObject,
    JsonString,
    JsonValue,
    NumberKind,
)
from nativejson.result import Err, Ok

logger = logging.getLogger(__name__)

DecodeResult: TypeAlias = "Ok[object] | Err[ConversionFailure]"


def _decode_number(host: HostContext, number: JsonNumber) -> DecodeResult:
    # The active subkind alone decides the native type.
    match number.kind:
        case NumberKind.UNSIGNED | NumberKind.SIGNED:
            return Ok(host.new_int(int(number.value)))
        case NumberKind.FLOAT:
            return Ok(host.new_float(float(number.value)))
        case _:
            return Err(ImpossibleNumber())


def _decode_array(host: HostContext, array: JsonArray) -> DecodeResult:
    elements: list[object] = []
    for item in array.items:
        decoded = _decode(host, item)
        if isinstance(decoded, Err):
            return decoded
        elements.append(decoded.value)
    return Ok(host.new_list(elements))


def _decode_object(host: HostContext, obj: JsonObject) -> DecodeResult:
    mapping = host.new_mapping()
    for key, item in obj.members.items():
        decoded = _decode(host, item)
        if isinstance(decoded, Err):
            return decoded
        host.mapping_insert(mapping, key, decoded.value)
    return Ok(mapping)


def _decode(host: HostContext, value: JsonValue) -> DecodeResult:
    try:
        match value:
            case JsonNumber() as number:
                return _decode_number(host, number)
            case JsonString(value=text):
                return Ok(host.new_text(text))
            case JsonBool(value=flag):
                return Ok(host.new_bool(flag))
            case JsonArray() as array:
                return _decode_array(host, array)
            case JsonObject() as obj:
                return _decode_object(host, obj)
            case JsonNull():
                return Ok(host.none())
            case _:
                never("decode() received non-json value", value_type=type(value).__name__)
    except NeverThrown:
        raise
    except Exception as exc:
        return Err(HostError(exc))


def decode(value: JsonValue, *, host: HostContext = PYTHON_HOST) -> DecodeResult:
    """Convert a JSON value into a freshly built native value.

    Returns `Ok(native)` or `Err(ConversionFailure)`. Failures come only from
    the host construction and insertion calls, or from a number without a
    recognized subkind.
    """
    result = _decode(host, value)
    if isinstance(result, Err):
        logger.debug("decode failed: %s", result.error.kind.value)
    return result
