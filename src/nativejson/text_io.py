"""Textual JSON at the edge of an embedding application.

The conversion engine never produces text. These helpers exist for the CLI
and for fixtures: they parse a whole document with the stdlib `json` module
and hand the plain result to the encoder, or decode a JSON value and dump it.
"""

from __future__ import annotations

import json
from collections.abc import Mapping

from nativejson.decoder import decode
from nativejson.encoder import encode
from nativejson.errors import raise_for_failure
from nativejson.host import PYTHON_HOST
from nativejson.json_types import JSONValue
from nativejson.json_value import JsonValue


def _reject_constant(token: str) -> JSONValue:
    raise ValueError(f"{token} is not valid JSON")


def parse_json_text(text: str) -> JsonValue:
    """Parse a JSON document into a `JsonValue`.

    Raises `json.JSONDecodeError` for malformed text, `ValueError` for the
    non-standard `NaN`/`Infinity` tokens and `TypeError` for integers that
    do not fit in 64 bits.
    """
    payload: JSONValue = json.loads(text, parse_constant=_reject_constant)
    return raise_for_failure(encode(payload, host=PYTHON_HOST))


def canonicalize_plain(value: object) -> object:
    if isinstance(value, Mapping):
        return {
            str(key): canonicalize_plain(value[key])
            for key in sorted(value, key=str)
        }
    if isinstance(value, list):
        return [canonicalize_plain(item) for item in value]
    return value


def render_json_text(value: JsonValue, *, pretty: bool = False) -> str:
    plain = raise_for_failure(decode(value, host=PYTHON_HOST))
    if pretty:
        return json.dumps(canonicalize_plain(plain), indent=2, allow_nan=False)
    return json.dumps(plain, separators=(",", ":"), allow_nan=False)
