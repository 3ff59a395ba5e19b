from __future__ import annotations

"""Plain JSON-like aliases for values produced by the stdlib `json` module.

These describe the untyped side of the textual boundary; the conversion
engine itself works on `nativejson.json_value.JsonValue`.
"""

from typing import TypeAlias


JSONScalar: TypeAlias = str | int | float | bool | None
JSONValue: TypeAlias = JSONScalar | list["JSONValue"] | dict[str, "JSONValue"]
JSONObject: TypeAlias = dict[str, JSONValue]
JSONArray: TypeAlias = list[JSONValue]
