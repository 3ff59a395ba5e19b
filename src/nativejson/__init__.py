"""nativejson package root."""

from nativejson.config import EncoderConfig, KeyPolicy, encoder_config_scope
from nativejson.decoder import decode
from nativejson.encoder import encode
from nativejson.errors import (
    ConversionFailure,
    FailureKind,
    HostError,
    ImpossibleNumber,
    InvalidFloat,
    KeyNotTextCoercible,
    NotRepresentable,
    raise_for_failure,
    to_host_error,
)
from nativejson.exceptions import NeverRaise, NeverThrown
from nativejson.host import PYTHON_HOST, HostContext, PythonHost
from nativejson.json_value import (
    JSON_NULL,
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

__all__ = [
    "__version__",
    "ConversionFailure",
    "EncoderConfig",
    "Err",
    "FailureKind",
    "HostContext",
    "HostError",
    "ImpossibleNumber",
    "InvalidFloat",
    "JSON_NULL",
    "JsonArray",
    "JsonBool",
    "JsonNull",
    "JsonNumber",
    "JsonObject",
    "JsonString",
    "JsonValue",
    "KeyNotTextCoercible",
    "KeyPolicy",
    "NeverRaise",
    "NeverThrown",
    "NotRepresentable",
    "NumberKind",
    "Ok",
    "PYTHON_HOST",
    "PythonHost",
    "decode",
    "encode",
    "encoder_config_scope",
    "raise_for_failure",
    "to_host_error",
]

__version__ = "0.1.0"
