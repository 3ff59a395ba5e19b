from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum
import os
from pathlib import Path
from typing import Iterator, TypeAlias
import tomllib

from nativejson.invariants import never

DEFAULT_CONFIG_NAME = "nativejson.toml"
KEY_POLICY_ENV = "NATIVEJSON_KEY_POLICY"

TomlScalar: TypeAlias = str | int | float | bool | None | date | datetime | time
TomlValue: TypeAlias = TomlScalar | list["TomlValue"] | dict[str, "TomlValue"]
TomlTable: TypeAlias = dict[str, TomlValue]


class KeyPolicy(str, Enum):
    """How mapping keys that are not null, bool or text are handled.

    `STRICT` rejects them with `KeyNotTextCoercible`. `STRINGIFY` falls back to
    the host's generic text coercion (`str(key)` for Python), so `{1: "x"}`
    encodes as `{"1": "x"}`.
    """

    STRICT = "strict"
    STRINGIFY = "stringify"


def parse_key_policy(value: object) -> KeyPolicy:
    if isinstance(value, KeyPolicy):
        return value
    text = str(value or "").strip().lower()
    try:
        return KeyPolicy(text)
    except ValueError:
        never("invalid key policy", key_policy=value)


@dataclass(frozen=True)
class EncoderConfig:
    key_policy: KeyPolicy = KeyPolicy.STRICT

    def __post_init__(self) -> None:
        object.__setattr__(self, "key_policy", parse_key_policy(self.key_policy))


def env_text(name: str, *, default: str = "") -> str:
    return os.getenv(name, default).strip()


def _load_toml(path: Path) -> TomlTable:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError:
        return {}
    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError:
        return {}
    return data if isinstance(data, dict) else {}


def load_config(root: Path | None = None, config_path: Path | None = None) -> TomlTable:
    if config_path is None:
        base = root if root is not None else Path.cwd()
        config_path = base / DEFAULT_CONFIG_NAME
    return _load_toml(config_path)


def encoder_defaults(
    root: Path | None = None, config_path: Path | None = None
) -> TomlTable:
    data = load_config(root=root, config_path=config_path)
    section = data.get("encoder", {})
    return section if isinstance(section, dict) else {}


def encoder_config_from_table(section: TomlTable | None) -> EncoderConfig:
    if not section:
        return EncoderConfig()
    raw_policy = section.get("key_policy")
    if raw_policy is None:
        return EncoderConfig()
    return EncoderConfig(key_policy=parse_key_policy(raw_policy))


def resolve_encoder_config(
    root: Path | None = None,
    config_path: Path | None = None,
    *,
    key_policy: KeyPolicy | str | None = None,
) -> EncoderConfig:
    """Resolve the encoder configuration.

    Precedence, lowest first: built-in defaults, the `[encoder]` table of
    `nativejson.toml`, `NATIVEJSON_KEY_POLICY`, then an explicit `key_policy`.
    """
    config = encoder_config_from_table(
        encoder_defaults(root=root, config_path=config_path)
    )
    env_policy = env_text(KEY_POLICY_ENV)
    if env_policy:
        config = EncoderConfig(key_policy=parse_key_policy(env_policy))
    if key_policy is not None:
        config = EncoderConfig(key_policy=parse_key_policy(key_policy))
    return config


_ENCODER_CONFIG: ContextVar[EncoderConfig] = ContextVar(
    "nativejson_encoder_config",
    default=EncoderConfig(),
)


def current_encoder_config() -> EncoderConfig:
    return _ENCODER_CONFIG.get()


def set_encoder_config(config: EncoderConfig) -> Token[EncoderConfig]:
    return _ENCODER_CONFIG.set(config)


def reset_encoder_config(token: Token[EncoderConfig]) -> None:
    _ENCODER_CONFIG.reset(token)


@contextmanager
def encoder_config_scope(config: EncoderConfig) -> Iterator[EncoderConfig]:
    token = set_encoder_config(config)
    try:
        yield config
    finally:
        reset_encoder_config(token)
