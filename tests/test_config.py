from __future__ import annotations

from pathlib import Path
import textwrap

import pytest

from nativejson.config import (
    KEY_POLICY_ENV,
    EncoderConfig,
    KeyPolicy,
    current_encoder_config,
    encoder_config_from_table,
    encoder_config_scope,
    encoder_defaults,
    load_config,
    parse_key_policy,
    resolve_encoder_config,
)
from nativejson.exceptions import NeverThrown
from tests.env_helpers import env_scope


def _write_config(path: Path, body: str) -> Path:
    path.write_text(textwrap.dedent(body).strip() + "\n", encoding="utf-8")
    return path


def test_encoder_defaults_reads_toml(tmp_path: Path) -> None:
    _write_config(
        tmp_path / "nativejson.toml",
        """
        [encoder]
        key_policy = "stringify"
        """,
    )
    assert encoder_defaults(root=tmp_path) == {"key_policy": "stringify"}
    assert resolve_encoder_config(root=tmp_path).key_policy is KeyPolicy.STRINGIFY


def test_missing_or_broken_config_reads_as_empty(tmp_path: Path) -> None:
    assert load_config(root=tmp_path) == {}
    broken = _write_config(tmp_path / "broken.toml", "[encoder\nkey_policy = ")
    assert load_config(config_path=broken) == {}
    assert resolve_encoder_config(config_path=broken) == EncoderConfig()


def test_non_table_encoder_section_is_ignored(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path / "nativejson.toml", 'encoder = "strict"')
    assert encoder_defaults(config_path=config_path) == {}


def test_env_overrides_file_and_explicit_value_overrides_env(tmp_path: Path) -> None:
    _write_config(
        tmp_path / "nativejson.toml",
        """
        [encoder]
        key_policy = "strict"
        """,
    )
    with env_scope({KEY_POLICY_ENV: "stringify"}):
        assert resolve_encoder_config(root=tmp_path).key_policy is KeyPolicy.STRINGIFY
        resolved = resolve_encoder_config(root=tmp_path, key_policy="strict")
        assert resolved.key_policy is KeyPolicy.STRICT


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("strict", KeyPolicy.STRICT),
        (" Stringify ", KeyPolicy.STRINGIFY),
        (KeyPolicy.STRICT, KeyPolicy.STRICT),
    ],
)
def test_parse_key_policy(raw: object, expected: KeyPolicy) -> None:
    assert parse_key_policy(raw) is expected


def test_invalid_key_policy_is_rejected() -> None:
    with pytest.raises(NeverThrown):
        parse_key_policy("lenient")
    with pytest.raises(NeverThrown):
        encoder_config_from_table({"key_policy": 3})


def test_config_table_without_policy_uses_defaults() -> None:
    assert encoder_config_from_table(None) == EncoderConfig()
    assert encoder_config_from_table({"unrelated": True}) == EncoderConfig()


def test_encoder_config_normalizes_string_policy() -> None:
    assert EncoderConfig(key_policy="stringify").key_policy is KeyPolicy.STRINGIFY  # type: ignore[arg-type]


def test_config_scope_is_restored_on_exit() -> None:
    assert current_encoder_config() == EncoderConfig()
    stringify = EncoderConfig(key_policy=KeyPolicy.STRINGIFY)
    with encoder_config_scope(stringify) as active:
        assert active is stringify
        assert current_encoder_config() is stringify
    assert current_encoder_config() == EncoderConfig()


def test_nested_config_scopes_unwind_in_order() -> None:
    strict = EncoderConfig(key_policy=KeyPolicy.STRICT)
    stringify = EncoderConfig(key_policy=KeyPolicy.STRINGIFY)
    with encoder_config_scope(stringify):
        with encoder_config_scope(strict):
            assert current_encoder_config() is strict
        assert current_encoder_config() is stringify
    assert current_encoder_config() == EncoderConfig()


def test_package_imports_with_strict_default_config() -> None:
    import nativejson

    assert nativejson.encode is not None
    assert current_encoder_config() == EncoderConfig()
    assert current_encoder_config().key_policy is KeyPolicy.STRICT
