from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
for entry in (ROOT, ROOT / "src"):
    if str(entry) not in sys.path:
        sys.path.insert(0, str(entry))


import pytest

from nativejson.config import KEY_POLICY_ENV, EncoderConfig, KeyPolicy
from nativejson.host import PythonHost
from tests.env_helpers import restore_env as _restore_env
from tests.env_helpers import set_env as _set_env

TESTDATA = ROOT / "tests" / "testdata"


@pytest.fixture(autouse=True)
def _clean_key_policy_env():
    previous = _set_env({KEY_POLICY_ENV: None})
    try:
        yield
    finally:
        _restore_env(previous)


@pytest.fixture
def host() -> PythonHost:
    return PythonHost()


@pytest.fixture
def stringify_config() -> EncoderConfig:
    return EncoderConfig(key_policy=KeyPolicy.STRINGIFY)


@pytest.fixture
def to_json_table() -> Path:
    return TESTDATA / "to_json.txt"
