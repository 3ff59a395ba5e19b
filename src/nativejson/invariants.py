"""Invariant markers for nativejson."""

from __future__ import annotations

from typing import NoReturn

from nativejson.exceptions import NeverThrown


def _format_env(env: dict[str, object]) -> str:
    if not env:
        return ""
    parts = [f"{key}={value!r}" for key, value in sorted(env.items())]
    return " (" + ", ".join(parts) + ")"


def never(reason: str = "", **env: object) -> NoReturn:
    """Mark a code path as intentionally unreachable.

    The optional env payload is attached to the raised exception and rendered
    into its message for debugging.
    """
    message = (reason or "never() marker reached") + _format_env(env)
    raise NeverThrown(message, env=env)

