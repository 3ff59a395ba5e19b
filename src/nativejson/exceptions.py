"""Exception markers for nativejson internals."""

from __future__ import annotations


class NeverRaise(RuntimeError):
    """Sentinel exception for code paths that should be unreachable.

    Raising this exception signals a broken internal invariant (a malformed
    JSON number, a bad configuration value). It is never used to report a
    conversion failure; those are returned as values.
    """

    def __init__(self, message: str, *, env: dict[str, object] | None = None):
        super().__init__(message)
        self.reason = message
        self.env = dict(env or {})


class NeverThrown(NeverRaise):
    """Alias for NeverRaise used by the explicit never() marker."""
