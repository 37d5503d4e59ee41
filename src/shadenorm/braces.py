"""Brace isolation for normalized lines."""

from __future__ import annotations

OPEN_BRACE = "{"
CLOSE_BRACE = "}"


def isolate_braces(line: str) -> list[str]:
    """Split a line ending in ``{`` so the brace sits on its own line.

    ``"half4 frag() : SV_Target {"`` becomes
    ``["half4 frag() : SV_Target", "{"]``. Lines not ending in ``{`` are
    returned unchanged as a one-element list.
    """
    if not line.endswith(OPEN_BRACE):
        return [line]
    prefix = line[: -len(OPEN_BRACE)].strip()
    if prefix:
        return [prefix, OPEN_BRACE]
    return [OPEN_BRACE]
