"""Diagnostic codes and policy controls for include expansion failures."""

from __future__ import annotations

import warnings
from dataclasses import dataclass
from typing import TYPE_CHECKING

from shadenorm.errors import DiagnosticError

if TYPE_CHECKING:
    from shadenorm.models import Diagnostic, ParsedShader

INCLUDE_NOT_FOUND = "S01"
INCLUDE_IO_ERROR = "S02"
INCLUDE_DEPTH_EXCEEDED = "S03"

KIND_BY_CODE: dict[str, str] = {
    INCLUDE_NOT_FOUND: "IncludeNotFound",
    INCLUDE_IO_ERROR: "IncludeIOError",
    INCLUDE_DEPTH_EXCEEDED: "IncludeDepthExceeded",
}

KNOWN_CODES: frozenset[str] = frozenset(KIND_BY_CODE)

# Missing includes usually name built-ins shipped with the shading environment.
INFORMATIONAL_CODES: frozenset[str] = frozenset({INCLUDE_NOT_FOUND})


class ShaderWarning(UserWarning):
    """Warning with a machine-readable code."""

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        super().__init__(f"[{code}] {message}")


@dataclass(frozen=True)
class DiagnosticPolicy:
    """Controls how individual diagnostic codes are handled."""

    warn_as_error: frozenset[str] = frozenset()
    suppress: frozenset[str] = frozenset()


def report_diagnostic(
    diagnostics: list[Diagnostic],
    diagnostic: Diagnostic,
    *,
    policy: DiagnosticPolicy | None = None,
) -> None:
    """Record a diagnostic and issue a ``ShaderWarning`` for it.

    The diagnostic is always recorded. The warning is skipped for
    informational codes and for codes in ``policy.suppress``.
    """
    diagnostics.append(diagnostic)
    if diagnostic.code in INFORMATIONAL_CODES:
        return
    if policy is not None and diagnostic.code in policy.suppress:
        return
    warnings.warn(ShaderWarning(diagnostic.code, diagnostic.message), stacklevel=2)


def enforce_policy(result: ParsedShader, policy: DiagnosticPolicy | None) -> None:
    """Raise ``DiagnosticError`` if any recorded code is escalated by the policy."""
    if policy is None:
        return
    for diagnostic in result.diagnostics:
        if diagnostic.code in policy.warn_as_error:
            raise DiagnosticError(f"[{diagnostic.code}] {diagnostic.message}")


def parse_code_list(raw: str) -> frozenset[str]:
    """Parse a comma-separated string of S-codes and validate them.

    Raises ``ValueError`` for unknown codes.
    """
    codes: set[str] = set()
    for token in raw.split(","):
        token = token.strip()
        if not token:
            continue
        if token not in KNOWN_CODES:
            raise ValueError(f"Unknown diagnostic code: {token!r} (known: {sorted(KNOWN_CODES)})")
        codes.add(token)
    return frozenset(codes)
