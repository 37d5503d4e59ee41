"""Pydantic v2 models for parse results."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from shadenorm.diagnostics import (
    INCLUDE_DEPTH_EXCEEDED,
    INCLUDE_IO_ERROR,
    INCLUDE_NOT_FOUND,
    KIND_BY_CODE,
)


class Diagnostic(BaseModel):
    """A branch-local failure recorded while expanding includes."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    code: str
    message: str
    path: str
    include: str | None = None

    @field_validator("code")
    @classmethod
    def _known_code(cls, v: str) -> str:
        if v not in KIND_BY_CODE:
            raise ValueError(f"Unknown diagnostic code: {v!r}")
        return v

    @computed_field  # type: ignore[prop-decorator]
    @property
    def kind(self) -> str:
        return KIND_BY_CODE[self.code]


class ParsedShader(BaseModel):
    """Normalized lines, property identifiers and diagnostics for one shader."""

    model_config = ConfigDict(extra="forbid")

    path: str
    lines: list[str] = Field(default_factory=list)
    properties: list[str] = Field(default_factory=list)
    diagnostics: list[Diagnostic] = Field(default_factory=list)
    include_counts: dict[str, int] = Field(default_factory=dict)
    brace_balance: int = 0

    @property
    def has_unresolved_include(self) -> bool:
        return any(d.code in (INCLUDE_NOT_FOUND, INCLUDE_IO_ERROR) for d in self.diagnostics)

    @property
    def exceeded_include_depth(self) -> bool:
        return any(d.code == INCLUDE_DEPTH_EXCEEDED for d in self.diagnostics)

    @property
    def mismatched_braces(self) -> bool:
        return self.brace_balance != 0

    def multi_include_files(self) -> dict[str, int]:
        """Files expanded more than once, typically once per compile segment."""
        return {path: count for path, count in self.include_counts.items() if count > 1}

    def diagnostics_by_code(self, code: str) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.code == code]
