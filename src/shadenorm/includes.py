"""Recursive ``#include`` expansion with an include budget and segment-scoped cycle checks."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path

from shadenorm.braces import isolate_braces
from shadenorm.config import ParseOptions
from shadenorm.diagnostics import (
    INCLUDE_DEPTH_EXCEEDED,
    INCLUDE_IO_ERROR,
    INCLUDE_NOT_FOUND,
    DiagnosticPolicy,
    report_diagnostic,
)
from shadenorm.models import Diagnostic
from shadenorm.scanner import iter_logical_lines


@dataclass
class SourceUnit:
    """An absolute file path and its raw physical lines."""

    path: Path
    lines: list[str]


class IncludeBudget:
    """Remaining include expansions for one top-level parse."""

    def __init__(self, limit: int) -> None:
        self.remaining = limit

    def consume(self) -> bool:
        """Spend one expansion. Returns False once the budget is exhausted."""
        self.remaining -= 1
        return self.remaining >= 0


@dataclass
class IncludeFrame:
    """Expansion state for the file currently being processed.

    ``visited`` belongs to the current compile segment and is shared with every
    frame below it, so a header expanded deep in one branch is skipped in its
    siblings too.
    """

    path: Path
    budget: IncludeBudget
    visited: set[Path] = field(default_factory=set)
    is_top_level: bool = False

    def child(self, path: Path) -> IncludeFrame:
        return IncludeFrame(path=path, budget=self.budget, visited=self.visited)

    def start_segment(self) -> None:
        self.visited.clear()


@dataclass
class ExpansionState:
    """Side outputs collected across one top-level parse."""

    diagnostics: list[Diagnostic] = field(default_factory=list)
    include_counts: Counter[str] = field(default_factory=Counter)
    policy: DiagnosticPolicy | None = None

    def report(self, code: str, message: str, frame: IncludeFrame, include: str) -> None:
        diagnostic = Diagnostic(code=code, message=message, path=str(frame.path), include=include)
        report_diagnostic(self.diagnostics, diagnostic, policy=self.policy)


def read_source(path: Path, encoding: str = "utf-8-sig") -> SourceUnit:
    """Read a file's physical lines.

    Raises ``OSError`` on failure, or ``ValueError`` for a path with a NUL byte.
    """
    with open(path, encoding=encoding, errors="replace") as f:
        lines = [line.rstrip("\r\n") for line in f]
    return SourceUnit(path=path, lines=lines)


def parse_include_target(line: str) -> str | None:
    """Return the text between the first and last double quote, if any."""
    first = line.find('"')
    last = line.rfind('"')
    if first == -1 or first == last:
        return None
    return line[first + 1 : last]


def expand_file(
    frame: IncludeFrame,
    raw_lines: list[str],
    options: ParseOptions,
    state: ExpansionState,
) -> list[str]:
    """Scan, expand and brace-normalize one file's lines."""
    output: list[str] = []
    for text in iter_logical_lines(raw_lines):
        if frame.is_top_level and text in options.segment_markers:
            frame.start_segment()

        if text.startswith(options.include_prefix):
            target = parse_include_target(text)
            if target is None:
                output.append(text)
            else:
                output.extend(_expand_include(frame, text, target, options, state))
            continue

        output.extend(isolate_braces(text))
    return output


def _expand_include(
    frame: IncludeFrame,
    directive: str,
    target: str,
    options: ParseOptions,
    state: ExpansionState,
) -> list[str]:
    """Expand one directive, or return it unchanged when it cannot be expanded."""
    if not frame.budget.consume():
        state.report(
            INCLUDE_DEPTH_EXCEEDED,
            f"Include budget of {options.max_include_depth} exhausted at {target!r} "
            f"in {frame.path}",
            frame,
            target,
        )
        return [directive]

    try:
        include_path = (frame.path.parent / target).resolve()
    except (OSError, RuntimeError, ValueError) as e:
        # NUL bytes or symlink loops in the target path.
        state.report(INCLUDE_IO_ERROR, f"Cannot resolve include {target!r}: {e}", frame, target)
        return [directive]

    if include_path in frame.visited:
        return []

    try:
        unit = read_source(include_path, options.encoding)
    except FileNotFoundError:
        state.report(
            INCLUDE_NOT_FOUND,
            f"Include {target!r} not found (assumed built-in): {include_path}",
            frame,
            target,
        )
        return [directive]
    except (OSError, ValueError) as e:
        state.report(INCLUDE_IO_ERROR, f"Cannot read include {target!r}: {e}", frame, target)
        return [directive]

    frame.visited.add(include_path)
    state.include_counts[str(include_path)] += 1
    return expand_file(frame.child(include_path), unit.lines, options, state)
