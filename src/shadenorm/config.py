"""Parse options for shader normalization."""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_MAX_INCLUDE_DEPTH = 50
# Expansion recurses through the call stack; stay well inside the interpreter limit.
MAX_INCLUDE_DEPTH_LIMIT = 200
DEFAULT_SEGMENT_MARKERS: frozenset[str] = frozenset({"CGINCLUDE", "CGPROGRAM"})


@dataclass(frozen=True)
class ParseOptions:
    """Controls include expansion and compile-segment detection.

    ``max_include_depth`` is the number of include expansions one top-level
    parse may attempt. Every ``#include`` that is followed consumes one unit,
    whether or not the target turns out to exist.
    """

    max_include_depth: int = DEFAULT_MAX_INCLUDE_DEPTH
    segment_markers: frozenset[str] = field(default=DEFAULT_SEGMENT_MARKERS)
    include_prefix: str = "#include "
    encoding: str = "utf-8-sig"

    def __post_init__(self) -> None:
        if not 0 <= self.max_include_depth <= MAX_INCLUDE_DEPTH_LIMIT:
            raise ValueError(
                f"max_include_depth must be between 0 and {MAX_INCLUDE_DEPTH_LIMIT}, "
                f"got {self.max_include_depth}"
            )
        if not isinstance(self.segment_markers, frozenset):
            object.__setattr__(self, "segment_markers", frozenset(self.segment_markers))
