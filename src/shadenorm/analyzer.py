"""Top-level shader parse: normalization followed by property extraction."""

from __future__ import annotations

from pathlib import Path

from shadenorm.config import ParseOptions
from shadenorm.diagnostics import DiagnosticPolicy
from shadenorm.errors import ParseError, ShadenormError
from shadenorm.includes import ExpansionState, IncludeBudget, IncludeFrame, expand_file, read_source
from shadenorm.models import ParsedShader
from shadenorm.properties import extract_properties
from shadenorm.scanner import count_brace_balance


def parse_shader(
    source: str | Path,
    options: ParseOptions | None = None,
    policy: DiagnosticPolicy | None = None,
) -> ParsedShader:
    """Normalize a shader file and extract its property identifiers.

    Args:
        source: Path to the top-level shader file.
        options: Include budget and segment markers. Defaults to ``ParseOptions()``.
        policy: Which diagnostic codes to suppress. Escalation to errors is
            applied separately by ``enforce_policy`` once the parse is done.

    Returns:
        ParsedShader with the normalized lines, property identifiers and any
        include diagnostics.

    Raises:
        ParseError: If the top-level file cannot be read. Failures inside
            included files never raise.
    """
    options = options or ParseOptions()
    path = Path(source).resolve()
    try:
        unit = read_source(path, options.encoding)
    except OSError as e:
        raise ParseError(f"Cannot read shader file: {e}") from e

    # Fresh budget per call so repeated parses never share what is left of it.
    frame = IncludeFrame(
        path=path,
        budget=IncludeBudget(options.max_include_depth),
        visited={path},
        is_top_level=True,
    )
    state = ExpansionState(policy=policy)
    lines = expand_file(frame, unit.lines, options, state)

    return ParsedShader(
        path=str(path),
        lines=lines,
        properties=extract_properties(lines),
        diagnostics=state.diagnostics,
        include_counts=dict(state.include_counts),
        brace_balance=count_brace_balance(lines),
    )


def write_lines(result: ParsedShader, destination: Path) -> None:
    """Write the normalized lines to a file, one per line."""
    try:
        destination.write_text("".join(f"{line}\n" for line in result.lines), encoding="utf-8")
    except OSError as e:
        raise ShadenormError(f"Cannot write normalized lines to {destination}: {e}") from e
