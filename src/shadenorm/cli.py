"""Click CLI entry point for shadenorm."""

from __future__ import annotations

import json
from pathlib import Path

import click

from shadenorm import __version__
from shadenorm.analyzer import parse_shader, write_lines
from shadenorm.config import DEFAULT_MAX_INCLUDE_DEPTH, DEFAULT_SEGMENT_MARKERS, ParseOptions
from shadenorm.diagnostics import DiagnosticPolicy, enforce_policy, parse_code_list
from shadenorm.errors import ShadenormError
from shadenorm.models import ParsedShader


def _build_policy(warn_as_error: str | None, suppress_warning: str | None) -> DiagnosticPolicy | None:
    """Parse CLI diagnostic options into a DiagnosticPolicy, or None if unset."""
    if warn_as_error is None and suppress_warning is None:
        return None
    try:
        wae = parse_code_list(warn_as_error) if warn_as_error else frozenset()
        sup = parse_code_list(suppress_warning) if suppress_warning else frozenset()
    except ValueError as e:
        raise click.ClickException(str(e)) from e
    return DiagnosticPolicy(warn_as_error=wae, suppress=sup)


def _build_options(max_include_depth: int, segment_markers: tuple[str, ...]) -> ParseOptions:
    try:
        return ParseOptions(
            max_include_depth=max_include_depth,
            segment_markers=frozenset(segment_markers) if segment_markers else DEFAULT_SEGMENT_MARKERS,
        )
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--max-include-depth") from e


def parse_options(f):
    """Options shared by every command that parses a shader."""
    f = click.option(
        "--suppress-warning",
        "suppress_warning",
        type=str,
        default=None,
        help="Comma-separated S-codes to suppress (e.g. S02).",
    )(f)
    f = click.option(
        "--warn-as-error",
        "warn_as_error",
        type=str,
        default=None,
        help="Comma-separated S-codes to treat as errors (e.g. S02,S03).",
    )(f)
    f = click.option(
        "--segment-marker",
        "segment_markers",
        multiple=True,
        help="Line that starts a new compile segment. May be repeated. "
        "Defaults to CGINCLUDE and CGPROGRAM.",
    )(f)
    f = click.option(
        "--max-include-depth",
        type=int,
        default=DEFAULT_MAX_INCLUDE_DEPTH,
        show_default=True,
        help="Number of include expansions allowed per parse.",
    )(f)
    return f


def _parse(
    input_file: Path,
    max_include_depth: int,
    segment_markers: tuple[str, ...],
    policy: DiagnosticPolicy | None,
) -> ParsedShader:
    options = _build_options(max_include_depth, segment_markers)
    try:
        return parse_shader(input_file, options=options, policy=policy)
    except ShadenormError as e:
        raise click.ClickException(str(e)) from e


def _enforce(result: ParsedShader, policy: DiagnosticPolicy | None) -> None:
    try:
        enforce_policy(result, policy)
    except ShadenormError as e:
        raise click.ClickException(str(e)) from e


def _summary(result: ParsedShader) -> dict:
    """JSON-ready summary of one parse, without the normalized lines."""
    payload = result.model_dump(mode="json", exclude={"lines"})
    payload["line_count"] = len(result.lines)
    payload["mismatched_braces"] = result.mismatched_braces
    payload["has_unresolved_include"] = result.has_unresolved_include
    payload["exceeded_include_depth"] = result.exceeded_include_depth
    payload["multi_include_files"] = result.multi_include_files()
    return payload


def render_text(result: ParsedShader) -> str:
    """Render an inspection summary as plain text."""
    out = [f"shader: {result.path}"]
    out.append(f"  lines: {len(result.lines)}")
    out.append(f"  properties: {len(result.properties)}")
    if result.mismatched_braces:
        out.append(f"  braces: mismatched ({result.brace_balance:+d})")
    else:
        out.append("  braces: balanced")
    if result.diagnostics:
        out.append("  diagnostics:")
        for d in result.diagnostics:
            out.append(f"    [{d.code}] {d.kind}: {d.message}")
    multi = result.multi_include_files()
    if multi:
        out.append("  multi-include files:")
        for path, count in multi.items():
            out.append(f"    {Path(path).name}: {count}")
    return "\n".join(out) + "\n"


@click.group()
@click.version_option(version=__version__, prog_name="shadenorm")
def main() -> None:
    """shadenorm: normalize shader sources and list their material properties."""


@main.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "-o",
    "--output",
    type=click.Path(path_type=Path),
    default=None,
    help="Write normalized lines to this file instead of stdout.",
)
@parse_options
def normalize(
    input_file: Path,
    output: Path | None = None,
    max_include_depth: int = DEFAULT_MAX_INCLUDE_DEPTH,
    segment_markers: tuple[str, ...] = (),
    warn_as_error: str | None = None,
    suppress_warning: str | None = None,
) -> None:
    """Print the comment-free, include-expanded lines of a shader."""
    policy = _build_policy(warn_as_error, suppress_warning)
    result = _parse(input_file, max_include_depth, segment_markers, policy)

    if output is not None:
        try:
            write_lines(result, output)
        except ShadenormError as e:
            raise click.ClickException(str(e)) from e
        click.echo(f"Normalized: {output}", err=True)
    else:
        for line in result.lines:
            click.echo(line)
    _enforce(result, policy)


@main.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    show_default=True,
    help="Output format.",
)
@parse_options
def properties(
    input_file: Path,
    output_format: str = "text",
    max_include_depth: int = DEFAULT_MAX_INCLUDE_DEPTH,
    segment_markers: tuple[str, ...] = (),
    warn_as_error: str | None = None,
    suppress_warning: str | None = None,
) -> None:
    """List the property identifiers declared in a shader's Properties block."""
    policy = _build_policy(warn_as_error, suppress_warning)
    result = _parse(input_file, max_include_depth, segment_markers, policy)

    if output_format == "json":
        click.echo(json.dumps(result.properties, indent=2))
    else:
        for name in result.properties:
            click.echo(name)
    _enforce(result, policy)


@main.command()
@click.argument(
    "input_files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    show_default=True,
    help="Inspection output format.",
)
@parse_options
def inspect(
    input_files: tuple[Path, ...],
    output_format: str = "text",
    max_include_depth: int = DEFAULT_MAX_INCLUDE_DEPTH,
    segment_markers: tuple[str, ...] = (),
    warn_as_error: str | None = None,
    suppress_warning: str | None = None,
) -> None:
    """Summarize parse results and include diagnostics for one or more shaders."""
    policy = _build_policy(warn_as_error, suppress_warning)
    results = [
        _parse(input_file, max_include_depth, segment_markers, policy)
        for input_file in input_files
    ]

    if output_format == "json":
        click.echo(json.dumps({"shaders": [_summary(r) for r in results]}, indent=2))
    else:
        for result in results:
            click.echo(render_text(result), nl=False)
    for result in results:
        _enforce(result, policy)
