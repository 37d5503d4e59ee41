"""Comment stripping that respects string literals.

Works on physical lines. A block comment that is not closed on its own line
pulls in following physical lines until the terminator is found, so one call
may consume several lines; the caller continues after the returned index.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence


def find_string_end(text: str, start: int) -> int:
    """Return the index of the quote closing a literal opened before ``start``.

    A backslash protects the character after it. Returns -1 when the literal
    runs to the end of ``text``.
    """
    i = start
    while i < len(text):
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if ch == '"':
            return i
        i += 1
    return -1


def scan_logical_line(raw_lines: Sequence[str], index: int) -> tuple[str, int]:
    """Strip comments from ``raw_lines[index]``.

    Returns the trimmed logical line (possibly empty) and the index of the last
    physical line consumed.
    """
    line = raw_lines[index].strip()
    i = 0
    while i < len(line) - 1:
        ch = line[i]
        if ch == '"':
            end = find_string_end(line, i + 1)
            if end == -1:
                break
            i = end + 1
            continue
        if ch != "/":
            i += 1
            continue

        nxt = line[i + 1]
        if nxt == "/":
            line = line[:i].rstrip()
            break
        if nxt != "*":
            i += 1
            continue

        end = line.find("*/", i + 2)
        if end != -1:
            line = line[:i] + line[end + 2 :]
            continue

        while end == -1 and index + 1 < len(raw_lines):
            index += 1
            end = raw_lines[index].find("*/")
        if end == -1:
            # Unterminated block comment: drop everything from its start.
            line = line[:i].rstrip()
            break
        line = line[:i] + raw_lines[index][end + 2 :]

    return line.strip(), index


def iter_logical_lines(raw_lines: Sequence[str]) -> Iterator[str]:
    """Yield the non-empty comment-free logical lines of a file."""
    index = 0
    while index < len(raw_lines):
        text, index = scan_logical_line(raw_lines, index)
        index += 1
        if text:
            yield text


def count_brace_balance(lines: Sequence[str]) -> int:
    """Return opened minus closed curly braces outside string literals."""
    balance = 0
    for line in lines:
        i = 0
        while i < len(line):
            ch = line[i]
            if ch == '"':
                end = find_string_end(line, i + 1)
                if end == -1:
                    break
                i = end
            elif ch == "{":
                balance += 1
            elif ch == "}":
                balance -= 1
            i += 1
    return balance
