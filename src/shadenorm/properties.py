"""Property identifier extraction from the first ``Properties`` block."""

from __future__ import annotations

import enum
from collections.abc import Sequence

from shadenorm.braces import CLOSE_BRACE, OPEN_BRACE

PROPERTIES_KEYWORD = "Properties"


class BlockState(enum.Enum):
    OUTSIDE = "outside"
    AWAITING_BLOCK_OPEN = "awaiting_block_open"
    INSIDE_BLOCK = "inside_block"


def strip_attributes(line: str) -> str:
    """Remove every ``[...]`` attribute span and trim the result.

    An unclosed ``[`` is left in place along with everything after it.
    """
    start = line.find("[")
    while start != -1:
        end = line.find("]", start + 1)
        if end == -1:
            break
        line = line[:start] + line[end + 1 :]
        start = line.find("[")
    return line.strip()


def property_identifier(line: str) -> str | None:
    """Return the identifier declared on a property line, or None."""
    text = strip_attributes(line)
    paren = text.find("(")
    if paren == -1:
        return None
    return text[:paren].strip()


def extract_properties(lines: Sequence[str]) -> list[str]:
    """Collect property identifiers from the first ``Properties`` block.

    Expects brace-isolated lines: a block opens with a lone ``{`` line and
    closes with a lone ``}`` line. Extraction stops at the end of the first
    block; later blocks are not scanned.
    """
    properties: list[str] = []
    state = BlockState.OUTSIDE
    depth = 0
    entry_depth = -1

    for line in lines:
        if state is BlockState.AWAITING_BLOCK_OPEN:
            if line == OPEN_BRACE:
                entry_depth = depth
                depth += 1
                state = BlockState.INSIDE_BLOCK
                continue
            state = BlockState.OUTSIDE

        if line == OPEN_BRACE:
            depth += 1
        elif line == CLOSE_BRACE:
            depth -= 1
            if state is BlockState.INSIDE_BLOCK and depth == entry_depth:
                break
        elif state is BlockState.INSIDE_BLOCK:
            identifier = property_identifier(line)
            if identifier is not None:
                properties.append(identifier)
        elif line == PROPERTIES_KEYWORD:
            state = BlockState.AWAITING_BLOCK_OPEN

    return properties
