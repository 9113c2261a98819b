"""
Text presentations of a DiffResult.

Three layouts are supported:
- inline: one marked line per change (+, -, ~, !)
- side-by-side: a pipe-delimited table with aligned columns
- summary: a single "Added: N, Removed: M" line

Groups are always emitted in the order added, modified, removed, local-only,
and keys within a group keep the diff's insertion order. Colour is applied
by a separate colorizer so layout never depends on the terminal.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Sequence, Tuple, Union

import click
from rich.cells import cell_len

from .differ import DiffResult
from .errors import UnknownDiffFormatError
from .escaping import quote_env


logger = logging.getLogger(__name__)

Colorizer = Callable[[str, str], str]

ROLE_COLORS = {
    'added': 'green',
    'removed': 'red',
    'modified': 'yellow',
    'local': 'cyan',
}

TABLE_HEADERS = ("KEY", "LOCAL", "REMOTE", "STATUS")
CELL_SEPARATOR = " | "

SUMMARY_LABELS = (
    ('added', "Added", 'added'),
    ('modified', "Modified", 'modified'),
    ('removed', "Removed", 'removed'),
    ('local_only', "Local-only", 'local'),
)


class DiffFormat(Enum):
    """Diff presentation formats."""
    INLINE = "inline"
    SIDE_BY_SIDE = "side-by-side"
    SUMMARY = "summary"

    @classmethod
    def parse(cls, value: Union["DiffFormat", str]) -> "DiffFormat":
        """
        Resolve a format name to a DiffFormat.

        Raises:
            UnknownDiffFormatError: If value does not name one of the formats
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownDiffFormatError(str(value), [f.value for f in cls]) from None


@dataclass(frozen=True)
class RenderOptions:
    """How to present a diff."""
    format: Union[DiffFormat, str] = DiffFormat.INLINE
    colorize: bool = False


def plain(text: str, role: str) -> str:
    """Colorizer that leaves text untouched."""
    return text


def ansi(text: str, role: str) -> str:
    """Colorizer that wraps text in the ANSI colour for its role."""
    return click.style(text, fg=ROLE_COLORS[role])


def get_colorizer(colorize: bool) -> Colorizer:
    return ansi if colorize else plain


def format_inline(result: DiffResult, color: Colorizer = plain) -> str:
    """Render one marked line per change."""
    lines: List[str] = []

    for key, value in result.added.items():
        lines.append(color(f"+ {key}={quote_env(value)}", 'added'))

    for key, change in result.modified.items():
        lines.append(color(f"~ {key}", 'modified'))
        lines.append("  " + color(f"- {quote_env(change.old)}", 'removed'))
        lines.append("  " + color(f"+ {quote_env(change.new)}", 'added'))

    for key, value in result.removed.items():
        lines.append(color(f"- {key}={quote_env(value)}", 'removed'))

    for key, value in result.local_only.items():
        lines.append(color(f"! {key}={quote_env(value)}", 'local'))

    return '\n'.join(lines)


def _visible_char(char: str) -> str:
    if char == '\t':
        return '\\t'
    if char == '\r':
        return '\\r'
    if ord(char) < 0x20 or ord(char) == 0x7f:
        return f'\\x{ord(char):02x}'
    return char


def _table_cell(text: str) -> str:
    # Control characters have no display width; a literal pipe would break
    # column splitting
    text = quote_env(text).replace('|', '\\|')
    return ''.join(_visible_char(char) for char in text)


def _table_rows(result: DiffResult) -> List[Tuple[str, str, str, str]]:
    rows = []
    for key, value in result.added.items():
        rows.append((key, "", value, "added"))
    for key, change in result.modified.items():
        rows.append((key, change.old, change.new, "modified"))
    for key, value in result.removed.items():
        rows.append((key, value, "", "removed"))
    for key, value in result.local_only.items():
        rows.append((key, value, "", "local"))

    return [
        (_table_cell(key), _table_cell(old), _table_cell(new), status)
        for key, old, new, status in rows
    ]


def column_widths(rows: Sequence[Sequence[str]]) -> List[int]:
    """Maximum display width of each column across all rows."""
    return [max(cell_len(cell) for cell in column) for column in zip(*rows)]


def _pad(text: str, width: int) -> str:
    return text + ' ' * (width - cell_len(text))


def _table_line(cells: Sequence[str]) -> str:
    return "| " + CELL_SEPARATOR.join(cells) + " |"


def format_side_by_side(result: DiffResult, color: Colorizer = plain) -> str:
    """
    Render the diff as a table of key, local value, remote value and status.

    Every cell is right-padded to its column width, and the separator row
    reuses the same widths, so the header and separator share pipe
    positions exactly.
    """
    rows = _table_rows(result)
    widths = column_widths([TABLE_HEADERS] + rows)

    lines = [
        _table_line([_pad(label, width) for label, width in zip(TABLE_HEADERS, widths)]),
        _table_line(['-' * width for width in widths]),
    ]

    for row in rows:
        cells = [_pad(cell, width) for cell, width in zip(row, widths)]
        cells[-1] = color(cells[-1], row[-1])
        lines.append(_table_line(cells))

    return '\n'.join(lines)


def format_summary(result: DiffResult, color: Colorizer = plain) -> str:
    """Render non-zero category counts on one line."""
    counts = result.counts()
    parts = [
        color(f"{label}: {counts[category]}", role)
        for category, label, role in SUMMARY_LABELS
        if counts[category] > 0
    ]
    return ', '.join(parts)


PRESENTERS: Dict[DiffFormat, Callable[[DiffResult, Colorizer], str]] = {
    DiffFormat.INLINE: format_inline,
    DiffFormat.SIDE_BY_SIDE: format_side_by_side,
    DiffFormat.SUMMARY: format_summary,
}


def format_diff(result: DiffResult, options: RenderOptions = RenderOptions()) -> str:
    """
    Render a diff for display.

    Args:
        result: Output of differ.diff()
        options: Layout and colour choice

    Returns:
        Rendered text without a trailing newline; empty string when the
        diff has no entries

    Raises:
        UnknownDiffFormatError: If options.format is not a known layout
    """
    diff_format = DiffFormat.parse(options.format)

    if result.is_empty:
        return ""

    logger.debug("Presenting diff as %s (colorize=%s)", diff_format.value, options.colorize)
    return PRESENTERS[diff_format](result, get_colorizer(options.colorize))
