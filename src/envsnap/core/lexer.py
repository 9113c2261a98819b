"""
Token-based .env reader.

Turns .env file content into an ordered secret mapping. Double-quoted
values are unescaped the same way the env formatter escapes them, so
most text produced by format_secrets(..., "env") reads back to the same
map. Values wrapped in quotes, values with a leading or trailing tab and
quoted values holding a literal backslash-n do not.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional
from enum import Enum


class TokenType(Enum):
    """Token types for .env file parsing."""
    COMMENT = "comment"
    BLANK_LINE = "blank_line"
    KEY_VALUE = "key_value"


@dataclass
class Token:
    """A single line of a .env file."""
    type: TokenType
    raw: str
    key: Optional[str] = None
    value: Optional[str] = None
    has_export: bool = False

    def __repr__(self):
        if self.type == TokenType.KEY_VALUE:
            export = "export " if self.has_export else ""
            return f"Token({self.type.value}, {export}{self.key}={self.value})"
        return f"Token({self.type.value}, {repr(self.raw[:20])}...)"


def unescape_double_quoted(value: str) -> str:
    """Reverse env escaping: \\" becomes " and \\n becomes a newline."""
    out = []
    i = 0
    while i < len(value):
        char = value[i]
        if char == '\\' and i + 1 < len(value) and value[i + 1] in '"n':
            out.append('"' if value[i + 1] == '"' else '\n')
            i += 2
            continue
        out.append(char)
        i += 1
    return ''.join(out)


class Lexer:
    """
    Line lexer for .env files.

    Each physical line becomes one token; comments and blank lines are kept
    as tokens so callers can tell them apart from assignments.
    """

    def __init__(self, content: str):
        self.content = content
        self.lines = content.splitlines(keepends=True)

    def tokenize(self) -> List[Token]:
        return [self._parse_line(line) for line in self.lines]

    def _parse_line(self, line: str) -> Token:
        """Parse a single line into a token."""
        stripped = line.strip()

        if not stripped:
            return Token(type=TokenType.BLANK_LINE, raw=line)

        if stripped.startswith('#') or '=' not in stripped:
            return Token(type=TokenType.COMMENT, raw=line)

        has_export = False
        working_line = stripped
        if stripped.startswith('export '):
            has_export = True
            working_line = stripped[len('export '):]

        # Split on the first '=' only; values may contain '='
        key, _, value = working_line.partition('=')
        key = key.strip()
        value = value.strip()

        if len(value) >= 2 and value[0] == value[-1] == '"':
            value = unescape_double_quoted(value[1:-1])
        elif len(value) >= 2 and value[0] == value[-1] == "'":
            value = value[1:-1]

        return Token(
            type=TokenType.KEY_VALUE,
            raw=line,
            key=key,
            value=value,
            has_export=has_export
        )


def parse(content: str) -> List[Token]:
    """
    Parse .env file content into tokens.

    Args:
        content: String content of .env file

    Returns:
        List of Token objects, one per line
    """
    return Lexer(content).tokenize()


def get_keys(tokens: List[Token]) -> Dict[str, str]:
    """
    Extract key-value pairs from tokens in file order.

    A key assigned twice keeps its last value but its first position.
    """
    return {
        token.key: token.value
        for token in tokens
        if token.type == TokenType.KEY_VALUE and token.key
    }


def loads(content: str) -> Dict[str, str]:
    """Parse .env content straight into an ordered secret mapping."""
    return get_keys(parse(content))
