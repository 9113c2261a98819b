"""
Tests for the .env reader.
"""

import pytest
from envsnap.core.formatters import format_secrets
from envsnap.core.lexer import (
    Lexer,
    TokenType,
    get_keys,
    loads,
    parse,
    unescape_double_quoted,
)


class TestTokenTypes:
    """Test line classification."""

    def test_blank_and_comment_lines(self):
        tokens = parse("# comment\n\n   \nKEY=value\n")
        assert [t.type for t in tokens] == [
            TokenType.COMMENT,
            TokenType.BLANK_LINE,
            TokenType.BLANK_LINE,
            TokenType.KEY_VALUE,
        ]

    def test_line_without_equals_is_comment(self):
        tokens = parse("not an assignment\n")
        assert tokens[0].type == TokenType.COMMENT

    def test_export_prefix(self):
        tokens = parse("export API_KEY=secret\n")
        assert tokens[0].has_export
        assert tokens[0].key == "API_KEY"
        assert tokens[0].value == "secret"

    def test_raw_kept(self):
        line = "  KEY = value  \n"
        assert Lexer(line).tokenize()[0].raw == line


class TestValues:
    """Test value extraction."""

    def test_equals_in_value(self):
        assert loads("URL=postgres://u:p@h/db?a=b\n") == {"URL": "postgres://u:p@h/db?a=b"}

    def test_surrounding_whitespace_trimmed(self):
        assert loads("KEY =  value  \n") == {"KEY": "value"}

    def test_double_quotes_removed_and_unescaped(self):
        assert loads('KEY="say \\"hi\\"\\nbye"\n') == {"KEY": 'say "hi"\nbye'}

    def test_single_quotes_kept_literal(self):
        assert loads("KEY='a\\nb'\n") == {"KEY": "a\\nb"}

    def test_empty_value(self):
        assert loads("EMPTY=\n") == {"EMPTY": ""}

    def test_lone_quote_not_stripped(self):
        assert loads('KEY="\n') == {"KEY": '"'}


class TestGetKeys:
    """Test mapping extraction."""

    def test_file_order(self):
        secrets = get_keys(parse("B=2\n# c\nA=1\n"))
        assert list(secrets) == ["B", "A"]

    def test_last_assignment_wins(self):
        assert loads("A=1\nA=2\n") == {"A": "2"}

    def test_empty_content(self):
        assert loads("") == {}


class TestEnvFormatRoundTrip:
    """Reading env-formatted output gives back the original values."""

    @pytest.mark.parametrize("value", [
        "plain",
        "value with spaces",
        'value "with" quotes',
        "line1\nline2",
        "",
        "a=b#c",
    ])
    def test_round_trip(self, value):
        rendered = format_secrets({"KEY": value}, "env")
        assert loads(rendered + "\n") == {"KEY": value}

    @pytest.mark.parametrize("value, reread", [
        ("'quoted'", "quoted"),
        ("tab\t", "tab"),
        ("C:\\new dir", "C:\new dir"),
    ])
    def test_lossy_values(self, value, reread):
        """Outside the lossless subset the value read back differs."""
        rendered = format_secrets({"KEY": value}, "env")
        assert loads(rendered + "\n") == {"KEY": reread}


def test_unescape_leaves_other_backslashes():
    assert unescape_double_quoted("a\\tb\\") == "a\\tb\\"
