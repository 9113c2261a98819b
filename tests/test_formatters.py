"""
Tests for the snapshot renderers.
"""

import json

import pytest
from envsnap.core.errors import UnknownFormatError
from envsnap.core.formatters import OutputFormat, format_secrets


class TestEnvFormat:
    """Test KEY=value output."""

    def test_simple(self):
        assert format_secrets({"DEBUG": "true"}, "env") == "DEBUG=true"

    def test_spaces_quoted(self):
        assert format_secrets({"KEY": "value with spaces"}, "env") == 'KEY="value with spaces"'

    def test_quotes_escaped(self):
        assert format_secrets({"KEY": 'value "with" quotes'}, "env") == 'KEY="value \\"with\\" quotes"'

    def test_insertion_order_kept(self):
        """Entries are never alphabetized."""
        secrets = {"ZETA": "1", "ALPHA": "2", "MID": "3"}
        assert format_secrets(secrets, "env") == "ZETA=1\nALPHA=2\nMID=3"

    def test_empty_value(self):
        assert format_secrets({"EMPTY": ""}, "env") == "EMPTY="


class TestJsonFormat:
    """Test JSON output."""

    def test_two_space_indent(self):
        assert format_secrets({"A": "1", "B": "2"}, "json") == '{\n  "A": "1",\n  "B": "2"\n}'

    def test_round_trip(self):
        """Parsing the JSON output gives back the same mapping, order included."""
        secrets = {"Z": 'quote " here', "A": "line1\nline2", "U": "ünïcödé", "S": "$HOME `cmd`"}
        parsed = json.loads(format_secrets(secrets, "json"))
        assert parsed == secrets
        assert list(parsed) == list(secrets)


class TestYamlFormat:
    """Test YAML output."""

    def test_multiline_block(self):
        assert format_secrets({"KEY": "line1\nline2\nline3"}, "yaml") == "KEY: |\n  line1\n  line2\n  line3"

    def test_mixed_entries(self):
        secrets = {"DEBUG": "true", "URL": "http://x", "CERT": "a\nb"}
        expected = 'DEBUG: true\nURL: "http://x"\nCERT: |\n  a\n  b'
        assert format_secrets(secrets, "yaml") == expected


class TestExportFormat:
    """Test shell export output."""

    def test_special_characters(self):
        assert format_secrets({"KEY": "value$with`special"}, "export") == 'export KEY="value\\$with\\`special"'

    def test_multiple_lines(self):
        assert format_secrets({"A": "1", "B": "two"}, "export") == 'export A="1"\nexport B="two"'


class TestEmptyMap:
    """Test rendering of an empty snapshot."""

    @pytest.mark.parametrize("fmt", ["env", "yaml", "export"])
    def test_empty_string(self, fmt):
        assert format_secrets({}, fmt) == ""

    def test_json_empty_object(self):
        assert format_secrets({}, "json") == "{}"


class TestFormatDispatch:
    """Test format selection."""

    def test_accepts_enum(self):
        assert format_secrets({"A": "1"}, OutputFormat.EXPORT) == 'export A="1"'

    def test_unknown_format_raises(self):
        with pytest.raises(UnknownFormatError) as exc_info:
            format_secrets({"A": "1"}, "toml")

        assert exc_info.value.format == "toml"
        assert "toml" in str(exc_info.value)
        assert "env" in exc_info.value.hint

    def test_unknown_format_is_value_error(self):
        with pytest.raises(ValueError):
            format_secrets({}, "")

    def test_format_names_are_case_sensitive(self):
        """No fuzzy matching: ENV is not env."""
        with pytest.raises(UnknownFormatError):
            format_secrets({}, "ENV")
