"""
Quoting and escaping rules for scalar secret values.

Each output kind has its own rules:
- env: double quotes when the value has a space, a double quote or a newline
- yaml: double quotes for ':', '#' or surrounding whitespace; block literal
  for multi-line values
- export: always double quoted, shell metacharacters escaped
"""

from typing import List


ENV_QUOTE_TRIGGERS = (' ', '"', '\n')
YAML_QUOTE_TRIGGERS = (':', '#')
EXPORT_ESCAPES = {
    '$': '\\$',
    '`': '\\`',
    '"': '\\"',
}


def env_needs_quotes(value: str) -> bool:
    """Check whether a value must be double-quoted in a KEY=value line."""
    return any(char in value for char in ENV_QUOTE_TRIGGERS)


def quote_env(value: str) -> str:
    """
    Render a value for a KEY=value line.

    Embedded double quotes become \\" and newlines become the two-character
    sequence \\n. Values without a trigger character are returned untouched.

    Args:
        value: Raw secret value

    Returns:
        Value ready to follow the '=' sign
    """
    if not env_needs_quotes(value):
        return value

    escaped = value.replace('"', '\\"').replace('\n', '\\n')
    return f'"{escaped}"'


def yaml_needs_quotes(value: str) -> bool:
    """Check whether a single-line value must be double-quoted in YAML."""
    if any(char in value for char in YAML_QUOTE_TRIGGERS):
        return True
    return value != value.strip()


def yaml_entry(key: str, value: str) -> str:
    """
    Render one key as a YAML mapping entry.

    Multi-line values become a block literal (KEY: |) with every segment
    indented two spaces and no further escaping.

    Args:
        key: Secret name
        value: Raw secret value

    Returns:
        One or more lines joined with '\\n'
    """
    if '\n' in value:
        lines: List[str] = [f"{key}: |"]
        lines.extend(f"  {segment}" for segment in value.split('\n'))
        return '\n'.join(lines)

    if yaml_needs_quotes(value):
        # Backslash is the escape character inside YAML double quotes
        escaped = value.replace('\\', '\\\\').replace('"', '\\"')
        return f'{key}: "{escaped}"'

    return f"{key}: {value}"


def quote_export(value: str) -> str:
    """
    Render a value for an `export KEY="value"` statement.

    $, ` and " each get a preceding backslash; nothing else is escaped.
    """
    escaped = ''.join(EXPORT_ESCAPES.get(char, char) for char in value)
    return f'"{escaped}"'
