"""
Snapshot renderers: turn a secret mapping into env, JSON, YAML or shell
export text.

Entry order always follows the input mapping's insertion order so output
is byte-reproducible.
"""

import json
import logging
from enum import Enum
from typing import Callable, Dict, Mapping, Union

from .errors import UnknownFormatError
from .escaping import quote_env, quote_export, yaml_entry


logger = logging.getLogger(__name__)

SecretMap = Mapping[str, str]


class OutputFormat(Enum):
    """Snapshot output formats."""
    ENV = "env"
    JSON = "json"
    YAML = "yaml"
    EXPORT = "export"

    @classmethod
    def parse(cls, value: Union["OutputFormat", str]) -> "OutputFormat":
        """
        Resolve a format name to an OutputFormat.

        Raises:
            UnknownFormatError: If value does not name one of the formats
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownFormatError(str(value), [f.value for f in cls]) from None


def format_env(secrets: SecretMap) -> str:
    """One KEY=value line per entry."""
    return '\n'.join(f"{key}={quote_env(value)}" for key, value in secrets.items())


def format_json(secrets: SecretMap) -> str:
    """The whole mapping as a JSON object with 2-space indentation."""
    return json.dumps(dict(secrets), indent=2, ensure_ascii=False)


def format_yaml(secrets: SecretMap) -> str:
    """One YAML block per entry."""
    return '\n'.join(yaml_entry(key, value) for key, value in secrets.items())


def format_export(secrets: SecretMap) -> str:
    """One export KEY="value" statement per entry."""
    return '\n'.join(f"export {key}={quote_export(value)}" for key, value in secrets.items())


RENDERERS: Dict[OutputFormat, Callable[[SecretMap], str]] = {
    OutputFormat.ENV: format_env,
    OutputFormat.JSON: format_json,
    OutputFormat.YAML: format_yaml,
    OutputFormat.EXPORT: format_export,
}


def format_secrets(secrets: SecretMap, format: Union[OutputFormat, str]) -> str:
    """
    Render a secret mapping in the requested format.

    Args:
        secrets: Ordered mapping of secret names to values
        format: OutputFormat member or its name ("env", "json", "yaml", "export")

    Returns:
        Rendered text without a trailing newline

    Raises:
        UnknownFormatError: If format is not one of the known formats
    """
    output_format = OutputFormat.parse(format)
    logger.debug("Rendering %d secrets as %s", len(secrets), output_format.value)
    return RENDERERS[output_format](secrets)
