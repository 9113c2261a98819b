"""
envsnap core modules.

Includes:
- escaping: Per-format quoting rules for scalar values
- formatters: env / JSON / YAML / export renderers
- differ: Snapshot comparison and merge
- presenter: Inline, table and summary diff output
- lexer: .env file reader
- errors: Exception types
"""

from . import errors
from . import escaping
from . import formatters
from . import differ
from . import presenter
from . import lexer

__all__ = [
    "errors",
    "escaping",
    "formatters",
    "differ",
    "presenter",
    "lexer",
]
