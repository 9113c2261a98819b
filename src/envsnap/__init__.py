"""
envsnap - Secret snapshot renderer and differ

Compares two snapshots of named secrets and renders either snapshot, or
their difference, as env, JSON, YAML or shell-export text.
"""

__version__ = "0.1.0"

from .core.differ import DiffResult, Modification, apply_diff, detect_local_only_keys, diff
from .core.errors import EnvsnapError, UnknownDiffFormatError, UnknownFormatError
from .core.formatters import OutputFormat, format_secrets
from .core.presenter import DiffFormat, RenderOptions, format_diff

__all__ = [
    "DiffFormat",
    "DiffResult",
    "EnvsnapError",
    "Modification",
    "OutputFormat",
    "RenderOptions",
    "UnknownDiffFormatError",
    "UnknownFormatError",
    "apply_diff",
    "detect_local_only_keys",
    "diff",
    "format_diff",
    "format_secrets",
]
