"""Utility functions for code generation."""

from agentforge.utils.identifiers import (
    python_identifier,
    single_line,
    type_prefix,
)

__all__ = [
    "python_identifier",
    "single_line",
    "type_prefix",
]
