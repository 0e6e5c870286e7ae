"""Identifier helpers for generated source code."""

import re

_NON_IDENTIFIER = re.compile(r"\W", re.ASCII)


def python_identifier(value: str) -> str:
    """Replace every character that is not valid in a Python identifier with ``_``."""
    return _NON_IDENTIFIER.sub("_", value)


def type_prefix(node_type: str) -> str:
    """CamelCase a snake_case node type, e.g. ``tool_call`` -> ``ToolCall``."""
    return "".join(part[:1].upper() + part[1:] for part in node_type.split("_") if part)


def single_line(text: str) -> str:
    """Make text safe for a one-line comment.

    Non-printable characters (NUL, line breaks, other controls) become spaces
    and runs of whitespace collapse to one space.
    """
    printable = "".join(ch if ch.isprintable() else " " for ch in text)
    return " ".join(printable.split())
