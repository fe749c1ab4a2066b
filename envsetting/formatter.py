"""Formatting of user-facing error messages."""
from __future__ import annotations

import textwrap
from typing import Optional

INDENT = 4


def formatted_error(name: str, description: Optional[str] = None) -> str:
    """Return the message used when a required variable is missing.

    The description is dedented to its minimum common indent and then the
    whole block is re-indented by four spaces, so multi-line descriptions
    written as indented triple-quoted strings read naturally.
    """

    lines = [f"Missing required environment variable: {name}"]
    if description:
        lines.append(unindent(description).strip("\n"))
    body = "\n".join(lines)
    return "\n" + textwrap.indent(body, " " * INDENT, lambda line: True) + "\n"


def unindent(text: str) -> str:
    """Remove the common leading whitespace of ``text``."""

    return textwrap.dedent(text)


__all__ = ["formatted_error", "unindent"]
