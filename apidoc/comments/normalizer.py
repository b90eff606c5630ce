"""Whitespace normalization for extracted comment content.

Compilers keep the indentation of every continuation line of a triple-slash
comment, so a summary spanning three lines comes out as::

    \\n        First line\\n        second line\\n

Markdown treats four leading spaces as a code block. Trimming every line
(while keeping the line breaks) removes the indentation without touching
nested markup such as ``<para>`` or ``<code>``.
"""

from __future__ import annotations

import re

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def normalize_comment_text(content: str | None) -> str | None:
    """Trim each line of ``content`` and then the whole result.

    Line breaks are kept (as ``\\n``). Tabs used for indentation are trimmed
    like any other whitespace. Applying this twice gives the same result as
    applying it once.
    """
    if not content:
        return content
    lines = (line.strip() for line in _LINE_BREAK.split(content))
    return "\n".join(lines).strip()
