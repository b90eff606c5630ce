"""Comment-id (``cref``) recognition.

Compilers write cross references in documentation comments as comment ids:
a one-letter kind (N, T, M, P, F or E), a colon, then the symbol path, e.g.
``T:System.Collections.Generic.List`1`` or
``M:System.String.Join(System.String,System.String[])``.

Anything else (``!:Dictionary<TKey,string>`` is what a compiler emits when it
cannot bind the reference) is not a usable id.
"""

from __future__ import annotations

import re

# Matched with fullmatch, so a trailing newline is not accepted
COMMENT_ID_PATTERN = re.compile(r"(?P<kind>[NTMPFE]):(?P<id>\S+)")

# Length of the "T:" style prefix
KIND_PREFIX_LENGTH = 2


def is_comment_id(value: str | None) -> bool:
    """Return True if ``value`` is a well-formed comment id."""
    if not value:
        return False
    return COMMENT_ID_PATTERN.fullmatch(value) is not None


def strip_kind_prefix(value: str) -> str:
    """Drop the kind prefix: ``T:A.B`` -> ``A.B``."""
    return value[KIND_PREFIX_LENGTH:]
