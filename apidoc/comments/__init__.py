"""Triple-slash documentation comment parsing."""

from apidoc.comments.comment_id import is_comment_id, strip_kind_prefix
from apidoc.comments.extractor import (
    declared_names,
    get_example,
    get_exceptions,
    get_param,
    get_remarks,
    get_returns,
    get_see_alsos,
    get_sees,
    get_summary,
    get_type_parameter,
    iter_member_comments,
    parse_comment,
)
from apidoc.comments.models import (
    CommentParseError,
    CrefInfo,
    ParsedComment,
    ParserContext,
    ReferenceCollector,
)
from apidoc.comments.normalizer import normalize_comment_text
from apidoc.comments.resolver import resolve_inline_tags

__all__ = [
    # Comment ids
    "is_comment_id",
    "strip_kind_prefix",
    # Field extraction
    "get_summary",
    "get_remarks",
    "get_example",
    "get_returns",
    "get_param",
    "get_type_parameter",
    "get_exceptions",
    "get_sees",
    "get_see_alsos",
    "parse_comment",
    "declared_names",
    "iter_member_comments",
    # Models
    "CommentParseError",
    "CrefInfo",
    "ParsedComment",
    "ParserContext",
    "ReferenceCollector",
    # Text processing
    "normalize_comment_text",
    "resolve_inline_tags",
]
