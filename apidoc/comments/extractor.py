"""Extract documentation fields from a member's triple-slash comment.

Usage::

    context = ParserContext(reference_sink=collector)
    summary = get_summary(xml, context)
    exceptions = get_exceptions(xml, context)

Every field is extracted on its own: inline markup is resolved inside that
field only, then the field is read from the resolved fragment.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator

from lxml import etree

from apidoc.comments.comment_id import is_comment_id, strip_kind_prefix
from apidoc.comments.document import (
    PARSE_ERRORS,
    inner_xml,
    parse_comment_xml,
    text_content,
)
from apidoc.comments.models import (
    CommentParseError,
    CrefInfo,
    ParsedComment,
    ParserContext,
)
from apidoc.comments.normalizer import normalize_comment_text
from apidoc.comments.resolver import resolve_inline_tags

logger = logging.getLogger(__name__)

ErrorHandler = Callable[[Exception], str | None]

SUMMARY_SELECTOR = "/member/summary"
REMARKS_SELECTOR = "/member/remarks"
EXAMPLE_SELECTOR = "/member/example"
RETURNS_SELECTOR = "/member/returns"
PARAM_SELECTOR = "/member/param[@name=$name]"
TYPEPARAM_SELECTOR = "/member/typeparam[@name=$name]"
EXCEPTION_SELECTOR = "/member/exception"
SEE_SELECTOR = "/member/see"
SEEALSO_SELECTOR = "/member/seealso"


def ignore_parse_error(error: Exception) -> str | None:
    """Default single-node error handler: a broken comment has no field."""
    return None


# ---------------------------------------------------------------------------
# Single-node fields
# ---------------------------------------------------------------------------


def get_summary(
    xml: str | None,
    context: ParserContext | None = None,
    error_handler: ErrorHandler | None = ignore_parse_error,
) -> str | None:
    """Return the inner markup of ``<summary>``."""
    return _get_single_node(xml, SUMMARY_SELECTOR, context, error_handler)


def get_remarks(
    xml: str | None,
    context: ParserContext | None = None,
    error_handler: ErrorHandler | None = ignore_parse_error,
) -> str | None:
    """Return the inner markup of ``<remarks>``."""
    return _get_single_node(xml, REMARKS_SELECTOR, context, error_handler)


def get_example(
    xml: str | None,
    context: ParserContext | None = None,
    error_handler: ErrorHandler | None = ignore_parse_error,
) -> str | None:
    return _get_single_node(xml, EXAMPLE_SELECTOR, context, error_handler)


def get_returns(
    xml: str | None,
    context: ParserContext | None = None,
    error_handler: ErrorHandler | None = ignore_parse_error,
) -> str | None:
    return _get_single_node(xml, RETURNS_SELECTOR, context, error_handler)


def get_param(
    xml: str | None,
    name: str | None,
    context: ParserContext | None = None,
    error_handler: ErrorHandler | None = ignore_parse_error,
) -> str | None:
    """Return the description of parameter ``name``.

    An empty ``name`` returns None without looking at ``xml``.
    """
    if not xml or not name:
        return None
    return _get_single_node(
        xml, PARAM_SELECTOR, context, error_handler, variables={"name": name}
    )


def get_type_parameter(
    xml: str | None,
    name: str | None,
    context: ParserContext | None = None,
    error_handler: ErrorHandler | None = ignore_parse_error,
) -> str | None:
    """Return the description of generic type parameter ``name``."""
    if not xml or not name:
        return None
    return _get_single_node(
        xml, TYPEPARAM_SELECTOR, context, error_handler, variables={"name": name}
    )


def _get_single_node(
    xml: str | None,
    selector: str,
    context: ParserContext | None,
    error_handler: ErrorHandler | None,
    variables: dict[str, str] | None = None,
) -> str | None:
    """Resolve inline markup in the selected field, then read it.

    Parse failures go to ``error_handler``; with no handler they are
    raised as CommentParseError.
    """
    if context is None:
        context = ParserContext()
    xml = resolve_inline_tags(xml, selector, context, variables)
    if not xml:
        return None

    try:
        tree = parse_comment_xml(xml)
        nodes = tree.xpath(selector, **(variables or {}))
    except (*PARSE_ERRORS, etree.XPathError) as exc:
        if error_handler is not None:
            return error_handler(exc)
        raise CommentParseError(f"Cannot read {selector}: {exc}") from exc

    if not nodes:
        return None

    # Inner markup, not text, so that <para>, <code> etc. survive
    output = inner_xml(nodes[0])
    if context.normalize:
        output = normalize_comment_text(output)
    return output


# ---------------------------------------------------------------------------
# Multi-node fields
# ---------------------------------------------------------------------------


def get_exceptions(
    xml: str | None, context: ParserContext | None = None
) -> list[CrefInfo] | None:
    """Return the documented exceptions, or None when there are none."""
    return _get_multiple_cref_info(xml, EXCEPTION_SELECTOR, context) or None


def get_sees(
    xml: str | None, context: ParserContext | None = None
) -> list[CrefInfo] | None:
    return _get_multiple_cref_info(xml, SEE_SELECTOR, context) or None


def get_see_alsos(
    xml: str | None, context: ParserContext | None = None
) -> list[CrefInfo] | None:
    return _get_multiple_cref_info(xml, SEEALSO_SELECTOR, context) or None


def _get_multiple_cref_info(
    xml: str | None, selector: str, context: ParserContext | None
) -> list[CrefInfo]:
    """Collect CrefInfo for every node at ``selector`` with a valid cref.

    Each collected id is also reported to the reference sink. Nodes whose
    cref is missing or malformed are skipped. A fragment that cannot be
    parsed yields no entries.
    """
    if not xml:
        return []
    if context is None:
        context = ParserContext()
    xml = resolve_inline_tags(xml, selector, context)

    try:
        nodes = parse_comment_xml(xml).xpath(selector)
    except PARSE_ERRORS as exc:
        logger.debug("No %s entries read: %s", selector, exc)
        return []

    results: list[CrefInfo] = []
    for node in nodes:
        cref = node.get("cref")
        if not is_comment_id(cref):
            continue

        reference = strip_kind_prefix(cref)
        description = text_content(node)
        if context.normalize:
            description = normalize_comment_text(description)
        results.append(CrefInfo(type=reference, description=description or None))
        try:
            context.reference_sink(reference)
        except Exception as exc:
            logger.warning("Reference sink failed for %s: %s", reference, exc)
    return results


# ---------------------------------------------------------------------------
# Whole comments
# ---------------------------------------------------------------------------


def parse_comment(
    xml: str | None,
    context: ParserContext | None = None,
    parameters: Iterable[str] = (),
    type_parameters: Iterable[str] = (),
) -> ParsedComment:
    """Extract every field of a member's comment.

    Args:
        xml: The ``<member>`` fragment.
        context: Parser options and reference sink.
        parameters: Parameter names to look up.
        type_parameters: Generic type parameter names to look up.
    """
    if context is None:
        context = ParserContext()
    return ParsedComment(
        summary=get_summary(xml, context),
        remarks=get_remarks(xml, context),
        returns=get_returns(xml, context),
        example=get_example(xml, context),
        parameters={name: get_param(xml, name, context) for name in parameters},
        type_parameters={
            name: get_type_parameter(xml, name, context) for name in type_parameters
        },
        exceptions=get_exceptions(xml, context),
        sees=get_sees(xml, context),
        see_alsos=get_see_alsos(xml, context),
    )


def declared_names(xml: str | None, tag: str) -> list[str]:
    """Names of the ``<param>`` (or ``<typeparam>``) entries of a comment."""
    if not xml:
        return []
    try:
        root = parse_comment_xml(xml).getroot()
    except PARSE_ERRORS:
        return []
    names = (elem.get("name") for elem in root.findall(tag))
    return [name for name in names if name]


def iter_member_comments(document_xml: str | bytes) -> Iterator[tuple[str, str]]:
    """Yield ``(member id, member fragment)`` from a compiler XML doc file.

    The file looks like ``<doc><assembly>...</assembly><members>
    <member name="T:A.B">...</member>...</members></doc>``.

    Raises:
        CommentParseError: If the file is not well-formed.
    """
    try:
        root = parse_comment_xml(document_xml).getroot()
    except PARSE_ERRORS as exc:
        raise CommentParseError(f"Invalid documentation file: {exc}") from exc

    for member in root.iterfind("members/member"):
        member_id = member.get("name")
        if not member_id:
            logger.warning("Skipping <member> without a name attribute")
            continue
        # Serialize without the tail so the fragment is a standalone document
        yield member_id, etree.tostring(member, encoding="unicode", with_tail=False)
