"""Rewrite inline cross-reference markup in a comment fragment.

Within the selected field, ``<see cref="T:A.B"/>`` and
``<seealso cref="T:A.B"/>`` become ``@'A.B'`` and every resolved id is
reported to the context's reference sink. ``<paramref name="x"/>`` becomes
``*x*`` anywhere in the fragment.

Resolution is best-effort: if the fragment cannot be parsed or rewritten,
it is returned unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from lxml import etree

from apidoc.comments.comment_id import is_comment_id, strip_kind_prefix
from apidoc.comments.document import (
    PARSE_ERRORS,
    insert_text_after,
    parse_comment_xml,
    remove_keeping_tail,
    serialize,
)
from apidoc.comments.models import ParserContext, ReferenceSink

logger = logging.getLogger(__name__)

# Compilers emit this in place of a comment they could not parse.
BADLY_FORMED_COMMENT_MARKER = "<!-- Badly formed XML comment ignored for member "

CROSS_REFERENCE_TAGS = ("see", "seealso")


@dataclass
class _PlannedReplacement:
    elem: etree._Element
    text: str


def resolve_inline_tags(
    xml: str | None,
    selector: str,
    context: ParserContext,
    variables: dict[str, str] | None = None,
) -> str | None:
    """Resolve inline markup inside the field picked by ``selector``.

    Args:
        xml: The member's comment fragment.
        selector: XPath of the field, e.g. ``/member/summary``.
        context: Parser options and reference sink.
        variables: XPath variables used by ``selector`` (e.g. ``name``).

    Returns:
        The rewritten fragment, or ``xml`` unchanged when resolution is
        disabled or fails.
    """
    if not xml or context.preserve_raw_inline_comments:
        return xml
    if xml.startswith(BADLY_FORMED_COMMENT_MARKER):
        return xml

    try:
        tree = parse_comment_xml(xml)
        for tag in CROSS_REFERENCE_TAGS:
            _resolve_cref_links(
                tree, f"{selector}//{tag}[@cref]", variables or {}, context.reference_sink
            )
        _resolve_param_refs(tree)
        return serialize(tree)
    except (*PARSE_ERRORS, etree.XPathError) as exc:
        logger.debug("Leaving comment unresolved for %s: %s", selector, exc)
        return xml
    except Exception as exc:
        # Raised by the reference sink; one comment must not stop the build
        logger.warning("Leaving comment unresolved for %s: %s", selector, exc)
        return xml


def _resolve_cref_links(
    tree: etree._ElementTree,
    path: str,
    variables: dict[str, str],
    reference_sink: ReferenceSink,
) -> None:
    planned: list[_PlannedReplacement] = []
    for elem in tree.xpath(path, **variables):
        value = elem.get("cref")
        # Unbound references (e.g. "!:Dictionary<TKey, string>") stay as-is
        if not is_comment_id(value):
            logger.warning(
                "Invalid cref value %s found in triple-slash comments, ignored.",
                value,
            )
            continue

        reference = strip_kind_prefix(value)
        planned.append(_PlannedReplacement(elem, f"@'{reference}'"))
        reference_sink(reference)

    _apply(planned)


def _resolve_param_refs(tree: etree._ElementTree) -> None:
    planned: list[_PlannedReplacement] = []
    for elem in tree.iter("paramref"):
        name = elem.get("name")
        # A paramref without a name is dropped without replacement text
        planned.append(_PlannedReplacement(elem, f"*{name}*" if name is not None else ""))

    _apply(planned)


def _apply(planned: list[_PlannedReplacement]) -> None:
    """Insert all replacement text first, then remove the original elements."""
    for replacement in planned:
        insert_text_after(replacement.elem, replacement.text)
    for replacement in planned:
        remove_keeping_tail(replacement.elem)
