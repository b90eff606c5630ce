"""lxml helpers for comment fragments."""

from __future__ import annotations

from xml.sax.saxutils import escape

from lxml import etree

# lxml raises ValueError (not XMLSyntaxError) for some unusable input,
# e.g. a str that carries an encoding declaration.
PARSE_ERRORS = (etree.XMLSyntaxError, ValueError)


def parse_comment_xml(xml: str | bytes) -> etree._ElementTree:
    """Parse a comment fragment into a mutable tree.

    A fresh parser is created per call so that callers on different
    threads never share one.
    """
    parser = etree.XMLParser(resolve_entities=False, no_network=True)
    root = etree.fromstring(xml, parser)
    return root.getroottree()


def serialize(tree: etree._ElementTree) -> str:
    return etree.tostring(tree, encoding="unicode")


def inner_xml(elem: etree._Element) -> str:
    """Markup between an element's start and end tags."""
    parts: list[str] = []
    if elem.text:
        parts.append(escape(elem.text))
    for child in elem:
        parts.append(etree.tostring(child, encoding="unicode", with_tail=True))
    return "".join(parts)


def text_content(elem: etree._Element) -> str:
    """All descendant text of an element, markup dropped."""
    return "".join(elem.itertext())


def insert_text_after(elem: etree._Element, text: str) -> None:
    """Insert ``text`` immediately after ``elem`` (ahead of its tail)."""
    elem.tail = text + (elem.tail or "")


def remove_keeping_tail(elem: etree._Element) -> None:
    """Remove ``elem`` and its subtree, keeping the text that follows it."""
    parent = elem.getparent()
    if parent is None:
        raise ValueError(f"Cannot remove root element <{elem.tag}>")

    tail = elem.tail or ""
    previous = elem.getprevious()
    if previous is not None:
        previous.tail = (previous.tail or "") + tail
    else:
        parent.text = (parent.text or "") + tail
    parent.remove(elem)
