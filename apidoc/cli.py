"""CLI for extracting triple-slash comments from XML documentation files."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from apidoc.comments import (
    CommentParseError,
    ParserContext,
    ReferenceCollector,
    declared_names,
    iter_member_comments,
    parse_comment,
)
from apidoc.config import settings

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(levelname)-5.5s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


def _read_members(xml_path: Path) -> list[tuple[str, str]] | None:
    """Read every member comment from a documentation file, or None on failure."""
    try:
        return list(iter_member_comments(xml_path.read_bytes()))
    except OSError as exc:
        logger.error("Cannot read %s: %s", xml_path, exc)
    except CommentParseError as exc:
        logger.error("Cannot parse %s: %s", xml_path, exc)
    return None


def extract_member(
    member_xml: str,
    normalize: bool,
    raw: bool,
    params: list[str] | None = None,
    typeparams: list[str] | None = None,
) -> dict[str, Any]:
    """Parse one member comment into a JSON-ready dict.

    Args:
        member_xml: The ``<member>`` fragment.
        normalize: Trim each line of extracted content.
        raw: Keep inline markup (see/seealso/paramref) as written.
        params: Parameter names to extract; discovered from the comment if None.
        typeparams: Type parameter names; discovered from the comment if None.
    """
    collector = ReferenceCollector()
    context = ParserContext(
        normalize=normalize,
        preserve_raw_inline_comments=raw,
        reference_sink=collector,
    )
    if params is None:
        params = declared_names(member_xml, "param")
    if typeparams is None:
        typeparams = declared_names(member_xml, "typeparam")

    parsed = parse_comment(
        member_xml, context, parameters=params, type_parameters=typeparams
    )
    result = parsed.to_dict()
    result["references"] = collector.unique_references
    return result


def extract_command(
    xml_path: Path,
    member_id: str | None = None,
    normalize: bool = True,
    raw: bool = False,
    params: list[str] | None = None,
    typeparams: list[str] | None = None,
) -> int:
    """Print the parsed comments of a documentation file as JSON."""
    members = _read_members(xml_path)
    if members is None:
        return 1

    if member_id is not None:
        members = [(name, xml) for name, xml in members if name == member_id]
        if not members:
            logger.error("Member %s not found in %s", member_id, xml_path)
            return 1

    output = {
        name: extract_member(xml, normalize, raw, params, typeparams)
        for name, xml in members
    }
    logger.info("Extracted %d member comments from %s", len(output), xml_path)
    print(json.dumps(output, indent=2, ensure_ascii=False))
    return 0


def references_command(xml_path: Path) -> int:
    """Print every id referenced from a documentation file, one per line."""
    members = _read_members(xml_path)
    if members is None:
        return 1

    collector = ReferenceCollector()
    context = ParserContext.from_settings(settings, reference_sink=collector)
    for _, member_xml in members:
        parse_comment(
            member_xml,
            context,
            parameters=declared_names(member_xml, "param"),
            type_parameters=declared_names(member_xml, "typeparam"),
        )

    for reference in collector.unique_references:
        print(reference)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description="Extract triple-slash documentation comments"
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Extract command
    extract_parser = subparsers.add_parser(
        "extract", help="Print parsed member comments as JSON"
    )
    extract_parser.add_argument(
        "file",
        type=Path,
        help="Compiler-generated XML documentation file",
    )
    extract_parser.add_argument(
        "--member",
        help="Only extract this member id (e.g. M:Foo.Bar(System.String))",
    )
    extract_parser.add_argument(
        "--raw",
        action="store_true",
        default=settings.preserve_raw_inline_comments,
        help="Keep <see>, <seealso> and <paramref> markup as written",
    )
    extract_parser.add_argument(
        "--no-normalize",
        dest="normalize",
        action="store_false",
        default=settings.normalize,
        help="Keep the original indentation of comment lines",
    )
    extract_parser.add_argument(
        "--param",
        dest="params",
        nargs="+",
        help="Parameter names to extract (default: those documented)",
    )
    extract_parser.add_argument(
        "--typeparam",
        dest="typeparams",
        nargs="+",
        help="Type parameter names to extract (default: those documented)",
    )

    # References command
    references_parser = subparsers.add_parser(
        "references", help="List ids referenced by <see>/<seealso> markup"
    )
    references_parser.add_argument(
        "file",
        type=Path,
        help="Compiler-generated XML documentation file",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.command == "extract":
        return extract_command(
            xml_path=args.file,
            member_id=args.member,
            normalize=args.normalize,
            raw=args.raw,
            params=args.params,
            typeparams=args.typeparams,
        )

    elif args.command == "references":
        return references_command(args.file)

    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
