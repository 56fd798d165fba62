"""Command line entry point: print matching elements of a document.

    python -m tagparser index.html title
    python -m tagparser https://example.com/ a
    python -m tagparser page.html --attr name q
"""

from __future__ import annotations

import argparse
import logging
import sys

from .document import Document
from .errors import TagParserError


def format_element(element) -> str:
    parts = [f"<{element.tag_name}"]
    for key, value in sorted(element.attributes.items()):
        parts.append(f' {key}="{value}"')
    text = element.inner_text
    if not text:
        return "".join(parts) + " />"
    return "".join(parts) + f">{text}</{element.tag_name}>"


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tagparser", description="Query tags in an HTML document.")
    parser.add_argument("source", help="URL, file path or literal markup")
    parser.add_argument("tag", nargs="?", help="tag name to list")
    parser.add_argument("--attr", nargs=2, metavar=("KEY", "VALUE"), help="match elements by attribute value")
    parser.add_argument("--id", dest="element_id", help="print the element with this id")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        document = Document(args.source)
    except TagParserError as exc:
        print(f"tagparser: {exc}", file=sys.stderr)
        return 1
    if not document.records:
        print(f"tagparser: nothing to parse: {args.source}", file=sys.stderr)
        return 1

    if args.element_id is not None:
        element = document.get_element_by_id(args.element_id)
        elements = [element] if element is not None else []
    elif args.attr:
        elements = document.get_elements_by_attribute(*args.attr)
    elif args.tag:
        elements = document.get_elements_by_tag_name(args.tag)
    else:
        elements = document.find_all(lambda element: not element.is_closing)

    for element in elements:
        print(format_element(element))
    return 0


if __name__ == "__main__":
    sys.exit(main())
