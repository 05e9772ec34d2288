#!/usr/bin/env python3
"""
html5-tree - Command line entry point

Parses an HTML file, optionally selects nodes with a CSS selector and
writes them back out as HTML.
"""

import argparse
import logging
import sys
from typing import List, Optional

import cssselect

from html5_tree import __version__
from html5_tree.parser import HTMLParser
from html5_tree.serialization import SerializeOpts, TraversalScope
from html5_tree.utils.config import Config
from html5_tree.utils.logging import log_exception, setup_logging

logger = logging.getLogger("html5_tree.main")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="html5-tree",
        description="Parse HTML, select nodes with CSS and serialize them back to HTML")

    parser.add_argument("input", help="HTML file to read, or - for standard input")
    parser.add_argument("--select", metavar="SELECTOR", help="Only output elements matching a CSS selector")
    parser.add_argument("--first", action="store_true", help="Only output the first match")
    parser.add_argument("--children-only", action="store_true",
                        help="Output the children of each node but not the node itself")
    parser.add_argument("--output", metavar="FILE", help="Write to a file instead of standard output")
    parser.add_argument("--config", metavar="PATH", help="Path to a JSON configuration file")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"html5-tree {__version__}")

    return parser.parse_args(argv)


def _read_input(path: str) -> bytes:
    if path == "-":
        return sys.stdin.buffer.read()
    with open(path, 'rb') as f:
        return f.read()


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        int: Process exit status
    """
    args = parse_args(argv)

    config = Config(args.config)
    setup_logging(log_file=config.get('logging.log_file'),
                  console_level="DEBUG" if args.debug else config.get('logging.console_level', "WARNING"),
                  file_level=config.get('logging.file_level', "DEBUG"))

    try:
        markup = _read_input(args.input)
    except OSError as e:
        log_exception(logger, e, f"Cannot read {args.input}")
        return 1

    document = HTMLParser(config).parse(markup)

    if args.select:
        try:
            if args.first:
                match = document.select_first(args.select)
                nodes = [match] if match is not None else []
            else:
                nodes = document.select(args.select)
        except cssselect.SelectorError as e:
            logger.error(f"Invalid selector '{args.select}': {e}")
            return 1
        logger.debug(f"Selector '{args.select}' matched {len(nodes)} elements")
    else:
        nodes = [document]

    scope = TraversalScope.CHILDREN_ONLY if args.children_only else TraversalScope.INCLUDE_NODE
    opts = SerializeOpts.from_config(config, traversal_scope=scope)

    try:
        if args.output:
            with open(args.output, 'wb') as out:
                _write_nodes(nodes, out, opts, separate=bool(args.select))
        else:
            _write_nodes(nodes, sys.stdout.buffer, opts, separate=bool(args.select))
            sys.stdout.buffer.flush()
    except OSError as e:
        log_exception(logger, e, "Cannot write output")
        return 1

    return 0


def _write_nodes(nodes, writer, opts: SerializeOpts, separate: bool) -> None:
    for node in nodes:
        node.serialize(writer, opts)
        if separate:
            writer.write(b"\n")


if __name__ == "__main__":
    sys.exit(main())
