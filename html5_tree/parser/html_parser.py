"""
HTML parser implementation.
This module parses HTML with BeautifulSoup and html5lib and converts the
resulting soup into the document model.
"""

import logging
import re
from typing import List, Optional, Tuple, Union

from bs4 import BeautifulSoup, FeatureNotFound
from bs4.element import (CData, Comment as SoupComment, Declaration, Doctype,
                         NamespacedAttribute, NavigableString,
                         ProcessingInstruction as SoupProcessingInstruction, Tag)

from ..dom.attr import Attribute
from ..dom.attributes import Attributes
from ..dom.comment import Comment
from ..dom.doctype import DocumentType
from ..dom.document import NO_QUIRKS, QUIRKS, Document, DocumentFragment
from ..dom.element import Element
from ..dom.names import HTML_NS, NULL_NS, ExpandedName, QualName
from ..dom.node import Node
from ..dom.processing_instruction import ProcessingInstruction
from ..dom.text import Text
from ..utils.logging import PerformanceLogger

logger = logging.getLogger(__name__)

DEFAULT_FEATURES = "html5lib"

_DOCTYPE_PUBLIC = re.compile(r'\s+PUBLIC\s+["\']([^"\']*)["\'](?:\s+["\']([^"\']*)["\'])?', re.IGNORECASE)
_DOCTYPE_SYSTEM = re.compile(r'\s+SYSTEM\s+["\']([^"\']*)["\']', re.IGNORECASE)


def _parse_doctype(content: str) -> Tuple[str, str, str]:
    """Split doctype declaration content into (name, public_id, system_id)."""
    content = content.strip()
    parts = content.split(None, 1)
    name = parts[0] if parts else ""
    rest = content[len(name):]

    match = _DOCTYPE_PUBLIC.match(rest)
    if match:
        return name, match.group(1), match.group(2) or ""
    match = _DOCTYPE_SYSTEM.match(rest)
    if match:
        return name, "", match.group(1)
    return name, "", ""


class HTMLParser:
    """HTML parser using BeautifulSoup with html5lib for full HTML5 support."""

    def __init__(self, config=None):
        """
        Initialize the HTML parser.

        Args:
            config: Optional Config; "parser.features" selects the
                BeautifulSoup tree builder
        """
        self.features = DEFAULT_FEATURES
        if config is not None:
            self.features = config.get('parser.features', DEFAULT_FEATURES)
        self.performance = PerformanceLogger(logger, "HTMLParser")
        logger.debug(f"HTML parser initialized (features: {self.features})")

    def _make_soup(self, markup: Union[str, bytes]) -> BeautifulSoup:
        try:
            return BeautifulSoup(markup, self.features, multi_valued_attributes=None)
        except FeatureNotFound:
            logger.warning(f"Tree builder '{self.features}' not available, falling back to 'html.parser'")
            return BeautifulSoup(markup, 'html.parser', multi_valued_attributes=None)

    def parse(self, markup: Union[str, bytes]) -> Document:
        """
        Parse an HTML document.

        Args:
            markup: HTML text, or bytes in any encoding BeautifulSoup detects

        Returns:
            Document: The parsed document
        """
        self.performance.start("parse")
        soup = self._make_soup(markup)
        document = self.from_soup(soup)
        self.performance.end("parse")
        return document

    def parse_fragment(self, markup: Union[str, bytes]) -> DocumentFragment:
        """
        Parse an HTML fragment.

        The markup is parsed as a document; the content that landed in the
        head and the body, in that order, becomes the fragment's children.

        Args:
            markup: HTML text

        Returns:
            DocumentFragment: The parsed nodes
        """
        soup = self._make_soup(markup)
        fragment = DocumentFragment()

        html = soup.find('html', recursive=False)
        if html is None:
            # Builders that don't synthesize <html> leave the content at the top
            self._convert_children(soup, fragment)
            return fragment

        for section_name in ('head', 'body'):
            section = html.find(section_name, recursive=False)
            if section is not None:
                self._convert_children(section, fragment)

        logger.debug(f"Parsed fragment with {len(fragment.child_nodes)} top-level nodes")
        return fragment

    def from_soup(self, soup: BeautifulSoup) -> Document:
        """
        Convert a BeautifulSoup tree into a Document.

        Any tree builder works; 'html.parser' soups keep processing
        instructions, which html5lib turns into comments.

        Args:
            soup: The parsed soup

        Returns:
            Document: The converted document
        """
        document = Document()
        self._convert_children(soup, document)

        doctype = document.doctype
        if doctype is None or doctype.name.lower() != "html":
            document.quirks_mode = QUIRKS
        else:
            document.quirks_mode = NO_QUIRKS

        logger.debug(f"Converted soup into document (quirks mode: {document.quirks_mode})")
        return document

    def _convert_children(self, source: Tag, parent: Node) -> None:
        """
        Convert the contents of a soup tag into children of a node.

        Nested tags are handled with an explicit stack of (tag, target)
        pairs, so deeply nested markup does not hit the recursion limit.

        Args:
            source: The soup tag (or soup) whose contents are converted
            parent: The node receiving the converted children
        """
        pending = [(source, parent)]
        while pending:
            tag, target = pending.pop()
            for child in tag.contents:
                node = self._convert_node(child)
                if node is None:
                    continue
                target.append_child(node)
                if isinstance(child, Tag):
                    # Template children belong to its contents, not to the element
                    contents = node.template_contents
                    pending.append((child, contents if contents is not None else node))

    def _convert_node(self, node) -> Optional[Node]:
        """
        Convert a single soup node, without its descendants.

        Args:
            node: A bs4 Tag or NavigableString

        Returns:
            The converted node, or None for content with no counterpart
        """
        # Special strings first: they are all NavigableString subclasses
        if isinstance(node, SoupComment):
            return Comment(str(node))

        if isinstance(node, Doctype):
            name, public_id, system_id = _parse_doctype(str(node))
            return DocumentType(name, public_id, system_id)

        if isinstance(node, SoupProcessingInstruction):
            content = str(node)
            # html.parser keeps the closing '?' of XML-style instructions
            if content.endswith('?'):
                content = content[:-1]
            parts = content.split(None, 1)
            target = parts[0] if parts else ""
            data = parts[1] if len(parts) > 1 else ""
            return ProcessingInstruction(target, data)

        if isinstance(node, (CData, Declaration)):
            logger.debug(f"Skipping {type(node).__name__} node")
            return None

        if isinstance(node, NavigableString):
            return Text(str(node))

        if isinstance(node, Tag):
            return self._convert_element(node)

        logger.warning(f"Unknown soup node type: {type(node).__name__}")
        return None

    def _convert_element(self, tag: Tag) -> Element:
        namespace = tag.namespace or HTML_NS
        return Element(QualName(tag.prefix or None, namespace, tag.name),
                       Attributes(self._convert_attributes(tag)))

    @staticmethod
    def _convert_attributes(tag: Tag) -> List[Tuple[ExpandedName, Attribute]]:
        attributes = []
        for key, value in tag.attrs.items():
            if isinstance(value, (list, tuple)):
                value = " ".join(value)

            if isinstance(key, NamespacedAttribute) and key.namespace:
                name = ExpandedName(key.namespace, key.name or str(key))
                attributes.append((name, Attribute(value, key.prefix)))
            else:
                attributes.append((ExpandedName(NULL_NS, str(key)), Attribute(value)))
        return attributes


_default_parser = None


def _get_default_parser() -> HTMLParser:
    global _default_parser
    if _default_parser is None:
        _default_parser = HTMLParser()
    return _default_parser


def parse_html(markup: Union[str, bytes]) -> Document:
    """Parse an HTML document with the shared default parser."""
    return _get_default_parser().parse(markup)


def parse_fragment(markup: Union[str, bytes]) -> DocumentFragment:
    """Parse an HTML fragment with the shared default parser."""
    return _get_default_parser().parse_fragment(markup)
