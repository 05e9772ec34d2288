"""
html5-tree - An HTML document model with CSS selector queries and HTML serialization.
"""

import logging

from html5_tree.dom import (Attribute, Attributes, CaseSensitivity, Comment, Document,
                            DocumentFragment, DocumentType, Element, ExpandedName, Node,
                            NodeType, ProcessingInstruction, QualName, Text)
from html5_tree.errors import SerializationError
from html5_tree.parser import HTMLParser, parse_html, parse_fragment
from html5_tree.serialization import SerializeOpts, TraversalScope, serialize, to_html

# Package information
__version__ = "0.1.0"
__author__ = "html5-tree developers"
__description__ = "An HTML document model with CSS selector queries and HTML serialization"

# Applications opt in to output through setup_logging
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'Attribute', 'Attributes', 'CaseSensitivity', 'Comment', 'Document',
    'DocumentFragment', 'DocumentType', 'Element', 'ExpandedName', 'Node',
    'NodeType', 'ProcessingInstruction', 'QualName', 'Text',
    'SerializationError', 'HTMLParser', 'parse_html', 'parse_fragment',
    'SerializeOpts', 'TraversalScope', 'serialize', 'to_html',
]
