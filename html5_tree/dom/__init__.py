"""
DOM implementation for the HTML tree.
This package provides the node types, attribute storage and selector
matching of the document model.
"""

from .names import (NULL_NS, HTML_NS, MATHML_NS, SVG_NS, XLINK_NS, XML_NS, XMLNS_NS,
                    ExpandedName, QualName)
from .attr import Attribute
from .case_sensitivity import CaseSensitivity
from .attributes import Attributes, AttributeRef, ClassCache, SingleClass, BloomClasses, Entry
from .node import Node, NodeType
from .element import Element
from .text import Text
from .comment import Comment
from .doctype import DocumentType
from .processing_instruction import ProcessingInstruction
from .document import Document, DocumentFragment, QUIRKS, LIMITED_QUIRKS, NO_QUIRKS
from .selector_engine import SelectorEngine

__all__ = [
    'NULL_NS', 'HTML_NS', 'MATHML_NS', 'SVG_NS', 'XLINK_NS', 'XML_NS', 'XMLNS_NS',
    'ExpandedName', 'QualName', 'Attribute', 'CaseSensitivity',
    'Attributes', 'AttributeRef', 'ClassCache', 'SingleClass', 'BloomClasses', 'Entry',
    'Node', 'NodeType', 'Element', 'Text', 'Comment', 'DocumentType',
    'ProcessingInstruction', 'Document', 'DocumentFragment',
    'QUIRKS', 'LIMITED_QUIRKS', 'NO_QUIRKS', 'SelectorEngine',
]
