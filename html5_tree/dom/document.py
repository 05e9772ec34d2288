"""
Document implementation for the DOM.
This module implements the Document and DocumentFragment root nodes.
"""

from typing import Optional, Union

from .comment import Comment
from .doctype import DocumentType
from .element import Element
from .names import HTML_NS, QualName
from .node import Node, NodeType
from .processing_instruction import ProcessingInstruction
from .text import Text

QUIRKS = "quirks"
LIMITED_QUIRKS = "limited-quirks"
NO_QUIRKS = "no-quirks"


class Document(Node):
    """
    Document node implementation for the DOM.

    The document is the root of a parsed tree. It has no tag of its own;
    serializing it writes its children.
    """

    def __init__(self, quirks_mode: str = NO_QUIRKS):
        """
        Initialize a new Document.

        Args:
            quirks_mode: One of "quirks", "limited-quirks" or "no-quirks"
        """
        super().__init__(NodeType.DOCUMENT_NODE)
        self.node_name = "#document"
        self.quirks_mode = quirks_mode

    @property
    def doctype(self) -> Optional[DocumentType]:
        """Get the document's DOCTYPE node."""
        for child in self.child_nodes:
            if child.node_type == NodeType.DOCUMENT_TYPE_NODE:
                return child
        return None

    @property
    def document_element(self) -> Optional[Element]:
        """Get the root element, usually <html>."""
        for child in self.child_nodes:
            if child.node_type == NodeType.ELEMENT_NODE:
                return child
        return None

    @property
    def head(self) -> Optional[Element]:
        return self._html_child("head")

    @property
    def body(self) -> Optional[Element]:
        return self._html_child("body")

    def _html_child(self, local_name: str) -> Optional[Element]:
        root = self.document_element
        if root is None:
            return None
        for child in root.element_children():
            if child.name.ns == HTML_NS and child.name.local == local_name:
                return child
        return None

    @property
    def title(self) -> str:
        """The text of the first <title> element, with whitespace collapsed."""
        title_element = self.select_first("title")
        if title_element is None:
            return ""
        return " ".join(title_element.text_contents().split())

    def create_element(self, tag_name: Union[QualName, str], attributes=None) -> Element:
        """
        Create a new element with the specified name.

        Args:
            tag_name: The qualified name, or a local name in the HTML namespace
            attributes: Initial attributes

        Returns:
            The new element
        """
        return Element(tag_name, attributes)

    def create_text_node(self, data: str) -> Text:
        return Text(data)

    def create_comment(self, data: str) -> Comment:
        return Comment(data)

    def create_processing_instruction(self, target: str, data: str) -> ProcessingInstruction:
        return ProcessingInstruction(target, data)

    def create_document_fragment(self) -> 'DocumentFragment':
        return DocumentFragment()

    def _clone_shallow(self) -> 'Document':
        return Document(self.quirks_mode)

    def debug_structure(self) -> str:
        """
        Generate a debug representation of the document structure.

        Returns:
            An indented outline of the node tree
        """
        result = [f"#document ({self.quirks_mode})"]

        # Entries are (node, level); a string entry is a ready-made line
        pending = [(child, 1) for child in reversed(self.child_nodes)]
        while pending:
            node, level = pending.pop()
            indent = "  " * level
            if isinstance(node, str):
                result.append(f"{indent}{node}")
            elif node.node_type == NodeType.ELEMENT_NODE:
                result.append(f"{indent}<{node.tag_name}>")
                if node.template_contents is not None:
                    pending.extend((child, level + 2) for child in reversed(node.template_contents.child_nodes))
                    pending.append(("#template-contents", level + 1))
                pending.extend((child, level + 1) for child in reversed(node.child_nodes))
            elif node.node_type == NodeType.TEXT_NODE:
                result.append(f"{indent}{node.data!r}")
            else:
                result.append(f"{indent}{node!r}")
        return "\n".join(result)


class DocumentFragment(Node):
    """A parentless container for a list of nodes, such as template contents."""

    def __init__(self):
        super().__init__(NodeType.DOCUMENT_FRAGMENT_NODE)
        self.node_name = "#document-fragment"

    def _clone_shallow(self) -> 'DocumentFragment':
        return DocumentFragment()
