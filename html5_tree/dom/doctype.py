"""
Document type node implementation for the DOM.
"""

from .node import Node, NodeType


class DocumentType(Node):
    """A <!DOCTYPE> declaration."""

    def __init__(self, name: str, public_id: str = "", system_id: str = ""):
        """
        Initialize a document type node.

        Args:
            name: The doctype name, usually "html"
            public_id: The public identifier, or an empty string
            system_id: The system identifier, or an empty string
        """
        super().__init__(NodeType.DOCUMENT_TYPE_NODE)
        self.node_name = name
        self.name = name
        self.public_id = public_id or ""
        self.system_id = system_id or ""

    def _clone_shallow(self) -> 'DocumentType':
        return DocumentType(self.name, self.public_id, self.system_id)

    def __repr__(self) -> str:
        return f"<DocumentType {self.name!r}>"
