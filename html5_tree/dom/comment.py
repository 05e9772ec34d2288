"""
Comment node implementation for the DOM.
"""

from .node import Node, NodeType


class Comment(Node):
    """Comment node implementation for the DOM."""

    def __init__(self, data: str = ""):
        """
        Initialize a comment node.

        Args:
            data: The comment text, without the surrounding markers
        """
        super().__init__(NodeType.COMMENT_NODE)
        self.node_name = "#comment"
        self.data = data if data is not None else ""

    @property
    def length(self) -> int:
        return len(self.data)

    def append_data(self, data: str) -> None:
        self.data += data

    def _clone_shallow(self) -> 'Comment':
        return Comment(self.data)

    def __repr__(self) -> str:
        return f"<Comment {self.data!r}>"
