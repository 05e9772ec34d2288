"""
Text node implementation for the DOM.
"""

from .node import Node, NodeType


class Text(Node):
    """
    Text node implementation for the DOM.

    The data is stored unescaped; escaping happens when serializing.
    """

    def __init__(self, data: str = ""):
        """
        Initialize a text node.

        Args:
            data: The text content
        """
        super().__init__(NodeType.TEXT_NODE)
        self.node_name = "#text"
        self.data = data if data is not None else ""

    @property
    def length(self) -> int:
        return len(self.data)

    @property
    def whole_text(self) -> str:
        """
        Get the text of this node and its adjacent text node siblings.

        Returns:
            The concatenated text content
        """
        start = self
        while start.previous_sibling and start.previous_sibling.node_type == NodeType.TEXT_NODE:
            start = start.previous_sibling

        result = []
        current = start
        while current and current.node_type == NodeType.TEXT_NODE:
            result.append(current.data)
            current = current.next_sibling
        return "".join(result)

    def append_data(self, data: str) -> None:
        self.data += data

    def split_text(self, offset: int) -> 'Text':
        """
        Split this text node into two nodes at the specified offset.

        Args:
            offset: The character offset at which to split

        Returns:
            The new text node containing the text after the split point

        Raises:
            ValueError: If the offset is invalid
        """
        if offset < 0 or offset > self.length:
            raise ValueError("Invalid split offset")

        new_node = Text(self.data[offset:])
        self.data = self.data[:offset]

        if self.parent_node:
            self.parent_node.insert_before(new_node, self.next_sibling)
        return new_node

    def _clone_shallow(self) -> 'Text':
        return Text(self.data)

    def __repr__(self) -> str:
        return f"<Text {self.data!r}>"
