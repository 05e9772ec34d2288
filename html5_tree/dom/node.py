"""
Node implementation for the DOM.
This module implements the tree linkage shared by every node type.
"""

from enum import IntEnum
from typing import Iterator, List, Optional


class NodeType(IntEnum):
    """Node types, numbered as in the DOM standard."""
    ELEMENT_NODE = 1
    TEXT_NODE = 3
    PROCESSING_INSTRUCTION_NODE = 7
    COMMENT_NODE = 8
    DOCUMENT_NODE = 9
    DOCUMENT_TYPE_NODE = 10
    DOCUMENT_FRAGMENT_NODE = 11


class Node:
    """
    Base Node implementation for the DOM.

    A node owns its children; parent and sibling links are plain
    references kept in step by the mutation methods below.
    """

    def __init__(self, node_type: NodeType):
        """
        Initialize a new Node.

        Args:
            node_type: The type of this node
        """
        self.node_type = node_type

        # Node relationships
        self.parent_node: Optional['Node'] = None
        self.child_nodes: List['Node'] = []
        self.previous_sibling: Optional['Node'] = None
        self.next_sibling: Optional['Node'] = None

        self.node_name: str = "#node"

    @property
    def first_child(self) -> Optional['Node']:
        return self.child_nodes[0] if self.child_nodes else None

    @property
    def last_child(self) -> Optional['Node']:
        return self.child_nodes[-1] if self.child_nodes else None

    @property
    def owner_document(self) -> Optional['Node']:
        """The Document at the root of this node's tree, if any."""
        for node in self.inclusive_ancestors():
            if node.node_type == NodeType.DOCUMENT_NODE:
                return node
        return None

    def append_child(self, child: 'Node') -> 'Node':
        """
        Append a child node to this node.

        Args:
            child: The node to append

        Returns:
            The appended node
        """
        # If child already has a parent, remove it first
        if child.parent_node:
            child.parent_node.remove_child(child)

        child.parent_node = self

        if self.child_nodes:
            last_child = self.child_nodes[-1]
            last_child.next_sibling = child
            child.previous_sibling = last_child

        self.child_nodes.append(child)
        return child

    def prepend_child(self, child: 'Node') -> 'Node':
        """Insert a child node before the first child."""
        return self.insert_before(child, self.first_child)

    def insert_before(self, new_child: 'Node', reference_child: Optional['Node'] = None) -> 'Node':
        """
        Insert a node before a reference node.

        Args:
            new_child: The node to insert
            reference_child: The reference node to insert before, or None to append

        Returns:
            The inserted node

        Raises:
            ValueError: If the reference node is not a child of this node
        """
        if reference_child is None:
            return self.append_child(new_child)

        if reference_child.parent_node is not self:
            raise ValueError("Reference child not found in child nodes")

        if new_child.parent_node:
            new_child.parent_node.remove_child(new_child)

        new_child.parent_node = self

        index = self._index_of(reference_child)
        prev_sibling = reference_child.previous_sibling

        new_child.next_sibling = reference_child
        new_child.previous_sibling = prev_sibling
        reference_child.previous_sibling = new_child
        if prev_sibling:
            prev_sibling.next_sibling = new_child

        self.child_nodes.insert(index, new_child)
        return new_child

    def remove_child(self, child: 'Node') -> 'Node':
        """
        Remove a child node from this node.

        Args:
            child: The node to remove

        Returns:
            The removed node

        Raises:
            ValueError: If the node is not a child of this node
        """
        if child.parent_node is not self:
            raise ValueError("Child not found in child nodes")

        prev_sibling = child.previous_sibling
        next_sibling = child.next_sibling
        if prev_sibling:
            prev_sibling.next_sibling = next_sibling
        if next_sibling:
            next_sibling.previous_sibling = prev_sibling

        del self.child_nodes[self._index_of(child)]

        child.parent_node = None
        child.previous_sibling = None
        child.next_sibling = None
        return child

    def replace_child(self, new_child: 'Node', old_child: 'Node') -> 'Node':
        """
        Replace a child node with another node.

        Args:
            new_child: The replacement node
            old_child: The node to replace

        Returns:
            The replaced node
        """
        if old_child.parent_node is not self:
            raise ValueError("Old child not found in child nodes")

        if new_child is old_child:
            return old_child

        reference = old_child.next_sibling
        if reference is new_child:
            reference = new_child.next_sibling
        self.remove_child(old_child)
        self.insert_before(new_child, reference)
        return old_child

    def detach(self) -> None:
        """Remove this node from its parent, if any."""
        if self.parent_node:
            self.parent_node.remove_child(self)

    def _index_of(self, child: 'Node') -> int:
        # Identity, not equality: nodes may compare equal by content
        for index, node in enumerate(self.child_nodes):
            if node is child:
                return index
        raise ValueError("Child not found in child nodes")

    def has_child_nodes(self) -> bool:
        """Check if this node has any child nodes."""
        return len(self.child_nodes) > 0

    def contains(self, other: Optional['Node']) -> bool:
        """
        Check if this node is an inclusive ancestor of another node.

        Args:
            other: The node to check

        Returns:
            True if this node contains the other node, False otherwise
        """
        if other is None:
            return False
        return any(node is self for node in other.inclusive_ancestors())

    # Traversal

    def children(self) -> Iterator['Node']:
        """Iterate over the child nodes in order."""
        return iter(list(self.child_nodes))

    def element_children(self) -> Iterator['Node']:
        """Iterate over the child elements in order."""
        return (child for child in self.children() if child.node_type == NodeType.ELEMENT_NODE)

    def inclusive_ancestors(self) -> Iterator['Node']:
        node = self
        while node is not None:
            yield node
            node = node.parent_node

    def ancestors(self) -> Iterator['Node']:
        """Iterate from the parent up to the root."""
        node = self.parent_node
        while node is not None:
            yield node
            node = node.parent_node

    def inclusive_descendants(self) -> Iterator['Node']:
        """Iterate over this node and its descendants in document order."""
        yield self
        yield from self.descendants()

    def descendants(self) -> Iterator['Node']:
        """Iterate over the descendants in document order."""
        stack = [self.children()]
        while stack:
            child = next(stack[-1], None)
            if child is None:
                stack.pop()
                continue
            yield child
            stack.append(child.children())

    def text_contents(self) -> str:
        """Concatenate the data of every descendant text node."""
        return "".join(node.data for node in self.inclusive_descendants()
                       if node.node_type == NodeType.TEXT_NODE)

    # Copying

    def _clone_shallow(self) -> 'Node':
        raise NotImplementedError

    def clone_node(self, deep: bool = False) -> 'Node':
        """
        Clone this node.

        Args:
            deep: Whether to clone child nodes (and template contents) as well

        Returns:
            The cloned node, without a parent
        """
        clone = self._clone_shallow()
        if not deep:
            return clone

        pending = [(self, clone)]
        while pending:
            source, target = pending.pop()
            for child in source.child_nodes:
                child_clone = child._clone_shallow()
                target.append_child(child_clone)
                pending.append((child, child_clone))

            contents = getattr(source, "template_contents", None)
            if contents is not None:
                pending.append((contents, target.template_contents))
        return clone

    # Selectors

    def select(self, selector: str) -> List['Node']:
        """
        Find the elements among this node and its descendants matching a selector.

        Args:
            selector: CSS selector string

        Returns:
            Matching elements in document order
        """
        from .selector_engine import default_engine
        return default_engine.select(selector, self)

    def select_first(self, selector: str) -> Optional['Node']:
        from .selector_engine import default_engine
        return default_engine.select_first(selector, self)

    # Serialization

    def serialize(self, writer, opts=None) -> None:
        """
        Serialize this node and its descendants in HTML syntax to a byte stream.

        Args:
            writer: Object with a write(bytes) method
            opts: SerializeOpts; defaults to including this node
        """
        from ..serialization.html_serializer import serialize
        serialize(writer, self, opts)

    def serialize_to_file(self, path, opts=None) -> None:
        """Serialize this node and its descendants in HTML syntax to a new file."""
        with open(path, 'wb') as f:
            self.serialize(f, opts)

    def to_html(self, opts=None) -> str:
        """Serialize this node and its descendants to an HTML string."""
        from ..serialization.html_serializer import to_html
        return to_html(self, opts)

    def __str__(self) -> str:
        return self.to_html()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.node_name}>"
