"""
Tree serializer.
This module walks a node tree and produces the structural events (start
tag, end tag, text, comment, doctype, processing instruction) that an
output sink turns into markup.
"""

from enum import Enum
from typing import Iterable, Iterator, List, NamedTuple, Tuple, Union

from ..dom.names import QualName
from ..dom.node import Node, NodeType


class TraversalScope(Enum):
    """Whether a serialization pass writes the node's own tags."""
    INCLUDE_NODE = "include-node"
    CHILDREN_ONLY = "children-only"


class StartTag(NamedTuple):
    name: QualName
    attributes: List[Tuple[QualName, str]]

    def send(self, sink: 'EventSink') -> None:
        sink.start_elem(self.name, iter(self.attributes))


class EndTag(NamedTuple):
    name: QualName

    def send(self, sink: 'EventSink') -> None:
        sink.end_elem(self.name)


class DoctypeEvent(NamedTuple):
    name: str

    def send(self, sink: 'EventSink') -> None:
        sink.write_doctype(self.name)


class TextEvent(NamedTuple):
    text: str

    def send(self, sink: 'EventSink') -> None:
        sink.write_text(self.text)


class CommentEvent(NamedTuple):
    text: str

    def send(self, sink: 'EventSink') -> None:
        sink.write_comment(self.text)


class ProcessingInstructionEvent(NamedTuple):
    target: str
    data: str

    def send(self, sink: 'EventSink') -> None:
        sink.write_processing_instruction(self.target, self.data)


Event = Union[StartTag, EndTag, DoctypeEvent, TextEvent, CommentEvent, ProcessingInstructionEvent]


class EventSink:
    """
    Receiver of serialization events.

    Every method may raise (typically OSError from the underlying writer);
    the exception aborts the walk.
    """

    def start_elem(self, name: QualName, attrs: Iterable[Tuple[QualName, str]]) -> None:
        raise NotImplementedError

    def end_elem(self, name: QualName) -> None:
        raise NotImplementedError

    def write_doctype(self, name: str) -> None:
        raise NotImplementedError

    def write_text(self, text: str) -> None:
        raise NotImplementedError

    def write_comment(self, text: str) -> None:
        raise NotImplementedError

    def write_processing_instruction(self, target: str, data: str) -> None:
        raise NotImplementedError


class EventRecorder(EventSink):
    """A sink that keeps the events it receives, in order."""

    def __init__(self):
        self.events: List[Event] = []

    def start_elem(self, name, attrs):
        self.events.append(StartTag(name, list(attrs)))

    def end_elem(self, name):
        self.events.append(EndTag(name))

    def write_doctype(self, name):
        self.events.append(DoctypeEvent(name))

    def write_text(self, text):
        self.events.append(TextEvent(text))

    def write_comment(self, text):
        self.events.append(CommentEvent(text))

    def write_processing_instruction(self, target, data):
        self.events.append(ProcessingInstructionEvent(target, data))


def _child_source(node: Node) -> Node:
    # A template's own children are not rendered; its contents are
    if node.node_type == NodeType.ELEMENT_NODE and node.template_contents is not None:
        return node.template_contents
    return node


def _start_tag(element: Node) -> StartTag:
    return StartTag(element.name, list(element.attributes.qualified_items()))


def _leaf_event(node: Node) -> Event:
    node_type = node.node_type
    if node_type == NodeType.DOCUMENT_TYPE_NODE:
        return DoctypeEvent(node.name)
    if node_type == NodeType.TEXT_NODE:
        return TextEvent(node.data)
    if node_type == NodeType.COMMENT_NODE:
        return CommentEvent(node.data)
    if node_type == NodeType.PROCESSING_INSTRUCTION_NODE:
        return ProcessingInstructionEvent(node.target, node.data)
    raise ValueError(f"Cannot serialize node type {node_type!r}")


def walk(node: Node, traversal_scope: TraversalScope = TraversalScope.INCLUDE_NODE) -> Iterator[Event]:
    """
    Generate the serialization events for a node.

    The walk keeps its own stack of open elements, so tree depth is not
    limited by the interpreter's recursion limit.

    Args:
        node: The node to serialize
        traversal_scope: Whether to include the node's own tags

    Yields:
        Events in document order
    """
    node_type = node.node_type
    containers = (NodeType.ELEMENT_NODE, NodeType.DOCUMENT_NODE, NodeType.DOCUMENT_FRAGMENT_NODE)

    if node_type not in containers:
        if traversal_scope is TraversalScope.INCLUDE_NODE:
            yield _leaf_event(node)
        return

    # Documents and fragments never emit a tag, whatever the scope
    include_root = node_type == NodeType.ELEMENT_NODE and traversal_scope is TraversalScope.INCLUDE_NODE
    if include_root:
        yield _start_tag(node)

    # Each frame is (element to close or None, remaining children)
    stack = [(node if include_root else None, _child_source(node).children())]
    while stack:
        element, children = stack[-1]
        child = next(children, None)

        if child is None:
            stack.pop()
            if element is not None:
                yield EndTag(element.name)
        elif child.node_type == NodeType.ELEMENT_NODE:
            yield _start_tag(child)
            stack.append((child, _child_source(child).children()))
        elif child.node_type in containers:
            stack.append((None, child.children()))
        else:
            yield _leaf_event(child)


def serialize(node: Node, sink: EventSink,
              traversal_scope: TraversalScope = TraversalScope.INCLUDE_NODE) -> None:
    """
    Push the serialization events for a node into a sink.

    An exception raised by the sink stops the walk and propagates; output
    the sink already wrote is left as is.
    """
    for event in walk(node, traversal_scope):
        event.send(sink)
