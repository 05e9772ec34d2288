"""
Processing instruction node implementation for the DOM.
"""

from .node import Node, NodeType


class ProcessingInstruction(Node):
    """A <?target data> processing instruction."""

    def __init__(self, target: str, data: str = ""):
        super().__init__(NodeType.PROCESSING_INSTRUCTION_NODE)
        self.node_name = target
        self.target = target
        self.data = data if data is not None else ""

    def _clone_shallow(self) -> 'ProcessingInstruction':
        return ProcessingInstruction(self.target, self.data)

    def __repr__(self) -> str:
        return f"<ProcessingInstruction {self.target!r} {self.data!r}>"
