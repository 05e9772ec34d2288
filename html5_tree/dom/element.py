"""
Element implementation for the DOM.
This module implements HTML, SVG and MathML elements.
"""

from typing import Iterable, List, Optional, Union

from .attributes import Attributes, split_class_list
from .case_sensitivity import CaseSensitivity
from .names import HTML_NS, ExpandedName, QualName
from .node import Node, NodeType

TEMPLATE_NAME = ExpandedName(HTML_NS, "template")


class Element(Node):
    """
    Element node implementation for the DOM.

    An HTML `template` element owns a separate document fragment holding
    its contents; that fragment is not a child of the element.
    """

    def __init__(self,
                 name: Union[QualName, str],
                 attributes: Optional[Union[Attributes, Iterable]] = None):
        """
        Initialize a new Element.

        Args:
            name: Qualified name of the element; a plain string names an
                element in the HTML namespace
            attributes: An Attributes store, or anything Attributes accepts
        """
        super().__init__(NodeType.ELEMENT_NODE)

        if not isinstance(name, QualName):
            name = QualName.html(name)
        self.name = name
        self.node_name = name.local.upper() if name.ns == HTML_NS else str(name)

        if isinstance(attributes, Attributes):
            self.attributes = attributes
        else:
            self.attributes = Attributes(attributes)

        self.template_contents: Optional['DocumentFragment'] = None
        if name.expanded() == TEMPLATE_NAME:
            from .document import DocumentFragment
            self.template_contents = DocumentFragment()

    @property
    def local_name(self) -> str:
        return self.name.local

    @property
    def namespace_uri(self) -> str:
        return self.name.ns

    @property
    def prefix(self) -> Optional[str]:
        return self.name.prefix

    @property
    def tag_name(self) -> str:
        return str(self.name)

    @property
    def id(self) -> str:
        """Get or set the ID of the element."""
        return self.attributes.get('id') or ""

    @id.setter
    def id(self, value: str) -> None:
        self.attributes.insert('id', value)

    @property
    def class_name(self) -> str:
        """Get or set the class attribute of the element."""
        return self.attributes.get('class') or ""

    @class_name.setter
    def class_name(self, value: str) -> None:
        self.attributes.insert('class', value)

    @property
    def class_list(self) -> List[str]:
        """The element's classes in attribute order."""
        return split_class_list(self.class_name)

    def has_class(self, name: str,
                  case_sensitivity: CaseSensitivity = CaseSensitivity.CASE_SENSITIVE) -> bool:
        return self.attributes.has_class(name, case_sensitivity)

    def has_attribute(self, name: str) -> bool:
        """
        Check if the element has the specified attribute.

        Args:
            name: The attribute name, in the null namespace

        Returns:
            True if the attribute exists, False otherwise
        """
        return self.attributes.contains(name)

    def get_attribute(self, name: str) -> Optional[str]:
        """
        Get the value of an attribute.

        Args:
            name: The attribute name, in the null namespace

        Returns:
            The attribute value, or None if the attribute doesn't exist
        """
        return self.attributes.get(name)

    def set_attribute(self, name: str, value: str) -> None:
        """
        Set an attribute value.

        Args:
            name: The attribute name, in the null namespace
            value: The attribute value
        """
        self.attributes.insert(name, value)

    def remove_attribute(self, name: str) -> None:
        """
        Remove an attribute.

        Args:
            name: The attribute name, in the null namespace
        """
        self.attributes.remove(name)

    def has_attributes(self) -> bool:
        """Check if the element has any attributes."""
        return bool(self.attributes)

    def matches(self, selector: str) -> bool:
        """
        Check if the element matches a CSS selector.

        Args:
            selector: The CSS selector string

        Returns:
            True if the element matches the selector, False otherwise
        """
        from .selector_engine import default_engine
        return default_engine.matches(self, selector)

    def closest(self, selector: str) -> Optional['Element']:
        """
        Find the closest ancestor element (or self) that matches a selector.

        Args:
            selector: The CSS selector string

        Returns:
            The matching element or None if no match is found
        """
        for node in self.inclusive_ancestors():
            if node.node_type != NodeType.ELEMENT_NODE:
                break
            if node.matches(selector):
                return node
        return None

    def _clone_shallow(self) -> 'Element':
        return Element(self.name, self.attributes.copy())

    def __repr__(self) -> str:
        return f"<Element {self.tag_name}>"
