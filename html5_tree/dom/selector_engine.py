"""
CSS Selector Engine implementation.
This module matches cssselect parse trees against DOM elements.
"""

import logging
from typing import Dict, List, Optional

import cssselect
from cssselect import parser as css

from .case_sensitivity import CaseSensitivity, ascii_lower
from .names import HTML_NS, NULL_NS, ExpandedName
from .node import Node, NodeType

logger = logging.getLogger(__name__)


def _is_element(node: Optional[Node]) -> bool:
    return node is not None and node.node_type == NodeType.ELEMENT_NODE


def _previous_element_siblings(element: Node):
    sibling = element.previous_sibling
    while sibling is not None:
        if sibling.node_type == NodeType.ELEMENT_NODE:
            yield sibling
        sibling = sibling.previous_sibling


def _next_element_siblings(element: Node):
    sibling = element.next_sibling
    while sibling is not None:
        if sibling.node_type == NodeType.ELEMENT_NODE:
            yield sibling
        sibling = sibling.next_sibling


def _nth_matches(a: int, b: int, position: int) -> bool:
    """Check whether position == a*n + b for some n >= 0."""
    if a == 0:
        return position == b
    offset = position - b
    return offset % a == 0 and offset // a >= 0


class SelectorEngine:
    """
    CSS Selector Engine for DOM queries.

    Selector strings are parsed once by cssselect and cached. Matching
    walks the parse tree directly against the element; class selectors go
    through the element's attribute store so they benefit from its class
    index.
    """

    def __init__(self):
        """Initialize the selector engine."""
        self._selector_cache: Dict[str, List[css.Selector]] = {}

    def select(self, selector: str, root_node: Node) -> List[Node]:
        """
        Find all elements matching a CSS selector.

        Args:
            selector: The CSS selector string
            root_node: The node to search from, included in the search

        Returns:
            List of matching elements in document order
        """
        parsed = self._get_parsed_selector(selector)
        case_sensitivity = self._case_sensitivity_for(root_node)
        return [node for node in root_node.inclusive_descendants()
                if _is_element(node) and self._matches_any(node, parsed, case_sensitivity)]

    def select_first(self, selector: str, root_node: Node) -> Optional[Node]:
        """Find the first element matching a CSS selector, or None."""
        parsed = self._get_parsed_selector(selector)
        case_sensitivity = self._case_sensitivity_for(root_node)
        for node in root_node.inclusive_descendants():
            if _is_element(node) and self._matches_any(node, parsed, case_sensitivity):
                return node
        return None

    def matches(self, element: Node, selector: str) -> bool:
        """
        Check if an element matches a CSS selector.

        Args:
            element: The element to check
            selector: The CSS selector

        Returns:
            True if the element matches the selector, False otherwise
        """
        parsed = self._get_parsed_selector(selector)
        return self._matches_any(element, parsed, self._case_sensitivity_for(element))

    def _get_parsed_selector(self, selector: str) -> List[css.Selector]:
        """
        Get a parsed selector group, using the cache if available.

        Raises:
            cssselect.SelectorError: If the selector is invalid
        """
        parsed = self._selector_cache.get(selector)
        if parsed is None:
            try:
                parsed = cssselect.parse(selector)
            except cssselect.SelectorError as e:
                logger.error(f"Error parsing selector '{selector}': {e}")
                raise
            self._selector_cache[selector] = parsed
        return parsed

    @staticmethod
    def _case_sensitivity_for(node: Node) -> CaseSensitivity:
        # Class and ID selectors match case-insensitively in quirks mode
        document = node.owner_document
        if document is not None and document.quirks_mode == "quirks":
            return CaseSensitivity.ASCII_CASE_INSENSITIVE
        return CaseSensitivity.CASE_SENSITIVE

    def _matches_any(self, element: Node, selectors: List[css.Selector],
                     case_sensitivity: CaseSensitivity) -> bool:
        for selector in selectors:
            if selector.pseudo_element is not None:
                # Pseudo-elements never match a real element
                continue
            if self._matches_tree(element, selector.parsed_tree, case_sensitivity):
                return True
        return False

    def _matches_tree(self, element: Node, tree, case_sensitivity: CaseSensitivity) -> bool:
        """
        Match an element against a selector tree.

        Args:
            element: The element to check
            tree: A cssselect parse tree node
            case_sensitivity: Policy for class and ID comparisons

        Returns:
            True if the element matches, False otherwise
        """
        if isinstance(tree, css.Selector):
            tree = tree.parsed_tree

        if isinstance(tree, css.Element):
            if not tree.element or tree.element == '*':
                return True
            if element.name.ns == HTML_NS:
                return ascii_lower(tree.element) == ascii_lower(element.name.local)
            return tree.element == element.name.local

        if isinstance(tree, css.Hash):
            return (self._matches_tree(element, tree.selector, case_sensitivity)
                    and case_sensitivity.eq(element.attributes.get('id') or "", tree.id))

        if isinstance(tree, css.Class):
            return (self._matches_tree(element, tree.selector, case_sensitivity)
                    and element.attributes.has_class(tree.class_name, case_sensitivity))

        if isinstance(tree, css.Attrib):
            return (self._matches_tree(element, tree.selector, case_sensitivity)
                    and self._matches_attribute(element, tree))

        if isinstance(tree, css.Pseudo):
            return (self._matches_tree(element, tree.selector, case_sensitivity)
                    and self._matches_pseudo(element, tree.ident))

        if isinstance(tree, css.Function):
            return (self._matches_tree(element, tree.selector, case_sensitivity)
                    and self._matches_function(element, tree))

        if isinstance(tree, css.Negation):
            return (self._matches_tree(element, tree.selector, case_sensitivity)
                    and not self._matches_tree(element, tree.subselector, case_sensitivity))

        if isinstance(tree, (css.Matching, css.SpecificityAdjustment)):
            return (self._matches_tree(element, tree.selector, case_sensitivity)
                    and any(self._matches_tree(element, item, case_sensitivity)
                            for item in tree.selector_list))

        if isinstance(tree, css.CombinedSelector):
            return self._matches_combined(element, tree, case_sensitivity)

        logger.warning(f"Unsupported selector type: {type(tree).__name__}")
        return False

    def _matches_combined(self, element: Node, tree: css.CombinedSelector,
                          case_sensitivity: CaseSensitivity) -> bool:
        if not self._matches_tree(element, tree.subselector, case_sensitivity):
            return False

        combinator = tree.combinator
        left = tree.selector

        if combinator == ' ':  # Descendant
            return any(self._matches_tree(ancestor, left, case_sensitivity)
                       for ancestor in element.ancestors() if _is_element(ancestor))

        if combinator == '>':  # Child
            parent = element.parent_node
            return _is_element(parent) and self._matches_tree(parent, left, case_sensitivity)

        if combinator == '+':  # Adjacent sibling
            previous = next(_previous_element_siblings(element), None)
            return previous is not None and self._matches_tree(previous, left, case_sensitivity)

        if combinator == '~':  # General sibling
            return any(self._matches_tree(sibling, left, case_sensitivity)
                       for sibling in _previous_element_siblings(element))

        logger.warning(f"Unknown combinator: {combinator}")
        return False

    @staticmethod
    def _matches_attribute(element: Node, tree: css.Attrib) -> bool:
        attributes = element.attributes
        if tree.namespace == '*':
            values = [attribute.value for name, attribute in attributes.items()
                      if name.local == tree.attrib]
        else:
            attribute = attributes.get_ns(ExpandedName(NULL_NS, tree.attrib))
            values = [attribute.value] if attribute is not None else []

        if not values:
            return tree.operator == '!='
        if tree.operator == 'exists':
            return True

        expected = tree.value.value
        for value in values:
            if tree.operator == '=' and value == expected:
                return True
            if tree.operator == '~=' and expected and expected in value.split():
                return True
            if tree.operator == '|=' and (value == expected or value.startswith(expected + '-')):
                return True
            if tree.operator == '^=' and expected and value.startswith(expected):
                return True
            if tree.operator == '$=' and expected and value.endswith(expected):
                return True
            if tree.operator == '*=' and expected and expected in value:
                return True
            if tree.operator == '!=' and value != expected:
                return True
        return False

    @staticmethod
    def _matches_pseudo(element: Node, ident: str) -> bool:
        if ident == 'first-child':
            return next(_previous_element_siblings(element), None) is None
        if ident == 'last-child':
            return next(_next_element_siblings(element), None) is None
        if ident == 'only-child':
            return (next(_previous_element_siblings(element), None) is None
                    and next(_next_element_siblings(element), None) is None)
        if ident == 'first-of-type':
            return not any(sibling.name == element.name
                           for sibling in _previous_element_siblings(element))
        if ident == 'last-of-type':
            return not any(sibling.name == element.name
                           for sibling in _next_element_siblings(element))
        if ident == 'only-of-type':
            siblings = list(_previous_element_siblings(element)) + list(_next_element_siblings(element))
            return not any(sibling.name == element.name for sibling in siblings)
        if ident == 'empty':
            for child in element.child_nodes:
                if child.node_type == NodeType.ELEMENT_NODE:
                    return False
                if child.node_type == NodeType.TEXT_NODE and child.data:
                    return False
            return True
        if ident == 'root':
            parent = element.parent_node
            return parent is not None and parent.node_type == NodeType.DOCUMENT_NODE

        logger.warning(f"Unsupported pseudo-class: {ident}")
        return False

    @staticmethod
    def _matches_function(element: Node, tree: css.Function) -> bool:
        name = tree.name
        if name not in ('nth-child', 'nth-last-child', 'nth-of-type', 'nth-last-of-type'):
            logger.warning(f"Unsupported pseudo-class function: {name}()")
            return False

        try:
            a, b = css.parse_series(tree.arguments)
        except ValueError:
            logger.warning(f"Invalid argument to {name}(): {tree.arguments}")
            return False

        if name.startswith('nth-last'):
            siblings = _next_element_siblings(element)
        else:
            siblings = _previous_element_siblings(element)
        if name.endswith('of-type'):
            siblings = (sibling for sibling in siblings if sibling.name == element.name)

        position = sum(1 for _ in siblings) + 1
        return _nth_matches(a, b, position)


default_engine = SelectorEngine()
