"""
Names for elements and attributes.
This module implements expanded and qualified names as defined by the
Namespaces in XML recommendation, keyed by the namespace URIs html5lib uses.
"""

from typing import NamedTuple, Optional

from html5lib.constants import namespaces

# Namespace URIs
NULL_NS = ""
HTML_NS = namespaces["html"]
MATHML_NS = namespaces["mathml"]
SVG_NS = namespaces["svg"]
XLINK_NS = namespaces["xlink"]
XML_NS = namespaces["xml"]
XMLNS_NS = namespaces["xmlns"]


class ExpandedName(NamedTuple):
    """
    A (namespace, local name) pair.

    Identifies an attribute or element tag uniquely across namespaces.
    Ordering is by namespace first, then local name.
    <https://www.w3.org/TR/REC-xml-names/#dt-expname>
    """
    ns: str
    local: str

    def __repr__(self) -> str:
        if self.ns:
            return f"ExpandedName({{{self.ns}}}{self.local})"
        return f"ExpandedName({self.local})"


class QualName(NamedTuple):
    """An expanded name plus the namespace prefix it was written with."""
    prefix: Optional[str]
    ns: str
    local: str

    def expanded(self) -> ExpandedName:
        return ExpandedName(self.ns, self.local)

    @classmethod
    def html(cls, local: str) -> 'QualName':
        """Build the name of an element in the HTML namespace."""
        return cls(None, HTML_NS, local)

    def __str__(self) -> str:
        if self.prefix:
            return f"{self.prefix}:{self.local}"
        return self.local
