"""
Attribute implementation for the DOM.
This module implements the value part of an element attribute.
"""

from typing import Optional


class Attribute:
    """
    The non-identifying parts of an attribute.

    The name of an attribute lives in the key of the store that owns it, so
    an Attribute only carries the namespace prefix it was written with and
    its value. Attributes are immutable: values change through the owning
    store, which keeps its class index in step.
    """

    __slots__ = ('_prefix', '_value')

    def __init__(self, value: str, prefix: Optional[str] = None):
        """
        Initialize a new attribute.

        Args:
            value: The attribute value
            prefix: The namespace prefix, used only when serializing
        """
        object.__setattr__(self, '_prefix', prefix)
        object.__setattr__(self, '_value', value)

    @property
    def prefix(self) -> Optional[str]:
        return self._prefix

    @property
    def value(self) -> str:
        return self._value

    def __setattr__(self, name, value):
        raise AttributeError("Attribute is immutable; update it through its Attributes store")

    def __eq__(self, other) -> bool:
        # The prefix is serialization metadata and does not take part in equality
        if not isinstance(other, Attribute):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        if self._prefix:
            return f"Attribute({self._value!r}, prefix={self._prefix!r})"
        return f"Attribute({self._value!r})"

    def with_value(self, value: str) -> 'Attribute':
        """Return a copy of this attribute holding a new value."""
        return Attribute(value, self._prefix)
