"""
Attribute storage for elements.
This module implements the ordered attribute map owned by every element,
together with the cached class index that makes class selectors cheap.
"""

import re
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from .attr import Attribute
from .bloom import BloomFilter
from .case_sensitivity import CaseSensitivity
from .names import NULL_NS, ExpandedName, QualName

# Whitespace as understood by CSS selectors when splitting class lists
SELECTOR_WHITESPACE = " \t\n\r\x0c"
_SELECTOR_WHITESPACE_RE = re.compile(r"[ \t\n\r\x0c]+")

CLASS_NAME = ExpandedName(NULL_NS, "class")

NameLike = Union[str, ExpandedName]


def split_class_list(value: str) -> List[str]:
    """Split a class attribute value into its non-empty tokens."""
    return [token for token in _SELECTOR_WHITESPACE_RE.split(value) if token]


class ClassCache:
    """
    Index over the value of an element's class attribute.

    In selector matching, checking an element's class is frequent and most
    elements do not have the class being checked. Elements with a single
    class are compared directly; elements with several classes keep a Bloom
    filter so that most negative checks never split the class list.
    """

    __slots__ = ()

    @staticmethod
    def new(value: str) -> Optional['ClassCache']:
        """Build the index for a class value, or None if it holds no token."""
        token = value.strip(SELECTOR_WHITESPACE)
        if not token:
            return None
        if not any(char in token for char in SELECTOR_WHITESPACE):
            return SingleClass(token)
        return BloomClasses(BloomFilter(split_class_list(value), num_bits=64))


class SingleClass(ClassCache):
    """The class attribute holds one token."""

    __slots__ = ('token',)

    def __init__(self, token: str):
        self.token = token

    def __repr__(self) -> str:
        return f"SingleClass({self.token!r})"


class BloomClasses(ClassCache):
    """The class attribute holds several tokens."""

    __slots__ = ('bloom_filter',)

    def __init__(self, bloom_filter: BloomFilter):
        self.bloom_filter = bloom_filter

    def __repr__(self) -> str:
        return f"BloomClasses({self.bloom_filter!r})"


class AttributeRef:
    """
    Mutable reference to one attribute value of an Attributes store.

    Assigning to `value` writes through the store, so the class index is
    rebuilt when the referenced attribute is `class`. Assigning after the
    attribute was removed from the store raises KeyError.
    """

    __slots__ = ('_store', '_name')

    def __init__(self, store: 'Attributes', name: ExpandedName):
        self._store = store
        self._name = name

    @property
    def name(self) -> ExpandedName:
        return self._name

    @property
    def prefix(self) -> Optional[str]:
        attribute = self._store.map.get(self._name)
        return attribute.prefix if attribute is not None else None

    @property
    def value(self) -> str:
        attribute = self._store.map.get(self._name)
        if attribute is None:
            raise KeyError(self._name)
        return attribute.value

    @value.setter
    def value(self, value: str) -> None:
        current = self._store.map.get(self._name)
        if current is None:
            # Removed from the store after the reference was taken
            raise KeyError(self._name)
        self._store._set(self._name, current.with_value(value))

    def __repr__(self) -> str:
        return f"AttributeRef({self._name!r})"


class Entry:
    """A view of a single key of an Attributes store, occupied or vacant."""

    __slots__ = ('_store', '_name')

    def __init__(self, store: 'Attributes', name: ExpandedName):
        self._store = store
        self._name = name

    @property
    def key(self) -> ExpandedName:
        return self._name

    @property
    def occupied(self) -> bool:
        return self._name in self._store.map

    def get(self) -> Optional[str]:
        attribute = self._store.map.get(self._name)
        return attribute.value if attribute is not None else None

    def insert(self, value: str) -> Optional[Attribute]:
        """Set the value, returning the previous attribute if any."""
        current = self._store.map.get(self._name)
        attribute = current.with_value(value) if current is not None else Attribute(value)
        return self._store._set(self._name, attribute)

    def or_insert(self, default: str) -> AttributeRef:
        """Insert `default` if the entry is vacant and return a reference to the value."""
        if not self.occupied:
            self._store._set(self._name, Attribute(default))
        return AttributeRef(self._store, self._name)

    def or_insert_with(self, factory: Callable[[], str]) -> AttributeRef:
        """
        Insert the result of `factory` if the entry is vacant.

        Args:
            factory: Called with no arguments, only when the entry is vacant

        Returns:
            A reference to the value
        """
        if not self.occupied:
            self._store._set(self._name, Attribute(factory()))
        return AttributeRef(self._store, self._name)

    def remove(self) -> Optional[Attribute]:
        return self._store._discard(self._name)


class Attributes:
    """
    Ordered map of an element's attributes.

    Keys are expanded names so that namespaced attributes (XLink, XML,
    XMLNS on foreign content) coexist with ordinary HTML attributes. The
    string-keyed convenience methods address the null namespace.

    The store keeps a ClassCache derived from the null-namespace `class`
    attribute. Every mutation path goes through `_set` or `_discard`, which
    rebuild the cache whenever `class` changes, so the cache is present iff
    the attribute holds at least one class and always reflects its current
    value.
    """

    def __init__(self, attributes: Optional[Iterable] = None):
        """
        Initialize the store.

        Args:
            attributes: Pairs of (ExpandedName, Attribute), or a mapping of
                them. Plain string names address the null namespace and
                plain string values become prefix-less attributes.
        """
        self.map: Dict[ExpandedName, Attribute] = {}
        self.class_cache: Optional[ClassCache] = None

        if attributes is not None:
            if hasattr(attributes, 'items'):
                attributes = attributes.items()
            for name, attribute in attributes:
                if not isinstance(name, ExpandedName):
                    name = ExpandedName(NULL_NS, name)
                if not isinstance(attribute, Attribute):
                    attribute = Attribute(attribute)
                self.map[name] = attribute

        attribute = self.map.get(CLASS_NAME)
        if attribute is not None:
            self.class_cache = ClassCache.new(attribute.value)

    # Internal mutation paths

    def _refresh_class_cache(self) -> None:
        attribute = self.map.get(CLASS_NAME)
        self.class_cache = ClassCache.new(attribute.value) if attribute is not None else None

    def _set(self, name: ExpandedName, attribute: Attribute) -> Optional[Attribute]:
        previous = self.map.get(name)
        self.map[name] = attribute
        if name == CLASS_NAME:
            self._refresh_class_cache()
        return previous

    def _discard(self, name: ExpandedName) -> Optional[Attribute]:
        previous = self.map.pop(name, None)
        if name == CLASS_NAME and previous is not None:
            self._refresh_class_cache()
        return previous

    @staticmethod
    def _name(local_name: NameLike) -> ExpandedName:
        if isinstance(local_name, ExpandedName):
            return local_name
        return ExpandedName(NULL_NS, local_name)

    # Null-namespace operations

    def contains(self, local_name: str) -> bool:
        """Check whether a null-namespace attribute exists."""
        return ExpandedName(NULL_NS, local_name) in self.map

    def get(self, local_name: str, default: Optional[str] = None) -> Optional[str]:
        """Get the value of a null-namespace attribute."""
        attribute = self.map.get(ExpandedName(NULL_NS, local_name))
        return attribute.value if attribute is not None else default

    def get_mut(self, local_name: str) -> Optional[AttributeRef]:
        """Get a mutable reference to a null-namespace attribute value."""
        name = ExpandedName(NULL_NS, local_name)
        if name not in self.map:
            return None
        return AttributeRef(self, name)

    def entry(self, local_name: str) -> Entry:
        """Get the entry for a null-namespace attribute, occupied or vacant."""
        return Entry(self, ExpandedName(NULL_NS, local_name))

    def insert(self, local_name: str, value: str) -> Optional[Attribute]:
        """
        Set a null-namespace attribute.

        An existing attribute keeps its position; a new one is appended.

        Returns:
            The previous attribute, or None
        """
        return self._set(ExpandedName(NULL_NS, local_name), Attribute(value))

    def remove(self, local_name: str) -> Optional[Attribute]:
        """Remove a null-namespace attribute, returning it if it existed."""
        return self._discard(ExpandedName(NULL_NS, local_name))

    # Namespaced operations

    def get_ns(self, name: ExpandedName) -> Optional[Attribute]:
        return self.map.get(name)

    def insert_ns(self, name: ExpandedName, value: str,
                  prefix: Optional[str] = None) -> Optional[Attribute]:
        return self._set(name, Attribute(value, prefix))

    def remove_ns(self, name: ExpandedName) -> Optional[Attribute]:
        return self._discard(name)

    def clear(self) -> None:
        self.map.clear()
        self.class_cache = None

    def copy(self) -> 'Attributes':
        return Attributes(self.map.items())

    def items(self):
        return self.map.items()

    def qualified_items(self) -> Iterator[Tuple[QualName, str]]:
        """Yield each attribute as a (QualName, value) pair, in order."""
        for name, attribute in self.map.items():
            yield QualName(attribute.prefix, name.ns, name.local), attribute.value

    # Class queries

    def _has_class_slow(self, name: str, case_sensitivity: CaseSensitivity) -> bool:
        """Check the class attribute value token by token."""
        attribute = self.map.get(CLASS_NAME)
        if attribute is None:
            return False
        for token in split_class_list(attribute.value):
            if case_sensitivity.eq(token, name):
                return True
        return False

    def has_class(self, name: str,
                  case_sensitivity: CaseSensitivity = CaseSensitivity.CASE_SENSITIVE) -> bool:
        """
        Check whether the class attribute contains the given class.

        Args:
            name: The class name
            case_sensitivity: The comparison policy

        Returns:
            True if one of the element's classes matches
        """
        cache = self.class_cache
        if isinstance(cache, SingleClass):
            return case_sensitivity.eq(cache.token, name)
        if isinstance(cache, BloomClasses) and case_sensitivity is CaseSensitivity.CASE_SENSITIVE:
            if name not in cache.bloom_filter:
                # Not in the filter, so not in the class list
                return False
        # The filter is built from exact values and cannot rule out folded matches
        return self._has_class_slow(name, case_sensitivity)

    # Mapping protocol

    def __contains__(self, name: NameLike) -> bool:
        return self._name(name) in self.map

    def __getitem__(self, name: NameLike) -> str:
        return self.map[self._name(name)].value

    def __setitem__(self, name: NameLike, value: str) -> None:
        name = self._name(name)
        current = self.map.get(name)
        self._set(name, current.with_value(value) if current is not None else Attribute(value))

    def __delitem__(self, name: NameLike) -> None:
        if self._discard(self._name(name)) is None:
            raise KeyError(name)

    def __iter__(self) -> Iterator[ExpandedName]:
        return iter(self.map)

    def __len__(self) -> int:
        return len(self.map)

    def __bool__(self) -> bool:
        return bool(self.map)

    def __eq__(self, other) -> bool:
        # The class cache is derived data and does not take part in equality
        if not isinstance(other, Attributes):
            return NotImplemented
        return self.map == other.map

    __hash__ = None

    def __repr__(self) -> str:
        pairs = ", ".join(f"{name}={value!r}" for name, value in self.qualified_items())
        return f"Attributes({pairs})"
