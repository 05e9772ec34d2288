"""
HTML serializer.
This module implements the event sink that writes HTML syntax, following
the HTML fragment serialization algorithm, and the entry points that
connect it to the tree serializer.
"""

import io
import logging
from typing import Iterable, List, NamedTuple, Optional, Tuple

from ..dom.names import HTML_NS, MATHML_NS, NULL_NS, SVG_NS, XLINK_NS, XML_NS, XMLNS_NS, QualName
from ..errors import SerializationError
from . import tree_serializer
from .tree_serializer import EventSink, TraversalScope

logger = logging.getLogger(__name__)

# Elements whose children are never serialized and which have no end tag
VOID_ELEMENTS = frozenset({
    'area', 'base', 'basefont', 'bgsound', 'br', 'col', 'embed', 'frame', 'hr',
    'img', 'input', 'keygen', 'link', 'meta', 'param', 'source', 'track', 'wbr',
})

# Elements whose text children are written without escaping
RAW_TEXT_ELEMENTS = frozenset({
    'style', 'script', 'xmp', 'iframe', 'noembed', 'noframes', 'plaintext',
})


class SerializeOpts:
    """Options for HTML serialization."""

    def __init__(self,
                 traversal_scope: TraversalScope = TraversalScope.INCLUDE_NODE,
                 scripting_enabled: bool = True,
                 create_missing_parent: bool = False,
                 context: Optional[QualName] = None):
        """
        Initialize serialization options.

        Args:
            traversal_scope: Whether to write the root node's own tags
            scripting_enabled: Whether <noscript> content is raw text
            create_missing_parent: Tolerate end tags without a matching start
            context: Name of the element whose children are being written,
                so that raw-text rules apply in children-only output
        """
        self.traversal_scope = traversal_scope
        self.scripting_enabled = scripting_enabled
        self.create_missing_parent = create_missing_parent
        self.context = context

    @classmethod
    def from_config(cls, config, **overrides) -> 'SerializeOpts':
        """
        Build options from the "serializer" section of a Config.

        Args:
            config: A Config instance
            **overrides: Options that take precedence over the config
        """
        options = {
            'scripting_enabled': config.get('serializer.scripting_enabled', True),
            'create_missing_parent': config.get('serializer.create_missing_parent', False),
        }
        options.update(overrides)
        return cls(**options)


class _ElemInfo(NamedTuple):
    html_name: Optional[str]
    ignore_children: bool


class HtmlSerializer(EventSink):
    """
    Event sink writing HTML syntax as UTF-8 bytes.

    Escaping depends on the enclosing element, so the sink keeps a stack
    describing the open elements.
    """

    def __init__(self, writer, opts: Optional[SerializeOpts] = None):
        """
        Initialize the serializer.

        Args:
            writer: Object with a write(bytes) method
            opts: Serialization options
        """
        self.writer = writer
        self.opts = opts or SerializeOpts()

        context = self.opts.context
        html_name = context.local if context is not None and context.ns == HTML_NS else None
        self.stack: List[_ElemInfo] = [_ElemInfo(html_name, False)]

    def _write(self, text: str) -> None:
        self.writer.write(text.encode('utf-8'))

    def _parent(self) -> _ElemInfo:
        if not self.stack:
            if self.opts.create_missing_parent:
                logger.warning("Missing parent element info, creating a default one")
                self.stack.append(_ElemInfo(None, False))
            else:
                raise SerializationError("No parent element info")
        return self.stack[-1]

    @staticmethod
    def _escape(text: str, attr_mode: bool) -> str:
        text = text.replace('&', '&amp;').replace('\xa0', '&nbsp;')
        if attr_mode:
            return text.replace('"', '&quot;')
        return text.replace('<', '&lt;').replace('>', '&gt;')

    @staticmethod
    def _tag_name(name: QualName) -> str:
        if name.ns not in (HTML_NS, MATHML_NS, SVG_NS):
            logger.warning(f"Element with unexpected namespace {name.ns!r}")
        return name.local

    @staticmethod
    def _attribute_name(name: QualName) -> str:
        if name.ns == NULL_NS:
            return name.local
        if name.ns == XML_NS:
            return f"xml:{name.local}"
        if name.ns == XMLNS_NS:
            return "xmlns" if name.local == "xmlns" else f"xmlns:{name.local}"
        if name.ns == XLINK_NS:
            return f"xlink:{name.local}"

        logger.warning(f"Attribute with unexpected namespace {name.ns!r}")
        if name.prefix:
            return f"{name.prefix}:{name.local}"
        return f"unknown_namespace:{name.local}"

    def start_elem(self, name: QualName, attrs: Iterable[Tuple[QualName, str]]) -> None:
        html_name = name.local if name.ns == HTML_NS else None

        if self._parent().ignore_children:
            self.stack.append(_ElemInfo(html_name, True))
            return

        parts = ['<', self._tag_name(name)]
        for attr_name, value in attrs:
            parts.append(' ')
            parts.append(self._attribute_name(attr_name))
            parts.append('="')
            parts.append(self._escape(value, attr_mode=True))
            parts.append('"')
        parts.append('>')
        self._write(''.join(parts))

        self.stack.append(_ElemInfo(html_name, html_name in VOID_ELEMENTS))

    def end_elem(self, name: QualName) -> None:
        if len(self.stack) > 1:
            info = self.stack.pop()
        elif self.opts.create_missing_parent:
            info = _ElemInfo(None, False)
        else:
            raise SerializationError(f"End tag </{name.local}> without a matching start tag")

        if info.ignore_children:
            return
        self._write(f"</{self._tag_name(name)}>")

    def write_text(self, text: str) -> None:
        parent = self._parent()
        if parent.ignore_children:
            return

        if parent.html_name in RAW_TEXT_ELEMENTS:
            escape = False
        elif parent.html_name == 'noscript':
            escape = not self.opts.scripting_enabled
        else:
            escape = True

        self._write(self._escape(text, attr_mode=False) if escape else text)

    # Void elements swallow every kind of content, not only elements

    def write_comment(self, text: str) -> None:
        if not self._parent().ignore_children:
            self._write(f"<!--{text}-->")

    def write_doctype(self, name: str) -> None:
        if not self._parent().ignore_children:
            self._write(f"<!DOCTYPE {name}>")

    def write_processing_instruction(self, target: str, data: str) -> None:
        if not self._parent().ignore_children:
            self._write(f"<?{target} {data}>")


def serialize(writer, node, opts: Optional[SerializeOpts] = None) -> None:
    """
    Serialize a node in HTML syntax to a byte stream.

    Args:
        writer: Object with a write(bytes) method
        node: The node to serialize
        opts: Serialization options; defaults to including the node itself
    """
    opts = opts or SerializeOpts()
    if (opts.traversal_scope is TraversalScope.CHILDREN_ONLY and opts.context is None
            and getattr(node, 'name', None) is not None and hasattr(node, 'attributes')):
        # Children of <script> and friends keep their raw-text treatment
        opts = SerializeOpts(opts.traversal_scope, opts.scripting_enabled,
                             opts.create_missing_parent, context=node.name)
    tree_serializer.serialize(node, HtmlSerializer(writer, opts), opts.traversal_scope)


def to_html(node, opts: Optional[SerializeOpts] = None) -> str:
    """
    Serialize a node in HTML syntax to a string.

    Raises:
        SerializationError: If the output is not valid UTF-8 text
    """
    buffer = io.BytesIO()
    try:
        serialize(buffer, node, opts)
        return buffer.getvalue().decode('utf-8')
    except UnicodeError as e:
        raise SerializationError(f"Serialized HTML is not valid UTF-8: {e}") from e
