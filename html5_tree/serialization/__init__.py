"""
Serialization of the document model back to HTML.
"""

from .tree_serializer import (TraversalScope, EventSink, EventRecorder, walk,
                              StartTag, EndTag, DoctypeEvent, TextEvent, CommentEvent,
                              ProcessingInstructionEvent)
from .html_serializer import HtmlSerializer, SerializeOpts, serialize, to_html

__all__ = [
    'TraversalScope', 'EventSink', 'EventRecorder', 'walk',
    'StartTag', 'EndTag', 'DoctypeEvent', 'TextEvent', 'CommentEvent',
    'ProcessingInstructionEvent',
    'HtmlSerializer', 'SerializeOpts', 'serialize', 'to_html',
]
