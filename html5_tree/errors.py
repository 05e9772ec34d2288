"""
Exceptions raised by the HTML tree.
"""


class SerializationError(ValueError):
    """
    Raised when serialized output cannot be produced as text, or when a
    sink receives unbalanced start/end events.

    All text in the tree comes from valid Unicode sources, so this signals
    a broken internal invariant rather than bad user input.
    """
