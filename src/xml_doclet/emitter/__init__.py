"""Streaming XML serialization."""

from .stream import XMLStreamEmitter, XMLStreamError

__all__ = [
    "XMLStreamEmitter",
    "XMLStreamError",
]
