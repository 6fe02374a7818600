"""Incremental XML writer over a byte sink.

XMLStreamEmitter exposes the familiar start-element / attribute / characters /
end-element call sequence on top of ``lxml.etree.xmlfile``, which serializes
as it goes and never holds the document tree in memory. Start tags are held
back until the first child, text or end event so that attributes can still be
added right after ``start_element``.

Callers balance start and end calls themselves; the ``element`` context
manager does it for them.
"""

from contextlib import contextmanager
from typing import Any, BinaryIO, Dict, Iterator, List, Optional, Tuple

from lxml import etree

from ..character.transformation import CharacterSanitizer
from ..shared.logging import CorrelationLogger, get_logger

SUPPORTED_ENCODING = "UTF-8"
SUPPORTED_VERSION = "1.0"
XML_DECLARATION = b'<?xml version="1.0" encoding="UTF-8"?>'


class XMLStreamError(Exception):
    """Writing to the sink failed or the call sequence was malformed."""


class _CountingSink:
    """File-like wrapper counting the bytes lxml hands to the real sink."""

    def __init__(self, sink: BinaryIO) -> None:
        self._sink = sink
        self.bytes_written = 0

    def write(self, data: bytes) -> int:
        self._sink.write(data)
        self.bytes_written += len(data)
        return len(data)

    def flush(self) -> None:
        flush = getattr(self._sink, "flush", None)
        if flush is not None:
            flush()


class XMLStreamEmitter:
    """Streaming XML writer with StAX-style call semantics.

    Example:
        >>> with open("out.xml", "wb") as sink, XMLStreamEmitter(sink) as emitter:
        ...     emitter.start_document()
        ...     with emitter.element("root", {"name": "demo"}):
        ...         emitter.write_characters("a < b")
        ...     emitter.end_document()
    """

    def __init__(
        self,
        sink: BinaryIO,
        sanitizer: Optional[CharacterSanitizer] = None,
        logger: Optional[CorrelationLogger] = None,
    ) -> None:
        self._sink = _CountingSink(sink)
        self.sanitizer = sanitizer or CharacterSanitizer()
        self.logger = logger or get_logger(__name__, None, "xml_emitter")

        self._context: Any = None
        self._writer: Any = None
        self._open_elements: List[Tuple[str, Any]] = []
        self._pending: Optional[Tuple[str, Dict[str, str]]] = None
        self._document_ended = False

    def __enter__(self) -> "XMLStreamEmitter":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close(aborted=exc_type is not None)

    @property
    def depth(self) -> int:
        """Number of elements started and not yet ended."""
        return len(self._open_elements) + (1 if self._pending else 0)

    @property
    def bytes_written(self) -> int:
        """Bytes delivered to the sink so far (complete once closed)."""
        return self._sink.bytes_written

    @property
    def sanitized_characters(self) -> int:
        """Characters removed or replaced because XML 1.0 cannot carry them."""
        return self.sanitizer.total_changes

    def start_document(
        self,
        encoding: str = SUPPORTED_ENCODING,
        version: str = SUPPORTED_VERSION,
    ) -> None:
        """Open the document and write the XML declaration."""
        if self._context is not None or self._document_ended:
            raise XMLStreamError("start_document() called twice")
        if encoding.upper() != SUPPORTED_ENCODING:
            raise XMLStreamError(f"Unsupported encoding: {encoding}")
        if version != SUPPORTED_VERSION:
            raise XMLStreamError(f"Unsupported XML version: {version}")

        with self._translate_errors("start_document"):
            # Double-quoted; lxml's write_declaration() uses apostrophes
            self._sink.write(XML_DECLARATION)
            self._context = etree.xmlfile(self._sink, encoding=SUPPORTED_ENCODING)
            self._writer = self._context.__enter__()

    def start_element(self, name: str) -> None:
        """Begin an element; its start tag is written on the next event."""
        self._require_document("start_element")
        self._flush_pending()
        self._pending = (name, {})

    def write_attribute(self, name: str, value: str) -> None:
        """Add an attribute to the element just started."""
        if self._pending is None:
            raise XMLStreamError(
                f"Attribute '{name}' must directly follow start_element()"
            )
        element_name, attributes = self._pending
        if name in attributes:
            raise XMLStreamError(f"Duplicate attribute '{name}' on <{element_name}>")
        attributes[name] = self._clean(value)

    def write_characters(self, text: str) -> None:
        """Write escaped text content into the current element."""
        self._require_document("write_characters")
        self._flush_pending()
        if not self._open_elements:
            raise XMLStreamError("write_characters() outside of any element")
        if not text:
            return
        with self._translate_errors("write_characters"):
            self._writer.write(self._clean(text))

    def end_element(self) -> None:
        """Close the most recently opened element."""
        self._require_document("end_element")
        self._flush_pending()
        if not self._open_elements:
            raise XMLStreamError("end_element() without a matching start_element()")
        name, element_context = self._open_elements.pop()
        with self._translate_errors(f"end_element </{name}>"):
            element_context.__exit__(None, None, None)

    def end_document(self) -> None:
        """Close every element still open and finish the document."""
        self._require_document("end_document")
        self._flush_pending()
        while self._open_elements:
            self.end_element()
        with self._translate_errors("end_document"):
            context, self._context, self._writer = self._context, None, None
            context.__exit__(None, None, None)
        self._document_ended = True

    def close(self, aborted: bool = False) -> None:
        """Release the writer. Idempotent; never closes the underlying sink.

        A document not finished by end_document() is abandoned as is:
        buffered output is flushed but no end tags are synthesized.
        """
        if self._context is None:
            return
        context, self._context, self._writer = self._context, None, None
        self._open_elements.clear()
        self._pending = None
        self.logger.debug(
            "Abandoning unfinished document",
            extra={"aborted": aborted, "bytes_written": self.bytes_written},
        )
        # A non-None exception type keeps lxml from checking for open tags
        context.__exit__(XMLStreamError, None, None)

    @contextmanager
    def element(
        self,
        name: str,
        attributes: Optional[Dict[str, str]] = None,
    ) -> Iterator["XMLStreamEmitter"]:
        """Open an element for the duration of the block.

        The end tag is written when the block completes normally; if it
        raises, the document is left for close() to abandon.
        """
        self.start_element(name)
        for attr_name, attr_value in (attributes or {}).items():
            self.write_attribute(attr_name, attr_value)
        depth = self.depth
        yield self
        if self.depth != depth:
            raise XMLStreamError(f"Unbalanced elements inside <{name}>")
        self.end_element()

    def _flush_pending(self) -> None:
        if self._pending is None:
            return
        name, attributes = self._pending
        self._pending = None
        with self._translate_errors(f"start_element <{name}>"):
            element_context = self._writer.element(name, attributes)
            element_context.__enter__()
        self._open_elements.append((name, element_context))

    def _require_document(self, operation: str) -> None:
        if self._writer is None:
            raise XMLStreamError(f"{operation}() called outside of an open document")

    def _clean(self, text: str) -> str:
        return self.sanitizer.sanitize(text).text

    @contextmanager
    def _translate_errors(self, operation: str) -> Iterator[None]:
        try:
            yield
        except XMLStreamError:
            raise
        except (etree.LxmlError, OSError, ValueError, TypeError) as e:
            raise XMLStreamError(f"{operation} failed: {e}") from e
