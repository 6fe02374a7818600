"""Depth-first walk of the element model into the XML emitter.

The walk mirrors the model nesting exactly: package -> class/interface ->
field, each type and field followed by its documentation comment when the
model reports one.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, TypeVar

from ..character.unescape import unescape
from ..emitter.stream import XMLStreamEmitter
from ..model.elements import (
    DocComment,
    ElementKind,
    ElementModel,
    FieldElement,
    PackageElement,
    TypeElement,
)
from ..model.filters import fields_in, skipped_in, sort_by_name, types_in
from ..shared.logging import CorrelationLogger, get_logger

PACKAGE_TAG = "package"
CLASS_TAG = "class"
INTERFACE_TAG = "interface"
FIELD_TAG = "field"
COMMENT_TAG = "comment"

T = TypeVar("T")


@dataclass
class WalkStatistics:
    """Elements emitted and members skipped during a walk."""

    packages: int = 0
    types: int = 0
    fields: int = 0
    comments: int = 0
    skipped_members: int = 0


class HierarchyWalker:
    """Drive an XMLStreamEmitter from an ElementModel.

    Args:
        model: Source of documentation lookups
        escape_characters: When True documentation text is written exactly
            as the model supplies it; when False escape sequences in it are
            decoded first
        sort_elements: Emit packages, types and fields sorted by name
            instead of in model order
        logger: Optional correlation logger
    """

    def __init__(
        self,
        model: ElementModel,
        escape_characters: bool = True,
        sort_elements: bool = False,
        logger: Optional[CorrelationLogger] = None,
    ) -> None:
        self.model = model
        self.escape_characters = escape_characters
        self.sort_elements = sort_elements
        self.logger = logger or get_logger(__name__, None, "hierarchy_walker")
        self.statistics = WalkStatistics()

    def emit(
        self,
        emitter: XMLStreamEmitter,
        packages: Optional[Iterable[PackageElement]] = None,
    ) -> WalkStatistics:
        """Write every package of the model (or the given packages).

        Statistics start from zero on every call.
        """
        self.statistics = WalkStatistics()
        if packages is None:
            packages = self.model.included_packages()
        for package in self._ordered(packages):
            self.emit_package(emitter, package)
        return self.statistics

    def emit_package(self, emitter: XMLStreamEmitter, package: PackageElement) -> None:
        members = package.enclosed_elements
        self.logger.debug(
            f"Processing package {package.qualified_name}",
            extra={"package": package.qualified_name, "members": len(members)},
        )
        self.statistics.skipped_members += skipped_in(members)

        with emitter.element(PACKAGE_TAG, {"name": package.qualified_name}):
            for type_element in self._ordered(types_in(members)):
                self.emit_type(emitter, type_element)
        self.statistics.packages += 1

    def emit_type(self, emitter: XMLStreamEmitter, type_element: TypeElement) -> None:
        tag = CLASS_TAG if type_element.kind == ElementKind.CLASS else INTERFACE_TAG
        members = type_element.enclosed_elements
        self.statistics.skipped_members += len(members) - len(fields_in(members))

        emitter.start_element(tag)
        emitter.write_attribute("name", type_element.simple_name)
        emitter.write_attribute("qualified", type_element.qualified_name)
        self.emit_comment(emitter, self.model.get_documentation(type_element))
        for field_element in self._ordered(fields_in(members)):
            self.emit_field(emitter, field_element)
        emitter.end_element()
        self.statistics.types += 1

    def emit_field(self, emitter: XMLStreamEmitter, field_element: FieldElement) -> None:
        emitter.start_element(FIELD_TAG)
        emitter.write_attribute("name", field_element.simple_name)
        self.emit_comment(emitter, self.model.get_documentation(field_element))
        emitter.end_element()
        self.statistics.fields += 1

    def emit_comment(self, emitter: XMLStreamEmitter, doc: Optional[DocComment]) -> None:
        """Write a comment element iff documentation is present."""
        if doc is None:
            return
        with emitter.element(COMMENT_TAG):
            emitter.write_characters(self.comment_text(doc))
        self.statistics.comments += 1

    def comment_text(self, doc: DocComment) -> str:
        text = str(doc)
        if self.escape_characters:
            return text
        return unescape(text)

    def _ordered(self, elements: Iterable[T]) -> List[T]:
        if self.sort_elements:
            return sort_by_name(elements)
        return list(elements)
