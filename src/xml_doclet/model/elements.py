"""Read-only element model consumed by the doclet.

The model mirrors what a source front end hands over after parsing and
resolving compilation units: packages enclosing types, types enclosing
fields, methods and nested types, each optionally carrying a documentation
comment. Elements form a closed set of dataclasses tagged by ElementKind;
consumers dispatch on ``kind`` rather than on class.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterable, List, Optional, Protocol, Union


class ElementKind(Enum):
    """Kinds of source elements a front end can report."""

    PACKAGE = auto()
    CLASS = auto()
    INTERFACE = auto()
    ENUM = auto()
    ANNOTATION_TYPE = auto()
    RECORD = auto()
    FIELD = auto()
    ENUM_CONSTANT = auto()
    METHOD = auto()
    CONSTRUCTOR = auto()

    def is_type(self) -> bool:
        """True for every type kind, emitted or not."""
        return self in _TYPE_KINDS

    def is_field(self) -> bool:
        """True for fields and enum constants."""
        return self in _FIELD_KINDS

    def is_executable(self) -> bool:
        return self in _EXECUTABLE_KINDS


_TYPE_KINDS = frozenset({
    ElementKind.CLASS,
    ElementKind.INTERFACE,
    ElementKind.ENUM,
    ElementKind.ANNOTATION_TYPE,
    ElementKind.RECORD,
})
_FIELD_KINDS = frozenset({ElementKind.FIELD, ElementKind.ENUM_CONSTANT})
_EXECUTABLE_KINDS = frozenset({ElementKind.METHOD, ElementKind.CONSTRUCTOR})


@dataclass(frozen=True)
class DocComment:
    """A parsed documentation comment.

    Only its full-text rendering is used; ``str(doc)`` returns the complete
    comment (prose, inline markup and block tags) as one string. An empty
    text is still a present comment.
    """

    text: str

    def __str__(self) -> str:
        return self.text


@dataclass
class FieldElement:
    """A field or enum constant."""

    simple_name: str
    doc: Optional[DocComment] = None
    kind: ElementKind = ElementKind.FIELD

    def __post_init__(self) -> None:
        if not self.kind.is_field():
            raise ValueError(f"FieldElement cannot have kind {self.kind.name}")


@dataclass
class ExecutableElement:
    """A method or constructor. Never emitted, but part of a type's members."""

    simple_name: str
    doc: Optional[DocComment] = None
    kind: ElementKind = ElementKind.METHOD

    def __post_init__(self) -> None:
        if not self.kind.is_executable():
            raise ValueError(f"ExecutableElement cannot have kind {self.kind.name}")


@dataclass
class TypeElement:
    """A class, interface, enum, annotation type or record."""

    simple_name: str
    qualified_name: str
    kind: ElementKind = ElementKind.CLASS
    doc: Optional[DocComment] = None
    enclosed_elements: List["MemberElement"] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.kind.is_type():
            raise ValueError(f"TypeElement cannot have kind {self.kind.name}")


@dataclass
class PackageElement:
    """A package and the types declared in it."""

    qualified_name: str
    enclosed_elements: List[TypeElement] = field(default_factory=list)
    kind: ElementKind = field(default=ElementKind.PACKAGE, init=False)


MemberElement = Union[TypeElement, FieldElement, ExecutableElement]
Element = Union[PackageElement, TypeElement, FieldElement, ExecutableElement]


class ElementModel(Protocol):
    """Narrow read-only view of a resolved source model."""

    def included_packages(self) -> Iterable[PackageElement]:
        """Top-level packages selected for documentation, in model order."""
        ...

    def get_documentation(self, element: Element) -> Optional[DocComment]:
        """Documentation attached to a type or field, or None."""
        ...


@dataclass
class DocletEnvironment:
    """In-memory element model built directly or by the JSON loader."""

    packages: List[PackageElement] = field(default_factory=list)

    def included_packages(self) -> List[PackageElement]:
        return list(self.packages)

    def get_documentation(self, element: Element) -> Optional[DocComment]:
        return getattr(element, "doc", None)

    def add_package(self, package: PackageElement) -> PackageElement:
        self.packages.append(package)
        return package

    def find_type(self, qualified_name: str) -> Optional[TypeElement]:
        """Look up a package-level type by qualified name."""
        for package in self.packages:
            for element in package.enclosed_elements:
                if element.qualified_name == qualified_name:
                    return element
        return None
