"""Kind filters over element collections."""

from typing import Iterable, List, TypeVar

from .elements import (
    ElementKind,
    FieldElement,
    PackageElement,
    TypeElement,
)

# Only these type kinds appear in the generated document
EMITTED_TYPE_KINDS = frozenset({ElementKind.CLASS, ElementKind.INTERFACE})

T = TypeVar("T")


def packages_in(elements: Iterable[object]) -> List[PackageElement]:
    """Packages among elements, in order."""
    return [e for e in elements if getattr(e, "kind", None) == ElementKind.PACKAGE]


def types_in(elements: Iterable[object]) -> List[TypeElement]:
    """Classes and interfaces among elements, in order.

    Enums, records and annotation types are dropped here, so neither they
    nor anything they enclose reach the output.
    """
    return [e for e in elements if getattr(e, "kind", None) in EMITTED_TYPE_KINDS]


def fields_in(elements: Iterable[object]) -> List[FieldElement]:
    """Fields and enum constants among elements, in order."""
    return [
        e for e in elements
        if isinstance(getattr(e, "kind", None), ElementKind) and e.kind.is_field()
    ]


def skipped_in(elements: Iterable[object]) -> int:
    """Count members a type or package walk will not emit."""
    return sum(
        1 for e in elements
        if getattr(e, "kind", None) not in EMITTED_TYPE_KINDS
        and not (isinstance(getattr(e, "kind", None), ElementKind) and e.kind.is_field())
    )


def sort_by_name(elements: Iterable[T]) -> List[T]:
    """Stable sort by qualified name, falling back to the simple name."""
    def key(element: object) -> str:
        name = getattr(element, "qualified_name", None)
        return name if name is not None else getattr(element, "simple_name", "")

    return sorted(elements, key=key)
