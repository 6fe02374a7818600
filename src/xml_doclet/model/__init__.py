"""Element model consumed by the doclet.

Provides the tagged element dataclasses, the ElementModel protocol a front
end must satisfy, kind filters, and a JSON loader.
"""

from .elements import (
    DocComment,
    DocletEnvironment,
    Element,
    ElementKind,
    ElementModel,
    ExecutableElement,
    FieldElement,
    MemberElement,
    PackageElement,
    TypeElement,
)
from .filters import fields_in, packages_in, sort_by_name, types_in
from .loader import ModelLoadError, load_model, model_from_dict, model_from_json

__all__ = [
    "DocComment",
    "DocletEnvironment",
    "Element",
    "ElementKind",
    "ElementModel",
    "ExecutableElement",
    "FieldElement",
    "MemberElement",
    "PackageElement",
    "TypeElement",
    "fields_in",
    "packages_in",
    "sort_by_name",
    "types_in",
    "ModelLoadError",
    "load_model",
    "model_from_dict",
    "model_from_json",
]
