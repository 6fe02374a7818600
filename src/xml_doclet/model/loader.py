"""Build an element model from a JSON dump.

Any external parser can hand its resolved model to the doclet by writing a
document of this shape::

    {"packages": [
      {"name": "com.example",
       "types": [
         {"name": "Foo", "kind": "class", "comment": "Foo docs",
          "fields": [{"name": "bar", "comment": null}],
          "methods": [{"name": "run"}],
          "types": []}]}]}

``qualified`` defaults to ``<package>.<name>``; an absent or null
``comment`` means the element has no documentation.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..shared.config import ConfigError
from .elements import (
    DocComment,
    DocletEnvironment,
    ElementKind,
    ExecutableElement,
    FieldElement,
    MemberElement,
    PackageElement,
    TypeElement,
)

TYPE_KIND_NAMES: Dict[str, ElementKind] = {
    "class": ElementKind.CLASS,
    "interface": ElementKind.INTERFACE,
    "enum": ElementKind.ENUM,
    "annotation_type": ElementKind.ANNOTATION_TYPE,
    "annotation": ElementKind.ANNOTATION_TYPE,
    "@interface": ElementKind.ANNOTATION_TYPE,
    "record": ElementKind.RECORD,
}

FIELD_KIND_NAMES: Dict[str, ElementKind] = {
    "field": ElementKind.FIELD,
    "enum_constant": ElementKind.ENUM_CONSTANT,
}

EXECUTABLE_KIND_NAMES: Dict[str, ElementKind] = {
    "method": ElementKind.METHOD,
    "constructor": ElementKind.CONSTRUCTOR,
}


class ModelLoadError(ConfigError):
    """Raised when a model document is malformed."""

    def __init__(self, message: str, location: str = "$"):
        super().__init__(f"{location}: {message}")
        self.location = location


def load_model(path: Union[str, Path]) -> DocletEnvironment:
    """Read a model document from a UTF-8 JSON file."""
    model_path = Path(path)
    try:
        text = model_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ModelLoadError(f"cannot read model file {model_path}: {e}") from e
    return model_from_json(text)


def model_from_json(text: str) -> DocletEnvironment:
    """Parse a model document from a JSON string."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ModelLoadError(f"invalid JSON ({e.msg} at line {e.lineno})") from e
    return model_from_dict(data)


def model_from_dict(data: Any) -> DocletEnvironment:
    """Build a DocletEnvironment from already-decoded JSON data."""
    root = _expect_dict(data, "$")
    packages = _expect_list(root.get("packages", []), "$.packages")

    environment = DocletEnvironment()
    for index, package_data in enumerate(packages):
        environment.add_package(_load_package(package_data, f"$.packages[{index}]"))
    return environment


def _load_package(data: Any, location: str) -> PackageElement:
    package = _expect_dict(data, location)
    name = _expect_name(package, location)

    types = _expect_list(package.get("types", []), f"{location}.types")
    return PackageElement(
        qualified_name=name,
        enclosed_elements=[
            _load_type(type_data, name, f"{location}.types[{i}]")
            for i, type_data in enumerate(types)
        ],
    )


def _load_type(data: Any, enclosing_name: str, location: str) -> TypeElement:
    type_data = _expect_dict(data, location)
    name = _expect_name(type_data, location)
    qualified = type_data.get("qualified")
    if qualified is None:
        qualified = f"{enclosing_name}.{name}" if enclosing_name else name
    elif not isinstance(qualified, str):
        raise ModelLoadError("'qualified' must be a string", location)

    kind = _parse_kind(type_data.get("kind", "class"), TYPE_KIND_NAMES, location)

    members: List[MemberElement] = []
    for i, field_data in enumerate(_expect_list(type_data.get("fields", []), f"{location}.fields")):
        field_location = f"{location}.fields[{i}]"
        field_dict = _expect_dict(field_data, field_location)
        members.append(FieldElement(
            simple_name=_expect_name(field_dict, field_location),
            doc=_load_comment(field_dict, field_location),
            kind=_parse_kind(field_dict.get("kind", "field"), FIELD_KIND_NAMES, field_location),
        ))
    for i, method_data in enumerate(_expect_list(type_data.get("methods", []), f"{location}.methods")):
        method_location = f"{location}.methods[{i}]"
        method_dict = _expect_dict(method_data, method_location)
        members.append(ExecutableElement(
            simple_name=_expect_name(method_dict, method_location),
            doc=_load_comment(method_dict, method_location),
            kind=_parse_kind(
                method_dict.get("kind", "method"), EXECUTABLE_KIND_NAMES, method_location
            ),
        ))
    for i, nested_data in enumerate(_expect_list(type_data.get("types", []), f"{location}.types")):
        members.append(_load_type(nested_data, qualified, f"{location}.types[{i}]"))

    return TypeElement(
        simple_name=name,
        qualified_name=qualified,
        kind=kind,
        doc=_load_comment(type_data, location),
        enclosed_elements=members,
    )


def _load_comment(data: Dict[str, Any], location: str) -> Optional[DocComment]:
    comment = data.get("comment")
    if comment is None:
        return None
    if not isinstance(comment, str):
        raise ModelLoadError("'comment' must be a string or null", location)
    return DocComment(comment)


def _parse_kind(value: Any, names: Dict[str, ElementKind], location: str) -> ElementKind:
    if not isinstance(value, str) or value.strip().lower() not in names:
        raise ModelLoadError(
            f"unknown kind {value!r}, expected one of {sorted(names)}", location
        )
    return names[value.strip().lower()]


def _expect_name(data: Dict[str, Any], location: str) -> str:
    name = data.get("name")
    if not isinstance(name, str) or not name:
        raise ModelLoadError("'name' must be a non-empty string", location)
    return name


def _expect_dict(value: Any, location: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise ModelLoadError(f"expected an object, got {type(value).__name__}", location)
    return value


def _expect_list(value: Any, location: str) -> List[Any]:
    if not isinstance(value, list):
        raise ModelLoadError(f"expected an array, got {type(value).__name__}", location)
    return value
