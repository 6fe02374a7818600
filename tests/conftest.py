"""Pytest fixtures for XML Doclet tests."""

import json

import pytest

from xml_doclet.model.elements import (
    DocComment,
    DocletEnvironment,
    ElementKind,
    ExecutableElement,
    FieldElement,
    PackageElement,
    TypeElement,
)


@pytest.fixture
def sample_model():
    """Two packages, one undocumented class each, two fields per class.

    Exactly one field (com.example.alpha.Alpha#first) carries documentation.
    """
    return DocletEnvironment(packages=[
        PackageElement("com.example.alpha", [
            TypeElement("Alpha", "com.example.alpha.Alpha", ElementKind.CLASS, None, [
                FieldElement("first", DocComment("The first field.")),
                FieldElement("second"),
            ]),
        ]),
        PackageElement("com.example.beta", [
            TypeElement("Beta", "com.example.beta.Beta", ElementKind.CLASS, None, [
                FieldElement("third"),
                FieldElement("fourth"),
            ]),
        ]),
    ])


@pytest.fixture
def mixed_model():
    """One package holding every kind of type and member."""
    return DocletEnvironment(packages=[
        PackageElement("org.sample", [
            TypeElement(
                "Service",
                "org.sample.Service",
                ElementKind.INTERFACE,
                DocComment("A service.\n@since 1.0"),
                [
                    FieldElement("NAME", DocComment("Service name.")),
                    ExecutableElement("run", DocComment("Runs it.")),
                ],
            ),
            TypeElement("Color", "org.sample.Color", ElementKind.ENUM, DocComment("Colors."), [
                FieldElement("RED", kind=ElementKind.ENUM_CONSTANT),
            ]),
            TypeElement("Marker", "org.sample.Marker", ElementKind.ANNOTATION_TYPE),
            TypeElement(
                "Impl",
                "org.sample.Impl",
                ElementKind.CLASS,
                DocComment("\\uc548\\ub155 <b>impl</b> & more"),
                [
                    FieldElement("count"),
                    ExecutableElement("Impl", kind=ElementKind.CONSTRUCTOR),
                    TypeElement("Inner", "org.sample.Impl.Inner", ElementKind.CLASS),
                ],
            ),
        ]),
    ])


@pytest.fixture
def model_file(tmp_path):
    """JSON model dump equivalent to a small two-type package."""
    data = {
        "packages": [
            {
                "name": "com.example",
                "types": [
                    {
                        "name": "Greeter",
                        "kind": "class",
                        "comment": "Says \\uc548\\ub155.",
                        "fields": [
                            {"name": "greeting", "comment": "The greeting."},
                            {"name": "count"},
                        ],
                        "methods": [{"name": "greet", "comment": "Greets."}],
                    },
                    {"name": "Mood", "kind": "enum"},
                    {"name": "Speaker", "kind": "interface", "comment": ""},
                ],
            }
        ]
    }
    path = tmp_path / "model.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path
