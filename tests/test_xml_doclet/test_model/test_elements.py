"""Tests for the element model and kind filters."""

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
from xml_doclet.model.filters import fields_in, packages_in, skipped_in, sort_by_name, types_in


class TestElementKind:
    """Tests for kind classification helpers."""

    def test_type_kinds(self):
        """Test that all type kinds are recognized as types."""
        for kind in (ElementKind.CLASS, ElementKind.INTERFACE, ElementKind.ENUM,
                     ElementKind.ANNOTATION_TYPE, ElementKind.RECORD):
            assert kind.is_type()
        assert not ElementKind.FIELD.is_type()
        assert not ElementKind.PACKAGE.is_type()

    def test_field_kinds(self):
        """Test that fields and enum constants are fields."""
        assert ElementKind.FIELD.is_field()
        assert ElementKind.ENUM_CONSTANT.is_field()
        assert not ElementKind.METHOD.is_field()


class TestElements:
    """Tests for element dataclasses."""

    def test_doc_comment_string_rendering(self):
        """Test that str() yields the full comment text."""
        doc = DocComment("Summary.\n@param x the x")
        assert str(doc) == "Summary.\n@param x the x"

    def test_empty_doc_comment_is_present(self):
        """Test that empty documentation differs from no documentation."""
        field = FieldElement("f", DocComment(""))
        environment = DocletEnvironment()

        assert environment.get_documentation(field) is not None
        assert str(environment.get_documentation(field)) == ""
        assert environment.get_documentation(FieldElement("g")) is None

    def test_package_kind_is_fixed(self):
        """Test that packages always carry the PACKAGE tag."""
        assert PackageElement("a.b").kind == ElementKind.PACKAGE

    @pytest.mark.parametrize("factory", [
        lambda: FieldElement("f", kind=ElementKind.METHOD),
        lambda: ExecutableElement("m", kind=ElementKind.FIELD),
        lambda: TypeElement("T", "a.T", ElementKind.FIELD),
    ])
    def test_kind_mismatch_rejected(self, factory):
        """Test that each element class only accepts its own kinds."""
        with pytest.raises(ValueError):
            factory()

    def test_environment_lookup(self, sample_model):
        """Test package listing and type lookup."""
        names = [p.qualified_name for p in sample_model.included_packages()]

        assert names == ["com.example.alpha", "com.example.beta"]
        assert sample_model.find_type("com.example.beta.Beta").simple_name == "Beta"
        assert sample_model.find_type("com.example.Missing") is None


class TestFilters:
    """Tests for kind filters."""

    def test_types_in_keeps_classes_and_interfaces(self, mixed_model):
        """Test that enums and annotation types are filtered out."""
        package = mixed_model.included_packages()[0]
        names = [t.simple_name for t in types_in(package.enclosed_elements)]

        assert names == ["Service", "Impl"]
        assert skipped_in(package.enclosed_elements) == 2

    def test_fields_in_keeps_declaration_order(self):
        """Test that fields are returned in model order without methods."""
        members = [
            FieldElement("b"),
            ExecutableElement("run"),
            FieldElement("a"),
            TypeElement("Nested", "x.Nested"),
            FieldElement("C", kind=ElementKind.ENUM_CONSTANT),
        ]

        assert [f.simple_name for f in fields_in(members)] == ["b", "a", "C"]

    def test_packages_in(self, sample_model):
        """Test that only packages pass the package filter."""
        elements = sample_model.packages + [TypeElement("T", "T")]
        assert len(packages_in(elements)) == 2

    def test_sort_by_name(self):
        """Test sorting by qualified name, falling back to simple name."""
        types = [TypeElement("B", "z.B"), TypeElement("A", "y.A")]
        fields = [FieldElement("zeta"), FieldElement("alpha")]

        assert [t.qualified_name for t in sort_by_name(types)] == ["y.A", "z.B"]
        assert [f.simple_name for f in sort_by_name(fields)] == ["alpha", "zeta"]
