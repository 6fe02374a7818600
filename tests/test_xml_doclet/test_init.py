"""Test module for xml_doclet package initialization."""


def test_package_import() -> None:
    """Test that the package can be imported successfully."""
    # Arrange & Act
    import xml_doclet

    # Assert
    assert xml_doclet is not None


def test_package_has_version() -> None:
    """Test that the package has a version attribute."""
    # Arrange & Act
    import xml_doclet

    # Assert
    assert isinstance(xml_doclet.__version__, str)
    assert xml_doclet.__version__ == "0.1.0"


def test_package_has_author() -> None:
    """Test that the package has an author attribute."""
    # Arrange & Act
    import xml_doclet

    # Assert
    assert xml_doclet.__author__ == "XML Doclet Team"


def test_package_all_exports() -> None:
    """Test that every name in __all__ is importable."""
    # Arrange & Act
    import xml_doclet

    # Assert
    for name in xml_doclet.__all__:
        assert hasattr(xml_doclet, name), name
    assert "generate" in xml_doclet.__all__
    assert "unescape" in xml_doclet.__all__
