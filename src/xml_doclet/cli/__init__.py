"""Command-line interface module for XML Doclet.

This module provides the xml-doclet tool that turns an element model dump
into the XML documentation document.
"""

from .main import main

__all__ = ["main"]
