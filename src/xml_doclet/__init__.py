"""XML Doclet.

Serializes a resolved source model (packages, classes, interfaces, fields and
their documentation comments) into a single streaming XML document.

Progressive API Disclosure:
- Level 1: Simple function - generate()
- Level 2: Configured driver - DocumentDriver with DocletConfig
- Level 3: Building blocks - HierarchyWalker over an XMLStreamEmitter
"""

__version__ = "0.1.0"
__author__ = "XML Doclet Team"

# Level 1: Simple function
from .doclet.driver import DocumentDriver, GenerationError, generate

# Level 3: Building blocks
from .character.unescape import escape, unescape
from .doclet.walker import HierarchyWalker
from .emitter.stream import XMLStreamEmitter, XMLStreamError

# Element model for front ends
from .model import (
    DocComment,
    DocletEnvironment,
    ElementKind,
    FieldElement,
    PackageElement,
    TypeElement,
    load_model,
)

# Configuration and results
from .shared.config import DocletConfig
from .shared.result import GenerationResult

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple generation function
    "generate",

    # Level 2: Configured driver
    "DocumentDriver",
    "DocletConfig",
    "GenerationResult",
    "GenerationError",

    # Level 3: Building blocks
    "HierarchyWalker",
    "XMLStreamEmitter",
    "XMLStreamError",
    "escape",
    "unescape",

    # Element model
    "DocComment",
    "DocletEnvironment",
    "ElementKind",
    "FieldElement",
    "PackageElement",
    "TypeElement",
    "load_model",
]
