"""
XMI Document Models.

This module defines the raw document tree produced by the XMI parser. The tree
mirrors the structure of a UML export of a CIM profile:

- XMIDocument: root element holding one or more models
- XMIModel: a UML model holding top-level packages
- XMIPackage: a top-level package holding package elements
- PackageElement: a nested, recursive element (package, class, enumeration, ...)
- OwnedAttribute / Generalization / OwnedLiteral: children of classes and enumerations

Each node owns its children outright. The tree is built once by the parser,
walked once by the index builder and then discarded.
"""

from dataclasses import dataclass, field
from typing import Iterator, List


@dataclass
class OwnedAttribute:
    """
    An attribute declared on a UML class.

    Attributes:
        name: Attribute name as declared in the model.
        type: UML meta-type of the attribute (e.g. ``uml:Property``).
        type_ref: Identifier of the referenced object (class, enumeration
            or primitive marker).
        lower: Lower cardinality bound as a literal string.
        upper: Upper cardinality bound as a literal string (``*`` is unbounded).
    """
    name: str = ""
    type: str = ""
    type_ref: str = ""
    lower: str = ""
    upper: str = ""


@dataclass
class Generalization:
    """A UML inheritance reference; ``general`` is the parent class identifier."""
    type: str = ""
    general: str = ""


@dataclass
class OwnedLiteral:
    """A literal of a UML enumeration."""
    id: str = ""
    name: str = ""


@dataclass
class PackageElement:
    """
    A packaged element of the model.

    Elements nest recursively. Only classes carry attributes and
    generalizations, only enumerations carry literals, but the parser does not
    enforce this: whatever the export contains is kept.
    """
    id: str = ""
    name: str = ""
    type: str = ""
    is_abstract: bool = False
    elements: List["PackageElement"] = field(default_factory=list)
    attributes: List[OwnedAttribute] = field(default_factory=list)
    generalizations: List[Generalization] = field(default_factory=list)
    literals: List[OwnedLiteral] = field(default_factory=list)

    def walk(self) -> Iterator["PackageElement"]:
        """Yield this element and all nested elements in pre-order."""
        yield self
        for child in self.elements:
            yield from child.walk()


@dataclass
class XMIPackage:
    """A top-level package of a model."""
    name: str = ""
    type: str = ""
    elements: List[PackageElement] = field(default_factory=list)


@dataclass
class XMIModel:
    """A UML model inside the XMI document."""
    name: str = ""
    type: str = ""
    packages: List[XMIPackage] = field(default_factory=list)


@dataclass
class XMIDocument:
    """Root of the parsed XMI document."""
    models: List[XMIModel] = field(default_factory=list)
    source_path: str = ""

    def iter_top_elements(self) -> Iterator[PackageElement]:
        """Yield the elements directly below each top-level package, in document order."""
        for model in self.models:
            for package in model.packages:
                yield from package.elements

    @property
    def element_count(self) -> int:
        return sum(1 for top in self.iter_top_elements() for _ in top.walk())
