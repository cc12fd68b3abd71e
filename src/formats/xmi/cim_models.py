"""
CIM Profile Data Models.

This module defines the class/property/inheritance model extracted from an XMI
document. These models are the intermediate representation between the raw
XMI tree and the derived Dgraph schema.

Models:
- CIMInheritance: reference from a class to a parent class
- CIMProperty: a qualified, typed property with cardinality bounds
- CIMClass: class definition with its properties and inheritance references
- CIMEnumLiteral / CIMEnum: enumeration definitions
- CIMProfile: the ordered list of non-abstract classes
- ModelIndex: identifier lookups built by the index builder
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class PropertyResolution(Enum):
    """How a property's referenced object was resolved."""
    PENDING = "pending"
    CLASS = "class"
    ENUM = "enum"
    UNRESOLVED = "unresolved"


@dataclass
class CIMInheritance:
    """
    Reference to a parent class.

    Attributes:
        id: Identifier of the parent class.
        name: Name of the parent class, filled in during resolution.
    """
    id: str
    name: str = ""


@dataclass
class CIMProperty:
    """
    A property of a CIM class.

    Attributes:
        name: Qualified name ``ClassName.AttributeName``.
        object: Identifier of the referenced class, enumeration or primitive.
        type: Resolved type name, empty until resolution.
        lower: Lower cardinality bound as declared.
        upper: Upper cardinality bound as declared (``*`` is unbounded).
        resolution: Which index resolved ``object``.
    """
    name: str
    object: str = ""
    type: str = ""
    lower: str = ""
    upper: str = ""
    resolution: PropertyResolution = PropertyResolution.PENDING

    def copy_unresolved(self) -> "CIMProperty":
        """Copy the declaration without any resolution state."""
        return CIMProperty(
            name=self.name,
            object=self.object,
            lower=self.lower,
            upper=self.upper,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "object": self.object,
            "type": self.type,
            "lower": self.lower,
            "upper": self.upper,
            "resolution": self.resolution.value,
        }


@dataclass
class CIMClass:
    """
    A class of the CIM profile.

    Attributes:
        name: Class name.
        id: Identifier, unique within a parsed document.
        inherits_from: Parent references; before resolution these are the
            declared generalizations, afterwards the followed parent chain.
        properties: Own properties in declaration order, followed by
            inherited properties once resolved.
        is_abstract: Whether the class is abstract in the model.
    """
    name: str
    id: str
    inherits_from: List[CIMInheritance] = field(default_factory=list)
    properties: List[CIMProperty] = field(default_factory=list)
    is_abstract: bool = False

    @property
    def first_parent_id(self) -> Optional[str]:
        """Identifier of the first declared generalization, if any."""
        if not self.inherits_from:
            return None
        return self.inherits_from[0].id

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "id": self.id,
            "inheritsFrom": [{"id": i.id, "name": i.name} for i in self.inherits_from],
            "properties": [p.to_dict() for p in self.properties],
        }


@dataclass
class CIMEnumLiteral:
    """A literal of a CIM enumeration."""
    id: str
    name: str


@dataclass
class CIMEnum:
    """
    A CIM enumeration.

    Attributes:
        id: Identifier of the enumeration.
        name: Enumeration name.
        literals: Literals in declaration order.
    """
    id: str
    name: str
    literals: List[CIMEnumLiteral] = field(default_factory=list)


@dataclass
class CIMProfile:
    """The flattened domain model: non-abstract classes in document order."""
    classes: List[CIMClass] = field(default_factory=list)

    def get_class(self, name: str) -> Optional[CIMClass]:
        """Return the first class with the given name."""
        for cim_class in self.classes:
            if cim_class.name == name:
                return cim_class
        return None

    @property
    def property_count(self) -> int:
        return sum(len(c.properties) for c in self.classes)


@dataclass
class ModelIndex:
    """
    Lookups built by a single pass over the XMI tree.

    ``classes`` includes abstract classes, ``profile`` does not. The index is
    read-only once built.
    """
    classes: Dict[str, CIMClass] = field(default_factory=dict)
    enums: Dict[str, CIMEnum] = field(default_factory=dict)
    profile: CIMProfile = field(default_factory=CIMProfile)

    def find_class(self, class_id: str) -> Optional[CIMClass]:
        """Look up a class by identifier; ``None`` when it is not in the model."""
        if not class_id:
            return None
        return self.classes.get(class_id)

    def find_enum(self, enum_id: str) -> Optional[CIMEnum]:
        """Look up an enumeration by identifier; ``None`` when it is not in the model."""
        if not enum_id:
            return None
        return self.enums.get(enum_id)
