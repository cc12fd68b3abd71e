"""
CIM Type Mapper.

This module maps resolved CIM type names to Dgraph predicate types.

CIM profiles declare their primitives as classes (String, Float, Boolean, ...).
Those are mapped to Dgraph scalar types; every other type name (CIM datatypes,
enumerations, other classes, unresolved references) becomes a ``uid`` edge.

A property whose upper cardinality bound is ``*`` is wrapped as a list.

Usage:
    from formats.xmi.xmi_type_mapper import CIMTypeMapper

    mapper = CIMTypeMapper()
    result = mapper.map_type("Integer", upper="*")
    print(result.dgraph_type)  # [int]
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from constants import SchemaConfig

from .cim_models import CIMProperty, PropertyResolution


class DgraphValueType(Enum):
    """Dgraph scalar and edge types used in derived schemas."""
    STRING = "string"
    FLOAT = "float"
    BOOL = "bool"
    INT = "int"
    DATETIME = "dateTime"
    UID = "uid"


# =============================================================================
# CIM Primitive Type Mappings
# =============================================================================

CIM_TYPE_MAPPINGS: Dict[str, str] = {
    "String": "string",
    "Float": "float",
    "Simple_Float": "float",
    "Boolean": "bool",
    "Integer": "int",
    "DateTime": "dateTime",
    "Date": "dateTime",
}

# Tokenizer used when a predicate is indexed
INDEX_TOKENIZERS: Dict[str, str] = {
    "string": "exact",
    "int": "int",
    "float": "float",
    "bool": "bool",
    "dateTime": "hour",
}


@dataclass
class TypeMappingResult:
    """
    Result of CIM to Dgraph type mapping.

    Attributes:
        dgraph_type: Final predicate type, list-wrapped when unbounded.
        base_type: The scalar or ``uid`` type before list wrapping.
        original_type: The resolved CIM type name.
        is_list: Whether the upper bound was unbounded.
        is_reference: Whether the predicate is a ``uid`` edge.
    """
    dgraph_type: str
    base_type: DgraphValueType
    original_type: str
    is_list: bool = False
    is_reference: bool = False


def list_of(base_type: str) -> str:
    """Wrap a Dgraph type as a list type."""
    return f"[{base_type}]"


class CIMTypeMapper:
    """
    Maps resolved CIM type names to Dgraph predicate types.

    Matching is exact and case-sensitive, as CIM primitive names are.

    Example:
        >>> mapper = CIMTypeMapper()
        >>> mapper.map_type("Boolean").dgraph_type
        'bool'
        >>> mapper.map_type("ActivePower").dgraph_type
        'uid'
    """

    def __init__(self, mappings: Optional[Dict[str, str]] = None):
        self._mappings = dict(mappings) if mappings is not None else CIM_TYPE_MAPPINGS.copy()

    def map_type(self, type_name: str, upper: str = "") -> TypeMappingResult:
        """
        Map a resolved CIM type name to a Dgraph type.

        Args:
            type_name: Resolved CIM type name.
            upper: Upper cardinality bound as declared.

        Returns:
            TypeMappingResult with the final Dgraph type.
        """
        scalar = self._mappings.get(type_name)
        base_type = DgraphValueType(scalar) if scalar else DgraphValueType.UID
        is_list = upper == SchemaConfig.UNBOUNDED

        dgraph_type = list_of(base_type.value) if is_list else base_type.value
        return TypeMappingResult(
            dgraph_type=dgraph_type,
            base_type=base_type,
            original_type=type_name,
            is_list=is_list,
            is_reference=base_type == DgraphValueType.UID,
        )

    def map_property(self, prop: CIMProperty) -> TypeMappingResult:
        """
        Map a resolved property.

        Unresolved properties are always object references, whatever the
        identifier they carry.
        """
        if prop.resolution == PropertyResolution.UNRESOLVED:
            return self.map_type(SchemaConfig.OBJECT_REFERENCE_TYPE, prop.upper)
        return self.map_type(prop.type, prop.upper)

    def is_primitive(self, type_name: str) -> bool:
        """Check if a CIM type name maps to a Dgraph scalar."""
        return type_name in self._mappings

    def get_all_mappings(self) -> Dict[str, str]:
        return self._mappings.copy()
