"""
XMI (UML/CIM) Import Module

This module parses XMI exports of CIM profiles and derives a Dgraph schema
from them.

Key Components:
- xmi_parser: Decode XMI documents (charset policy, raw document tree)
- cim_indexer: Build class and enumeration indices in one pre-order pass
- cim_resolver: Flatten single-parent inheritance chains, resolve types
- xmi_type_mapper: CIM primitive to Dgraph type mappings
- xmi_converter: Derive predicates and node types

Usage:
    from formats.xmi import CIMToDgraphConverter

    converter = CIMToDgraphConverter()
    result = converter.convert_file("data/schema.xmi")
    print(result.schema.to_schema_text())
"""

from .xmi_models import (
    Generalization,
    OwnedAttribute,
    OwnedLiteral,
    PackageElement,
    XMIDocument,
    XMIModel,
    XMIPackage,
)

from .xmi_parser import (
    XMIParser,
    XMIParseError,
    UnknownCharsetError,
    parse_xmi_file,
)

from .cim_models import (
    CIMClass,
    CIMEnum,
    CIMEnumLiteral,
    CIMInheritance,
    CIMProfile,
    CIMProperty,
    ModelIndex,
    PropertyResolution,
)

from .cim_indexer import ModelIndexBuilder

from .cim_resolver import CIMResolver, UnresolvedReferenceError

from .xmi_type_mapper import (
    CIMTypeMapper,
    CIM_TYPE_MAPPINGS,
    DgraphValueType,
    TypeMappingResult,
)

from .xmi_converter import CIMToDgraphConverter, convert_xmi_file

__all__ = [
    # Document tree
    'Generalization',
    'OwnedAttribute',
    'OwnedLiteral',
    'PackageElement',
    'XMIDocument',
    'XMIModel',
    'XMIPackage',
    # Parsing
    'XMIParser',
    'XMIParseError',
    'UnknownCharsetError',
    'parse_xmi_file',
    # CIM profile
    'CIMClass',
    'CIMEnum',
    'CIMEnumLiteral',
    'CIMInheritance',
    'CIMProfile',
    'CIMProperty',
    'ModelIndex',
    'PropertyResolution',
    # Indexing and resolution
    'ModelIndexBuilder',
    'CIMResolver',
    'UnresolvedReferenceError',
    # Type mapping
    'CIMTypeMapper',
    'CIM_TYPE_MAPPINGS',
    'DgraphValueType',
    'TypeMappingResult',
    # Conversion
    'CIMToDgraphConverter',
    'convert_xmi_file',
]
