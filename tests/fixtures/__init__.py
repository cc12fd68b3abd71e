"""
Centralized test fixtures for the CIM to Dgraph converter test suite.

This package provides reusable fixtures for testing, including:
- XMI sample documents and builders
- RDF/XML instance data
- Configuration fixtures

Usage:
    from fixtures import (
        INHERITANCE_XMI,
        CIM_WIRES_XMI,
        build_xmi,
        SAMPLE_CONFIG,
    )

Or use the pytest fixtures in conftest.py which import from here.
"""

from .xmi_fixtures import (
    # Builders
    build_xmi,
    xmi_attribute,
    xmi_class,
    xmi_enum,
    xmi_package,
    primitive_classes,
    PRIMITIVE_NAMES,

    # Sample documents
    INHERITANCE_XMI,
    ENUM_XMI,
    CIM_WIRES_XMI,
    UTF16_DECLARED_XMI,
    NO_DECLARATION_XMI,
    NOT_XMI,
    MALFORMED_XMI,

    # Instance data
    CIM_INSTANCE_RDF,
)

from .config_fixtures import (
    SAMPLE_CONFIG,
    MINIMAL_CONFIG,
    INVALID_URL_CONFIG,
)

__all__ = [
    'build_xmi',
    'xmi_attribute',
    'xmi_class',
    'xmi_enum',
    'xmi_package',
    'primitive_classes',
    'PRIMITIVE_NAMES',
    'INHERITANCE_XMI',
    'ENUM_XMI',
    'CIM_WIRES_XMI',
    'UTF16_DECLARED_XMI',
    'NO_DECLARATION_XMI',
    'NOT_XMI',
    'MALFORMED_XMI',
    'CIM_INSTANCE_RDF',
    'SAMPLE_CONFIG',
    'MINIMAL_CONFIG',
    'INVALID_URL_CONFIG',
]
