"""
Shared data models for the CIM to Dgraph converter.

This module contains the Dgraph schema types and the conversion result used by
the schema deriver, the pipeline and the CLI.

Usage:
    from shared.models import Schema, SchemaPredicate, SchemaNode

    # Or import specific classes
    from shared.models.dgraph_types import SchemaPredicate
    from shared.models.conversion import SchemaConversionResult, SkippedItem
"""

from .dgraph_types import (
    Schema,
    SchemaNode,
    SchemaPredicate,
)
from .conversion import (
    SchemaConversionResult,
    SkippedItem,
)

__all__ = [
    # Dgraph schema types
    "Schema",
    "SchemaNode",
    "SchemaPredicate",
    # Conversion results
    "SchemaConversionResult",
    "SkippedItem",
]
