"""
RDF package - CIM instance data in RDF/XML.

Components:
- rdf_reader: locate RDF/XML files and summarize their content with rdflib
"""

from .rdf_reader import (
    RDFDataReader,
    RDFFileSummary,
    RDFReadError,
    local_name,
)

__all__ = [
    'RDFDataReader',
    'RDFFileSummary',
    'RDFReadError',
    'local_name',
]
