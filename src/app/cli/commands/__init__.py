"""
CLI command implementations.

This package contains the command modules:
- base.py: Base command class and protocols
- create.py: CreateCommand (schema creation)
- rdf.py: ImportCommand, ExportCommand (instance data)
"""

from .base import (
    BaseCommand,
    IDgraphClient,
    print_conversion_summary,
)

from .create import CreateCommand

from .rdf import (
    ImportCommand,
    ExportCommand,
)


__all__ = [
    # Base
    'BaseCommand',
    'IDgraphClient',
    'print_conversion_summary',
    # Schema
    'CreateCommand',
    # Instance data
    'ImportCommand',
    'ExportCommand',
]
