"""
CLI argument parser configuration.

This module defines the argument parser structure for all CLI commands.
It centralizes all argument parsing logic and provides a clean interface
for the main entry point.

Command Structure:
    - create (aliases: schema, s) [schemapath]   Derive and apply a Dgraph schema
    - import (alias: i) [importpath]             Read RDF/XML instance data
    - export (alias: e) [exportpath]             Export instance data
"""

import argparse

from constants import CLIDefaults


# ============================================================================
# Shared Flag Group Builders
# ============================================================================

def add_global_flags(parser: argparse.ArgumentParser) -> None:
    """Add flags accepted before any command."""
    parser.add_argument(
        '--config', '-c',
        default=CLIDefaults.CONFIG_PATH,
        help=f'Path to configuration file (default: {CLIDefaults.CONFIG_PATH}; optional)'
    )
    parser.add_argument(
        '--url', '-u',
        help='Dgraph alpha URL (overrides CIMGRAPH_DGRAPH_URL and the config file)'
    )
    parser.add_argument(
        '--version', '-v',
        action='version',
        version=f'%(prog)s {CLIDefaults.VERSION}'
    )


def add_output_flags(parser: argparse.ArgumentParser) -> None:
    """Add output-related flags."""
    parser.add_argument(
        '--output-dir', '-o',
        dest='output_dir',
        help='Directory for schema.txt and output.txt (default: ./data or output.directory)'
    )


def add_schema_flags(parser: argparse.ArgumentParser) -> None:
    """Add schema derivation flags."""
    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Derive the schema and write the dumps without contacting Dgraph'
    )
    parser.add_argument(
        '--strict',
        action='store_true',
        help='Fail on generalizations or types that are not defined in the model'
    )
    parser.add_argument(
        '--progress',
        action='store_true',
        help='Show progress bars'
    )


# ============================================================================
# Main Parser Factory
# ============================================================================

def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the main argument parser.

    Returns:
        Configured ArgumentParser with all subcommands.
    """
    parser = argparse.ArgumentParser(
        prog='cimgraph',
        description="CIM (UML/XMI) to Dgraph schema converter",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Derive the schema from ./data/schema.xmi and apply it
    %(prog)s create

    # Use another source and Dgraph instance
    %(prog)s --url http://dgraph:8080 schema models/cim16.xmi

    # Only write the dumps
    %(prog)s create models/cim16.xmi --dry-run --output-dir out/

    # Read RDF/XML instance data
    %(prog)s import ./data/
        """,
    )
    add_global_flags(parser)

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    _add_create_parser(subparsers)
    _add_import_parser(subparsers)
    _add_export_parser(subparsers)

    return parser


# ============================================================================
# Command Parsers
# ============================================================================

def _add_create_parser(subparsers: argparse._SubParsersAction) -> None:
    """Add the create command parser."""
    parser = subparsers.add_parser(
        'create',
        aliases=['schema', 's'],
        help='Create a Dgraph schema from an XMI file and apply it (drops all existing data)'
    )
    parser.set_defaults(command='create')
    parser.add_argument(
        'schemapath',
        nargs='?',
        default=CLIDefaults.SCHEMA_SOURCE_PATH,
        help=f'Path to the XMI file (default: {CLIDefaults.SCHEMA_SOURCE_PATH})'
    )
    add_output_flags(parser)
    add_schema_flags(parser)


def _add_import_parser(subparsers: argparse._SubParsersAction) -> None:
    """Add the import command parser."""
    parser = subparsers.add_parser(
        'import',
        aliases=['i'],
        help='Read RDF/XML instance data files'
    )
    parser.set_defaults(command='import')
    parser.add_argument(
        'importpath',
        nargs='?',
        default=CLIDefaults.RDF_DATA_PATH,
        help=f'RDF/XML file or directory (default: {CLIDefaults.RDF_DATA_PATH})'
    )


def _add_export_parser(subparsers: argparse._SubParsersAction) -> None:
    """Add the export command parser."""
    parser = subparsers.add_parser(
        'export',
        aliases=['e'],
        help='Export instance data'
    )
    parser.set_defaults(command='export')
    parser.add_argument(
        'exportpath',
        nargs='?',
        default=CLIDefaults.RDF_DATA_PATH,
        help=f'Target directory (default: {CLIDefaults.RDF_DATA_PATH})'
    )
