"""
RDF data commands: import and export of CIM instance data.

Neither command transfers data to or from the store yet. ``import`` parses the
RDF/XML files it finds and reports what they contain, ``export`` only reports
its target.
"""

import argparse
import logging

from constants import CLIDefaults, ExitCode
from formats.rdf.rdf_reader import RDFDataReader, RDFReadError

from ..helpers import format_count_summary, print_footer, print_header
from .base import BaseCommand


logger = logging.getLogger(__name__)


class ImportCommand(BaseCommand):
    """
    Read RDF/XML instance data.

    Usage:
        import [importpath]
    """

    def __init__(self, *args, reader: RDFDataReader = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.reader = reader or RDFDataReader()

    def execute(self, args: argparse.Namespace) -> int:
        self.setup_logging_from_config()
        import_path = getattr(args, 'importpath', None) or CLIDefaults.RDF_DATA_PATH

        try:
            files = self.reader.find_files(import_path)
        except FileNotFoundError as e:
            print(f"✗ {e}")
            return ExitCode.FILE_NOT_FOUND

        if not files:
            print(f"✗ No RDF files found in '{import_path}'")
            return ExitCode.FILE_NOT_FOUND

        print(f"Found {len(files)} RDF file(s) in {import_path}\n")
        failures = 0
        total_triples = 0
        for i, path in enumerate(files, 1):
            print(f"[{i}/{len(files)}] {path.name}")
            try:
                summary = self.reader.read_file(path)
            except RDFReadError as e:
                print(f"  ✗ {e}")
                failures += 1
                continue
            total_triples += summary.triple_count
            print(f"  ✓ {summary.triple_count} triples, {summary.subject_count} subjects")
            if summary.type_counts:
                print(format_count_summary(summary.type_counts, prefix="    "))

        print_header("IMPORT SUMMARY")
        print(f"Files read: {len(files) - failures}/{len(files)}")
        print(f"Triples: {total_triples}")
        print("Transfer into Dgraph is not implemented; no data was written.")
        print_footer()

        return ExitCode.VALIDATION_ERROR if failures else ExitCode.SUCCESS


class ExportCommand(BaseCommand):
    """
    Export instance data.

    Usage:
        export [exportpath]
    """

    def execute(self, args: argparse.Namespace) -> int:
        self.setup_logging_from_config()
        export_path = getattr(args, 'exportpath', None) or CLIDefaults.RDF_DATA_PATH
        print(f"Export to {export_path} is not implemented; nothing was written.")
        logger.info(f"Export requested for {export_path}")
        return ExitCode.SUCCESS
