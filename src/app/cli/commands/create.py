"""
Create command: derive a Dgraph schema from an XMI file and apply it.
"""

import argparse
import logging
from pathlib import Path

from constants import CLIDefaults, ExitCode, FileExtensions, OutputConfig
from core.platform.dgraph_client import DgraphAPIError, SchemaApplyError
from core.services.pipeline import PipelineConfig, SchemaPipeline
from formats.xmi.cim_resolver import UnresolvedReferenceError
from formats.xmi.xmi_parser import UnknownCharsetError, XMIParseError

from ..helpers import print_footer, print_header
from .base import BaseCommand, print_conversion_summary


logger = logging.getLogger(__name__)


class CreateCommand(BaseCommand):
    """
    Create the store schema from a CIM profile.

    Usage:
        create [schemapath] [--output-dir DIR] [--dry-run] [--strict] [--progress]
    """

    def execute(self, args: argparse.Namespace) -> int:
        """Run the schema pipeline for the given source."""
        self.setup_logging_from_config()

        source = Path(getattr(args, 'schemapath', None) or CLIDefaults.SCHEMA_SOURCE_PATH)
        dry_run = getattr(args, 'dry_run', False)

        try:
            pipeline_config = self._pipeline_config(args)
        except ValueError as e:
            print(f"✗ Configuration error: {e}")
            return ExitCode.CONFIG_ERROR

        if not source.exists():
            print(f"✗ File not found: {source}")
            return ExitCode.FILE_NOT_FOUND
        if not source.is_file():
            print(f"✗ Not a file: {source}")
            return ExitCode.VALIDATION_ERROR
        if source.suffix.lower() not in FileExtensions.XMI_EXTENSIONS:
            print(f"⚠ Unexpected extension '{source.suffix}', expected one of {', '.join(FileExtensions.XMI_EXTENSIONS)}")

        client = None
        if not dry_run:
            try:
                client = self.get_client()
            except ValueError as e:
                print(f"✗ Configuration error: {e}")
                return ExitCode.CONFIG_ERROR

        print(f"Creating schema from {source}")
        pipeline = SchemaPipeline(pipeline_config, client=client)

        try:
            result = pipeline.run(source, apply=not dry_run)
        except UnknownCharsetError as e:
            print(f"✗ {e}")
            return ExitCode.VALIDATION_ERROR
        except XMIParseError as e:
            print(f"✗ Failed to decode {source}: {e}")
            return ExitCode.VALIDATION_ERROR
        except UnresolvedReferenceError as e:
            print(f"✗ {e}")
            return ExitCode.VALIDATION_ERROR
        except SchemaApplyError as e:
            print(f"✗ Applying schema failed during '{e.phase}': {e.message}")
            return ExitCode.API_ERROR
        except DgraphAPIError as e:
            print(f"✗ Dgraph API error: {e.message}")
            return ExitCode.API_ERROR
        except PermissionError as e:
            print(f"✗ Permission denied: {e}")
            return ExitCode.PERMISSION_DENIED

        print_conversion_summary(result.conversion, heading="SCHEMA SUMMARY")
        print(f"  Schema written to {result.schema_path}")
        if result.profile_path:
            print(f"  Profile written to {result.profile_path}")

        if dry_run:
            print("\n✓ Dry-run: schema not applied")
        else:
            print_header("DGRAPH")
            print(f"✓ Schema applied ({result.stats.predicates} predicates, {result.stats.node_types} types)")
            print_footer()
        return ExitCode.SUCCESS

    def _pipeline_config(self, args: argparse.Namespace) -> PipelineConfig:
        output = self.config_section('output')
        schema = self.config_section('schema')
        return PipelineConfig(
            output_dir=getattr(args, 'output_dir', None) or output.get('directory', OutputConfig.DEFAULT_DIRECTORY),
            schema_file=output.get('schema_file', OutputConfig.SCHEMA_FILE),
            profile_file=output.get('profile_file', OutputConfig.PROFILE_FILE),
            index_identity=_config_flag(schema, 'index_identity'),
            strict=_config_flag(schema, 'strict') or getattr(args, 'strict', False),
            show_progress=getattr(args, 'progress', False),
        )


def _config_flag(section: dict, key: str) -> bool:
    """Read a boolean setting from the 'schema' section."""
    value = section.get(key, False)
    if not isinstance(value, bool):
        raise ValueError(f"'schema.{key}' must be true or false, got {value!r}")
    return value
