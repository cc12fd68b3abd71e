#!/usr/bin/env python3
"""
CIM Graphing Tool

This is the main entry point for deriving a Dgraph schema from a CIM profile
exported as UML/XMI and applying it to a Dgraph instance.

Usage:
    python main.py create [schemapath] [--output-dir DIR] [--dry-run] [--strict]
    python main.py import [importpath]
    python main.py export [exportpath]

Global options:
    --config/-c <config.json>   Configuration file (optional)
    --url/-u <url>              Dgraph alpha URL
    --version/-v                Print the version
"""

import logging
import sys
from typing import Dict, List, Optional, Type

from app.cli.commands import BaseCommand, CreateCommand, ExportCommand, ImportCommand
from app.cli.parsers import create_argument_parser
from constants import ExitCode


logger = logging.getLogger(__name__)


COMMANDS: Dict[str, Type[BaseCommand]] = {
    'create': CreateCommand,
    'import': ImportCommand,
    'export': ExportCommand,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return ExitCode.ERROR

    command_class = COMMANDS[args.command]
    command = command_class(config_path=args.config, url=args.url)

    try:
        return int(command.execute(args))
    except ValueError as e:
        print(f"✗ Configuration error: {e}")
        return ExitCode.CONFIG_ERROR
    except FileNotFoundError as e:
        print(f"✗ {e}")
        return ExitCode.FILE_NOT_FOUND
    except PermissionError as e:
        print(f"✗ Permission denied: {e}")
        return ExitCode.PERMISSION_DENIED
    except KeyboardInterrupt:
        print("\n✗ Interrupted.")
        return 130
    except Exception as e:
        logger.exception(f"Unexpected error in '{args.command}'")
        print(f"✗ Unexpected error: {e}")
        return ExitCode.ERROR


if __name__ == '__main__':
    sys.exit(main())
