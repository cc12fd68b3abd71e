"""
Centralized configuration constants for the CIM to Dgraph schema tool.

This module provides a single source of truth for all configuration constants,
default values, and limits used throughout the application.
"""

from enum import IntEnum
from typing import Final

# ============================================================================
# Exit Codes
# ============================================================================

class ExitCode(IntEnum):
    """Standard exit codes for CLI commands.

    Following Unix conventions:
    - 0: Success
    - 1: General error
    - 2: Validation/syntax error
    - 3+: Specific error categories
    """
    SUCCESS = 0
    ERROR = 1
    VALIDATION_ERROR = 2
    CONFIG_ERROR = 3
    API_ERROR = 4
    FILE_NOT_FOUND = 5
    PERMISSION_DENIED = 6


# ============================================================================
# CLI Defaults
# ============================================================================

class CLIDefaults:
    """Default paths used by the command-line interface."""

    CONFIG_PATH: Final[str] = "./config/config.json"
    """Location of the cimgraph config file."""

    SCHEMA_SOURCE_PATH: Final[str] = "./data/schema.xmi"
    """Default XMI source for the create command."""

    RDF_DATA_PATH: Final[str] = "./data/"
    """Default directory for RDF import/export."""

    VERSION: Final[str] = "development"


# ============================================================================
# XMI Document Vocabulary
# ============================================================================

class XMIVocabulary:
    """Element, attribute and type names used in XMI exports of a CIM profile."""

    ROOT: Final[str] = "XMI"
    MODEL: Final[str] = "Model"
    PACKAGED_ELEMENT: Final[str] = "packagedElement"
    OWNED_ATTRIBUTE: Final[str] = "ownedAttribute"
    GENERALIZATION: Final[str] = "generalization"
    OWNED_LITERAL: Final[str] = "ownedLiteral"
    TYPE_REFERENCE: Final[str] = "type"
    LOWER_VALUE: Final[str] = "lowerValue"
    UPPER_VALUE: Final[str] = "upperValue"

    UML_CLASS: Final[str] = "uml:Class"
    UML_ENUMERATION: Final[str] = "uml:Enumeration"
    UML_PROPERTY: Final[str] = "uml:Property"
    UML_PREFIX: Final[str] = "uml:"


class CharsetConfig:
    """Character sets accepted in the XML declaration."""

    DEFAULT_CHARSET: Final[str] = "utf-8"

    SINGLE_BYTE_CHARSETS: Final[tuple[str, ...]] = ("iso-8859-1", "windows-1252")
    """Both are decoded with the windows-1252 table (a superset of ISO-8859-1)."""

    SINGLE_BYTE_CODEC: Final[str] = "cp1252"


# ============================================================================
# Schema Derivation
# ============================================================================

class SchemaConfig:
    """Graph schema derivation constants."""

    IDENTITY_PREDICATE: Final[str] = "rdf.about"
    """Predicate added to every node type to hold the external identifying label."""

    IDENTITY_TYPE: Final[str] = "string"

    MIN_NODE_PROPERTIES: Final[int] = 2
    """Classes with fewer properties do not produce a node type."""

    UNBOUNDED: Final[str] = "*"
    """Upper cardinality marker that turns a predicate into a list."""

    OBJECT_REFERENCE_TYPE: Final[str] = "uid"
    """Store type used for anything that is not a mapped primitive."""


# ============================================================================
# Dgraph API Configuration
# ============================================================================

class DgraphAPIConfig:
    """Dgraph HTTP API configuration constants."""

    DEFAULT_URL: Final[str] = "http://localhost:8080"

    URL_ENV_VAR: Final[str] = "CIMGRAPH_DGRAPH_URL"

    DEFAULT_TIMEOUT_SECONDS: Final[int] = 30
    """Default HTTP request timeout."""

    DEFAULT_MAX_RETRIES: Final[int] = 3
    """Attempts for transient transport failures."""

    DEFAULT_RETRY_BACKOFF: Final[float] = 2.0
    """Exponential backoff multiplier (seconds)."""

    MAX_RETRY_WAIT_SECONDS: Final[int] = 30

    TRANSIENT_STATUS_CODES: Final[tuple[int, ...]] = (502, 503, 504)


# ============================================================================
# Output Files
# ============================================================================

class OutputConfig:
    """Locations of the schema and audit dumps."""

    DEFAULT_DIRECTORY: Final[str] = "./data"
    SCHEMA_FILE: Final[str] = "schema.txt"
    PROFILE_FILE: Final[str] = "output.txt"


# ============================================================================
# File Extensions
# ============================================================================

class FileExtensions:
    """Supported file extensions."""

    XMI_EXTENSIONS: Final[tuple] = ('.xmi', '.xml')
    """Valid XMI source file extensions."""

    RDF_EXTENSIONS: Final[tuple] = ('.rdf', '.xml', '.owl')
    """RDF/XML files picked up by the import command."""


# ============================================================================
# Logging
# ============================================================================

class LoggingConfig:
    """Logging configuration."""

    DEFAULT_LOG_LEVEL: Final[str] = "INFO"
    """Default logging level."""

    LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    """Default log format string."""

    DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"
    """Default date format for logs."""

    DEFAULT_FORMAT_STYLE: Final[str] = "text"
    """Human-readable formatter style."""

    JSON_DATE_FORMAT: Final[str] = "%Y-%m-%dT%H:%M:%S.%fZ"
    """ISO-8601 timestamp format for structured logs."""

    SUPPORTED_FORMATS: Final[tuple[str, ...]] = ("text", "json")
    """Supported formatter styles."""

    MAX_LOG_FILE_MB: Final[int] = 10
    """Maximum log file size before rotation (MB)."""

    LOG_BACKUP_COUNT: Final[int] = 5
    """Number of backup log files to keep."""

    ROTATION_ENABLED: Final[bool] = True
    """Enable log rotation by default when a file handler is configured."""
