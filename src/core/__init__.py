"""
Core infrastructure for the CIM to Dgraph converter.

This module provides the components shared by the CLI commands:

- Dgraph API client (DgraphConfig, DgraphClient, DgraphAPIError)
- Schema creation pipeline (SchemaPipeline, PipelineConfig, PipelineResult)
- Configuration constants (ExitCode, DgraphAPIConfig, etc.)

Usage:
    from core import DgraphConfig, DgraphClient, DgraphAPIError
    from core import SchemaPipeline, PipelineConfig
    from core.platform.dgraph_client import SchemaApplyError
"""

# Dgraph API client
from .platform.dgraph_client import (
    DgraphConfig,
    DgraphClient,
    DgraphAPIError,
    TransientAPIError,
    SchemaApplyError,
)

# Schema pipeline
from .services.pipeline import (
    PipelineState,
    PipelineStats,
    PipelineConfig,
    PipelineResult,
    SchemaPipeline,
)

# Re-export constants
from constants import (
    ExitCode,
    CLIDefaults,
    DgraphAPIConfig,
    OutputConfig,
    SchemaConfig,
    LoggingConfig,
)


__all__ = [
    # Dgraph API client
    "DgraphConfig",
    "DgraphClient",
    "DgraphAPIError",
    "TransientAPIError",
    "SchemaApplyError",
    # Pipeline
    "PipelineState",
    "PipelineStats",
    "PipelineConfig",
    "PipelineResult",
    "SchemaPipeline",
    # Constants
    "ExitCode",
    "CLIDefaults",
    "DgraphAPIConfig",
    "OutputConfig",
    "SchemaConfig",
    "LoggingConfig",
]
