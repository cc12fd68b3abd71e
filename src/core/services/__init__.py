"""
Runtime services.

This package provides the schema creation pipeline:
parse, index, resolve, derive, dump and apply.
"""

from .pipeline import (
    # State & Config
    PipelineState,
    PipelineStats,
    PipelineConfig,
    PipelineResult,
    # Pipeline
    SchemaPipeline,
    # Dumps
    format_profile,
    write_profile_dump,
    write_schema_dump,
)

__all__ = [
    "PipelineState",
    "PipelineStats",
    "PipelineConfig",
    "PipelineResult",
    "SchemaPipeline",
    "format_profile",
    "write_profile_dump",
    "write_schema_dump",
]
