"""
Schema Creation Pipeline.

This module runs the complete schema creation flow for one XMI source:

    parse -> index -> resolve -> derive -> dump -> apply

The stages run sequentially within a single call and every intermediate
structure is built fresh per run.

Applying to the store happens only after derivation and both dumps have
completed, so a malformed model never causes the store to be wiped. The apply
phase itself is delegated to ``DgraphClient.apply_schema``: health check, one
drop-all, one alteration carrying the whole schema.

Usage Example:
    ```python
    from core.services.pipeline import SchemaPipeline, PipelineConfig
    from core.platform.dgraph_client import DgraphClient, DgraphConfig

    pipeline = SchemaPipeline(
        PipelineConfig(output_dir="./data"),
        client=DgraphClient(DgraphConfig(url="http://localhost:8080")),
    )
    result = pipeline.run("./data/schema.xmi")
    print(result.stats.get_summary())
    ```
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union
import logging
import time

from constants import OutputConfig
from formats.xmi.cim_models import CIMProfile
from formats.xmi.xmi_converter import CIMToDgraphConverter
from shared.models.conversion import SchemaConversionResult
from shared.models.dgraph_types import Schema

from ..platform.dgraph_client import DgraphClient


logger = logging.getLogger(__name__)


# =============================================================================
# Pipeline State
# =============================================================================

class PipelineState(str, Enum):
    """State of a schema pipeline."""
    IDLE = "idle"
    CONVERTING = "converting"
    WRITING = "writing"
    APPLYING = "applying"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class PipelineStats:
    """
    Statistics collected during pipeline execution.

    Attributes:
        classes: Number of non-abstract classes in the profile
        properties: Number of properties after inheritance flattening
        node_types: Number of derived node types
        predicates: Number of derived predicates
        skipped_classes: Classes excluded from node derivation
        warnings: Warning messages collected
        duration_seconds: Total execution time
        applied: Whether the schema was applied to the store
        state: Current pipeline state
    """
    classes: int = 0
    properties: int = 0
    node_types: int = 0
    predicates: int = 0
    skipped_classes: int = 0
    warnings: List[str] = field(default_factory=list)
    duration_seconds: float = 0.0
    applied: bool = False
    state: PipelineState = PipelineState.IDLE

    def get_summary(self) -> str:
        """Generate human-readable summary."""
        lines = [
            "Pipeline Statistics:",
            f"  State: {self.state.value}",
            f"  Classes: {self.classes:,} ({self.properties:,} properties)",
            f"  Node types: {self.node_types:,}",
            f"  Predicates: {self.predicates:,}",
            f"  Skipped classes: {self.skipped_classes:,}",
            f"  Warnings: {len(self.warnings)}",
            f"  Applied to store: {'yes' if self.applied else 'no'}",
        ]
        if self.duration_seconds > 0:
            lines.append(f"  Duration: {self.duration_seconds:.2f}s")
        return "\n".join(lines)


@dataclass
class PipelineConfig:
    """
    Configuration for the schema pipeline.

    Attributes:
        output_dir: Directory receiving the schema and profile dumps
        schema_file: File name of the schema dump
        profile_file: File name of the class/property audit dump
        index_identity: Index the identity predicate
        strict: Fail on references that are not found in the model
        show_progress: Display progress bars
    """
    output_dir: str = OutputConfig.DEFAULT_DIRECTORY
    schema_file: str = OutputConfig.SCHEMA_FILE
    profile_file: str = OutputConfig.PROFILE_FILE
    index_identity: bool = False
    strict: bool = False
    show_progress: bool = False

    @property
    def schema_path(self) -> Path:
        return Path(self.output_dir) / self.schema_file

    @property
    def profile_path(self) -> Path:
        return Path(self.output_dir) / self.profile_file


@dataclass
class PipelineResult:
    """
    Result from pipeline execution.

    Attributes:
        conversion: The derived schema and resolved profile
        stats: Execution statistics
        schema_path: Path of the written schema dump
        profile_path: Path of the written profile dump
    """
    conversion: SchemaConversionResult
    stats: PipelineStats = field(default_factory=PipelineStats)
    schema_path: Optional[Path] = None
    profile_path: Optional[Path] = None

    @property
    def schema(self) -> Schema:
        return self.conversion.schema


# =============================================================================
# Dump writers
# =============================================================================

def write_schema_dump(schema: Schema, path: Union[str, Path]) -> Path:
    """Write the schema text: predicates first, then node types."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(schema.to_schema_text())
    logger.info(f"Schema written to {path}")
    return path


def format_profile(profile: CIMProfile) -> str:
    """Render the class/property audit listing."""
    lines: List[str] = []
    for cim_class in profile.classes:
        lines.append(f"Class: {cim_class.name}")
        for prop in cim_class.properties:
            lines.append(f".  Property: {prop.name} Type: {prop.type} Upper {prop.upper}")
    return "\n".join(lines) + "\n" if lines else ""


def write_profile_dump(profile: CIMProfile, path: Union[str, Path]) -> Path:
    """Write every class with its resolved properties and types."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(format_profile(profile))
    logger.info(f"Profile written to {path}")
    return path


# =============================================================================
# Pipeline
# =============================================================================

class SchemaPipeline:
    """
    Run the schema creation flow for an XMI source.

    Without a client the pipeline stops after writing the dumps.
    """

    def __init__(self, config: Optional[PipelineConfig] = None, client: Optional[DgraphClient] = None):
        self.config = config or PipelineConfig()
        self.client = client
        self.state = PipelineState.IDLE

    def run(self, source: Union[str, Path], apply: bool = True) -> PipelineResult:
        """
        Execute the pipeline.

        Args:
            source: Path to the XMI file.
            apply: Apply the schema to the store when a client is set.

        Returns:
            PipelineResult with the conversion, dump paths and statistics.

        Raises:
            FileNotFoundError: If the source doesn't exist.
            XMIParseError: If the source cannot be decoded.
            UnresolvedReferenceError: In strict mode.
            SchemaApplyError: If applying to the store fails.
        """
        start = time.time()
        stats = PipelineStats()
        try:
            self._set_state(PipelineState.CONVERTING, stats)
            converter = CIMToDgraphConverter(
                index_identity=self.config.index_identity,
                strict=self.config.strict,
                show_progress=self.config.show_progress,
            )
            conversion = converter.convert_file(source)
            self._collect_stats(conversion, stats)

            self._set_state(PipelineState.WRITING, stats)
            result = PipelineResult(conversion=conversion, stats=stats)
            result.schema_path = write_schema_dump(conversion.schema, self.config.schema_path)
            if conversion.profile is not None:
                result.profile_path = write_profile_dump(conversion.profile, self.config.profile_path)

            if apply and self.client is not None:
                self._set_state(PipelineState.APPLYING, stats)
                self.client.apply_schema(conversion.schema.to_schema_text())
                stats.applied = True
            elif apply:
                logger.info("No Dgraph client configured; schema not applied")

            self._set_state(PipelineState.COMPLETED, stats)
            return result
        except Exception:
            self._set_state(PipelineState.FAILED, stats)
            raise
        finally:
            stats.duration_seconds = time.time() - start

    def _set_state(self, state: PipelineState, stats: PipelineStats) -> None:
        logger.debug(f"Pipeline state: {self.state.value} -> {state.value}")
        self.state = state
        stats.state = state

    @staticmethod
    def _collect_stats(conversion: SchemaConversionResult, stats: PipelineStats) -> None:
        stats.classes = conversion.class_count
        stats.properties = conversion.profile.property_count if conversion.profile else 0
        stats.node_types = conversion.node_count
        stats.predicates = conversion.predicate_count
        stats.skipped_classes = len(conversion.skipped_items)
        stats.warnings.extend(conversion.warnings)
