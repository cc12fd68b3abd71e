"""
Conversion result types.

Holds the outcome of deriving a Dgraph schema from a CIM profile, together with
the items that were left out and any warnings raised along the way.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from .dgraph_types import Schema

if TYPE_CHECKING:
    from formats.xmi.cim_models import CIMProfile


@dataclass
class SkippedItem:
    """
    An item that did not produce schema output.

    Attributes:
        item_type: Kind of item (e.g. "class", "predicate").
        name: Name of the item.
        reason: Why it was skipped.
        element_id: XMI identifier of the item in the source document.
    """
    item_type: str
    name: str
    reason: str
    element_id: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {
            "type": self.item_type,
            "name": self.name,
            "reason": self.reason,
            "element_id": self.element_id,
        }


@dataclass
class SchemaConversionResult:
    """
    Result of converting a CIM profile to a Dgraph schema.

    Attributes:
        schema: The derived schema.
        profile: The resolved profile the schema was derived from.
        skipped_items: Classes excluded from node derivation.
        warnings: Predicate type conflicts and other non-fatal findings.
        class_count: Number of classes in the profile.
    """
    schema: Schema = field(default_factory=Schema)
    profile: Optional["CIMProfile"] = None
    skipped_items: List[SkippedItem] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    class_count: int = 0

    @property
    def node_count(self) -> int:
        return len(self.schema.nodes)

    @property
    def predicate_count(self) -> int:
        return len(self.schema.predicates)

    def get_summary(self) -> str:
        """Get a human-readable summary of the conversion."""
        lines = [
            "Schema Conversion Summary",
            "=" * 40,
            f"Classes in profile: {self.class_count}",
            f"Node types: {self.node_count}",
            f"Predicates: {self.predicate_count}",
            f"Skipped classes: {len(self.skipped_items)}",
            f"Warnings: {len(self.warnings)}",
        ]
        if self.warnings:
            lines.append("")
            lines.append("Warnings:")
            for warning in self.warnings[:10]:
                lines.append(f"  - {warning}")
            if len(self.warnings) > 10:
                lines.append(f"  ... and {len(self.warnings) - 10} more")
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "classCount": self.class_count,
            "nodeCount": self.node_count,
            "predicateCount": self.predicate_count,
            "skippedItems": [item.to_dict() for item in self.skipped_items],
            "warnings": list(self.warnings),
            "schema": self.schema.to_dict(),
        }
