"""
Dgraph schema data types.

This module defines the data structures that represent a Dgraph schema:
predicates, node types and the schema that groups them. These classes render
directly to the Dgraph schema alteration syntax.

Reference:
    https://dgraph.io/docs/dql/dql-schema/
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class SchemaPredicate:
    """
    A named, typed predicate of a Dgraph schema.

    Attributes:
        name: Predicate name (e.g. ``IdentifiedObject.name``).
        type: Dgraph type, possibly list-wrapped (``string``, ``[uid]``).
        index: Whether the predicate carries an index.
        tokenizer: Index tokenizer, required when ``index`` is set.

    Example:
        >>> SchemaPredicate("rdf.about", "string").to_schema_line()
        '<rdf.about>: string .'
        >>> SchemaPredicate("rdf.about", "string", index=True, tokenizer="exact").to_schema_line()
        '<rdf.about>: string @index(exact) .'
    """
    name: str
    type: str
    index: bool = False
    tokenizer: Optional[str] = None

    @property
    def is_list(self) -> bool:
        return self.type.startswith("[")

    def to_schema_line(self) -> str:
        """Render as a predicate declaration."""
        if self.index and self.tokenizer:
            return f"<{self.name}>: {self.type} @index({self.tokenizer}) ."
        return f"<{self.name}>: {self.type} ."

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"name": self.name, "type": self.type}
        if self.index:
            result["index"] = True
            result["tokenizer"] = self.tokenizer
        return result


@dataclass
class SchemaNode:
    """
    A node type of a Dgraph schema.

    Attributes:
        name: Node type name, the CIM class name.
        predicates: Predicates of the node keyed by name.

    Example:
        >>> node = SchemaNode("Breaker")
        >>> node.add_predicate(SchemaPredicate("rdf.about", "string"))
        >>> print(node.to_schema_block())
        type <Breaker> {
          rdf.about
        }
    """
    name: str
    predicates: Dict[str, SchemaPredicate] = field(default_factory=dict)

    def add_predicate(self, predicate: SchemaPredicate) -> None:
        if predicate.name not in self.predicates:
            self.predicates[predicate.name] = predicate

    def has_predicate(self, name: str) -> bool:
        return name in self.predicates

    @property
    def predicate_names(self) -> List[str]:
        return sorted(self.predicates)

    def to_schema_block(self) -> str:
        """Render as a type definition listing the predicate names."""
        lines = [f"type <{self.name}> {{"]
        lines.extend(f"  {name}" for name in self.predicate_names)
        lines.append("}")
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "predicates": self.predicate_names}


@dataclass
class Schema:
    """
    A complete Dgraph schema.

    Predicates are registered globally: the first registration of a name fixes
    its type. Rendering is sorted by name so that dumps are reproducible.
    """
    predicates: Dict[str, SchemaPredicate] = field(default_factory=dict)
    nodes: Dict[str, SchemaNode] = field(default_factory=dict)

    def register_predicate(self, predicate: SchemaPredicate) -> SchemaPredicate:
        """
        Register a predicate unless its name is already taken.

        Returns:
            The registered predicate for this name, which is the earlier one
            when the name was already present.
        """
        existing = self.predicates.get(predicate.name)
        if existing is not None:
            return existing
        self.predicates[predicate.name] = predicate
        return predicate

    def get_or_create_node(self, name: str) -> SchemaNode:
        node = self.nodes.get(name)
        if node is None:
            node = SchemaNode(name=name)
            self.nodes[name] = node
        return node

    def predicate_statements(self) -> List[str]:
        return [self.predicates[name].to_schema_line() for name in sorted(self.predicates)]

    def node_statements(self) -> List[str]:
        return [self.nodes[name].to_schema_block() for name in sorted(self.nodes)]

    def to_schema_text(self) -> str:
        """Render all predicates followed by all node types."""
        statements = self.predicate_statements() + self.node_statements()
        if not statements:
            return ""
        return "\n".join(statements) + "\n"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "predicates": [self.predicates[n].to_dict() for n in sorted(self.predicates)],
            "types": [self.nodes[n].to_dict() for n in sorted(self.nodes)],
        }
