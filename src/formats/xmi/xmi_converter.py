"""
CIM to Dgraph Converter.

This module derives a Dgraph schema from a CIM profile exported as XMI.

Conversion process:
1. Parse the XMI document
2. Build the class and enumeration indices
3. Flatten inheritance chains and resolve property types
4. Derive predicates and node types

Derivation rules:
- The identity predicate ``rdf.about: string`` is registered once and added
  to every node type.
- Only classes with more than one property become node types; the others are
  reported as skipped.
- Predicates are registered globally by name and the first registration fixes
  the type. A later class inferring a different type for the same name keeps
  the registered type and a warning is recorded.
- Classes sharing a name contribute to the same node type.

Usage:
    from formats.xmi.xmi_converter import CIMToDgraphConverter

    converter = CIMToDgraphConverter()
    result = converter.convert_file("data/schema.xmi")
    print(result.schema.to_schema_text())
"""

import logging
from pathlib import Path
from typing import Union

from tqdm import tqdm

from constants import SchemaConfig
from shared.models.conversion import SchemaConversionResult, SkippedItem
from shared.models.dgraph_types import Schema, SchemaPredicate

from .cim_indexer import ModelIndexBuilder
from .cim_models import CIMClass, CIMProfile
from .cim_resolver import CIMResolver
from .xmi_models import XMIDocument
from .xmi_parser import XMIParser
from .xmi_type_mapper import INDEX_TOKENIZERS, CIMTypeMapper

logger = logging.getLogger(__name__)


class CIMToDgraphConverter:
    """
    Convert CIM profiles to a Dgraph schema.

    Example:
        >>> converter = CIMToDgraphConverter()
        >>> result = converter.convert_file("schema.xmi")
        >>> print(f"Derived {result.node_count} node types")
    """

    def __init__(
        self,
        index_identity: bool = False,
        strict: bool = False,
        show_progress: bool = False,
    ):
        """
        Initialize the converter.

        Args:
            index_identity: Add an exact-match index to the identity predicate.
            strict: Fail on references that are not found in the model.
            show_progress: Display progress bars for long profiles.
        """
        self.index_identity = index_identity
        self.strict = strict
        self.show_progress = show_progress

        self._parser = XMIParser()
        self._type_mapper = CIMTypeMapper()

    def convert_file(self, file_path: Union[str, Path]) -> SchemaConversionResult:
        """
        Convert an XMI file to a Dgraph schema.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            XMIParseError: If the document cannot be decoded.
            UnresolvedReferenceError: In strict mode, for unknown references.
        """
        document = self._parser.parse_file(file_path)
        return self.convert_document(document)

    def convert_document(self, document: XMIDocument) -> SchemaConversionResult:
        """Index, resolve and derive the schema of a parsed document."""
        index = ModelIndexBuilder().build(document)
        resolver = CIMResolver(index, strict=self.strict, show_progress=self.show_progress)
        profile = resolver.resolve(index.profile)
        return self.convert_profile(profile)

    def convert_profile(self, profile: CIMProfile) -> SchemaConversionResult:
        """
        Derive a Dgraph schema from a resolved profile.

        Args:
            profile: Profile whose classes carry inherited properties and
                resolved types.

        Returns:
            SchemaConversionResult with the schema and any skipped classes.
        """
        result = SchemaConversionResult(profile=profile, class_count=len(profile.classes))
        schema = result.schema
        identity = schema.register_predicate(self._identity_predicate())

        for cim_class in tqdm(
            profile.classes,
            desc="Deriving schema",
            unit="class",
            disable=not self.show_progress,
        ):
            if len(cim_class.properties) < SchemaConfig.MIN_NODE_PROPERTIES:
                logger.debug(f"Skipping {cim_class.name}: {len(cim_class.properties)} property(ies)")
                result.skipped_items.append(SkippedItem(
                    item_type="class",
                    name=cim_class.name,
                    reason=f"has {len(cim_class.properties)} property(ies), "
                           f"at least {SchemaConfig.MIN_NODE_PROPERTIES} required",
                    element_id=cim_class.id,
                ))
                continue

            self._convert_class(cim_class, schema, identity, result)

        logger.info(
            f"Derived {result.node_count} node types and {result.predicate_count} predicates "
            f"({len(result.skipped_items)} classes skipped)"
        )
        return result

    def _identity_predicate(self) -> SchemaPredicate:
        identity_type = SchemaConfig.IDENTITY_TYPE
        return SchemaPredicate(
            name=SchemaConfig.IDENTITY_PREDICATE,
            type=identity_type,
            index=self.index_identity,
            tokenizer=INDEX_TOKENIZERS.get(identity_type) if self.index_identity else None,
        )

    def _convert_class(
        self,
        cim_class: CIMClass,
        schema: Schema,
        identity: SchemaPredicate,
        result: SchemaConversionResult,
    ) -> None:
        if cim_class.name in schema.nodes:
            logger.debug(f"Merging repeated class name {cim_class.name} into one node type")

        node = schema.get_or_create_node(cim_class.name)
        node.add_predicate(identity)

        for prop in cim_class.properties:
            mapping = self._type_mapper.map_property(prop)
            candidate = SchemaPredicate(name=prop.name, type=mapping.dgraph_type)
            registered = schema.register_predicate(candidate)

            if registered.type != candidate.type:
                message = (
                    f"Predicate '{prop.name}' already registered as {registered.type}; "
                    f"{cim_class.name} infers {candidate.type}"
                )
                logger.warning(message)
                result.warnings.append(message)

            node.add_predicate(registered)


def convert_xmi_file(file_path: Union[str, Path], **kwargs) -> SchemaConversionResult:
    """Convenience wrapper around ``CIMToDgraphConverter.convert_file``."""
    return CIMToDgraphConverter(**kwargs).convert_file(file_path)
