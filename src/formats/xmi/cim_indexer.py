"""
Model Index Builder.

Walks the XMI document tree once, depth-first and pre-order, and extracts:

- every named ``uml:Class`` into the class index (abstract classes included)
- every named non-abstract class into the profile's class list
- every named ``uml:Enumeration`` into the enumeration index

Elements with an empty name are not registered, but their nested elements are
still visited. Unrecognized element types are ignored silently.

Usage:
    from formats.xmi.cim_indexer import ModelIndexBuilder

    index = ModelIndexBuilder().build(document)
    print(len(index.classes), len(index.enums), len(index.profile.classes))
"""

import logging

from constants import XMIVocabulary as V

from .cim_models import (
    CIMClass,
    CIMEnum,
    CIMEnumLiteral,
    CIMInheritance,
    CIMProperty,
    ModelIndex,
)
from .xmi_models import PackageElement, XMIDocument

logger = logging.getLogger(__name__)


class ModelIndexBuilder:
    """Build a ``ModelIndex`` from a parsed ``XMIDocument``."""

    def build(self, document: XMIDocument) -> ModelIndex:
        """
        Index all classes and enumerations of the document.

        Args:
            document: Parsed XMI tree.

        Returns:
            A new ModelIndex; nothing is shared with earlier builds.
        """
        index = ModelIndex()
        for element in document.iter_top_elements():
            self._visit(element, index)

        logger.info(
            f"Indexed {len(index.classes)} classes "
            f"({len(index.profile.classes)} non-abstract) and {len(index.enums)} enumerations"
        )
        return index

    def _visit(self, element: PackageElement, index: ModelIndex) -> None:
        if element.type == V.UML_CLASS and element.name:
            cim_class = self.build_class(element)
            if element.id in index.classes:
                logger.warning(f"Duplicate class identifier '{element.id}' ({element.name}) replaces earlier entry")
            index.classes[element.id] = cim_class
            if not element.is_abstract:
                index.profile.classes.append(cim_class)

        if element.type == V.UML_ENUMERATION and element.name:
            cim_enum = self.build_enum(element)
            if element.id in index.enums:
                logger.warning(f"Duplicate enumeration identifier '{element.id}' ({element.name}) replaces earlier entry")
            index.enums[element.id] = cim_enum

        for child in element.elements:
            self._visit(child, index)

    @staticmethod
    def build_class(element: PackageElement) -> CIMClass:
        """Create a class with its own properties and declared generalizations."""
        cim_class = CIMClass(name=element.name, id=element.id, is_abstract=element.is_abstract)

        for attribute in element.attributes:
            if attribute.type != V.UML_PROPERTY:
                continue
            cim_class.properties.append(CIMProperty(
                name=f"{element.name}.{attribute.name}",
                object=attribute.type_ref,
                lower=attribute.lower,
                upper=attribute.upper,
            ))

        for generalization in element.generalizations:
            if generalization.general:
                cim_class.inherits_from.append(CIMInheritance(id=generalization.general))

        return cim_class

    @staticmethod
    def build_enum(element: PackageElement) -> CIMEnum:
        """Create an enumeration from the element's literals."""
        return CIMEnum(
            id=element.id,
            name=element.name,
            literals=[CIMEnumLiteral(id=lit.id, name=lit.name) for lit in element.literals],
        )
