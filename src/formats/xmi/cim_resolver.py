"""
Inheritance and Type Resolver.

Resolution runs in two stages once the model index is complete:

1. Generalization flattening. Starting at a class's first generalization, the
   parent's own properties are appended to the class, then the walk continues
   through the parent's generalization. The walk only continues while the
   current parent has exactly one generalization, so only linear chains are
   followed.
2. Type resolution. Each property's referenced object is looked up in the
   class index, then in the enumeration index. A property matching neither
   is an opaque object reference.

Missing references are handled by an explicit policy: by default they are
logged and treated as unresolved; with ``strict=True`` they raise
``UnresolvedReferenceError``.
"""

import logging
from typing import List, Optional, Set

from tqdm import tqdm

from constants import SchemaConfig

from .cim_models import (
    CIMClass,
    CIMInheritance,
    CIMProfile,
    CIMProperty,
    ModelIndex,
    PropertyResolution,
)

logger = logging.getLogger(__name__)


class UnresolvedReferenceError(Exception):
    """Raised in strict mode when an identifier is not found in the model."""

    def __init__(self, kind: str, reference: str, owner: str):
        self.kind = kind
        self.reference = reference
        self.owner = owner
        super().__init__(f"Unresolved {kind} reference '{reference}' in {owner}")


class CIMResolver:
    """
    Flatten inheritance chains and resolve property types.

    The index is never modified: resolved classes are new objects, so a parent
    always contributes only the properties it declares itself.

    Example:
        >>> resolver = CIMResolver(index)
        >>> profile = resolver.resolve(index.profile)
        >>> [p.name for p in profile.get_class("B").properties]
        ['B.p3', 'A.p1', 'A.p2']
    """

    def __init__(self, index: ModelIndex, strict: bool = False, show_progress: bool = False):
        """
        Initialize the resolver.

        Args:
            index: Class and enumeration lookups from the index builder.
            strict: Raise on references that are not found in the model
                instead of treating them as unresolved.
            show_progress: Display a progress bar over the classes.
        """
        self.index = index
        self.strict = strict
        self.show_progress = show_progress

    def resolve(self, profile: CIMProfile) -> CIMProfile:
        """
        Resolve every class of the profile.

        Args:
            profile: Profile as produced by the index builder.

        Returns:
            A new profile whose classes carry inherited properties and
            resolved types.
        """
        resolved = CIMProfile()
        for cim_class in tqdm(
            profile.classes,
            desc="Resolving classes",
            unit="class",
            disable=not self.show_progress,
        ):
            flattened = self.flatten_generalizations(cim_class)
            self.resolve_property_types(flattened)
            resolved.classes.append(flattened)

        logger.info(
            f"Resolved {len(resolved.classes)} classes with {resolved.property_count} properties"
        )
        return resolved

    # -------------------------------------------------------------------------
    # Stage 1: generalization flattening
    # -------------------------------------------------------------------------

    def flatten_generalizations(self, cim_class: CIMClass) -> CIMClass:
        """
        Copy inherited properties onto a class.

        Returns:
            A new class: own properties, then each ancestor's own properties
            nearest parent first. ``inherits_from`` holds the followed chain.
        """
        properties = [p.copy_unresolved() for p in cim_class.properties]
        chain: List[CIMInheritance] = []

        parent_id = cim_class.first_parent_id
        if len(cim_class.inherits_from) > 1:
            logger.debug(
                f"{cim_class.name} declares {len(cim_class.inherits_from)} generalizations; "
                f"only the first is followed"
            )

        visited: Set[str] = {cim_class.id}
        while parent_id is not None:
            if parent_id in visited:
                logger.warning(f"Generalization cycle at '{parent_id}' while flattening {cim_class.name}")
                break
            visited.add(parent_id)

            parent = self._find_parent(parent_id, cim_class)
            if parent is None:
                break

            chain.append(CIMInheritance(id=parent.id, name=parent.name))
            properties.extend(p.copy_unresolved() for p in parent.properties)

            if len(parent.inherits_from) != 1:
                break
            parent_id = parent.inherits_from[0].id

        return CIMClass(
            name=cim_class.name,
            id=cim_class.id,
            inherits_from=chain,
            properties=properties,
            is_abstract=cim_class.is_abstract,
        )

    def _find_parent(self, parent_id: str, child: CIMClass) -> Optional[CIMClass]:
        parent = self.index.find_class(parent_id)
        if parent is not None:
            return parent
        if self.strict:
            raise UnresolvedReferenceError("generalization", parent_id, child.name)
        logger.warning(f"Parent class '{parent_id}' of {child.name} not found; inheritance chain stops")
        return None

    # -------------------------------------------------------------------------
    # Stage 2: type resolution
    # -------------------------------------------------------------------------

    def resolve_property_types(self, cim_class: CIMClass) -> None:
        """Resolve the types of a class's properties in place."""
        for prop in cim_class.properties:
            self.resolve_property(prop)

    def resolve_property(self, prop: CIMProperty) -> CIMProperty:
        """
        Resolve one property against the class index, then the enum index.

        Unresolved properties get the object-reference type marker.
        """
        referenced_class = self.index.find_class(prop.object)
        if referenced_class is not None:
            prop.type = referenced_class.name
            prop.resolution = PropertyResolution.CLASS
            return prop

        referenced_enum = self.index.find_enum(prop.object)
        if referenced_enum is not None:
            prop.type = referenced_enum.name
            prop.resolution = PropertyResolution.ENUM
            return prop

        if prop.object and self.strict:
            raise UnresolvedReferenceError("type", prop.object, prop.name)

        logger.debug(f"{prop.name}: '{prop.object}' not found, treated as object reference")
        prop.type = SchemaConfig.OBJECT_REFERENCE_TYPE
        prop.resolution = PropertyResolution.UNRESOLVED
        return prop
