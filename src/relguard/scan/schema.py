"""Relation discovery for mapped entity types.

A relation is a one-to-one or one-to-many relationship owned by the scanned
type: SQLAlchemy reports these with direction ONETOMANY, ``uselist=False``
marking the one-to-one case. Many-to-one back references and many-to-many
associations are never relations here, and neither are relationships a
subclass inherits from a mapped parent.

Types can skip introspection entirely by declaring ``__relations__`` (a
sequence of RelationDescriptor, or a classmethod returning one) or by being
passed to ``register_relations``.
"""

from __future__ import annotations

from typing import Any

import structlog
from sqlalchemy import inspect
from sqlalchemy.exc import NoInspectionAvailable, SQLAlchemyError
from sqlalchemy.orm import Mapper, RelationshipDirection, RelationshipProperty

from relguard.scan.models import Cardinality, RelationDescriptor

logger = structlog.get_logger()

DECLARED_RELATIONS_ATTRIBUTE = "__relations__"


def classify_relationship(
    entity_type: type[Any], prop: RelationshipProperty[Any]
) -> RelationDescriptor | None:
    """Classify one mapper relationship, or None if it is not a relation."""
    if prop.parent.class_ is not entity_type:
        return None
    if prop.direction is not RelationshipDirection.ONETOMANY:
        return None
    if prop.secondary is not None:
        return None
    cardinality = Cardinality.MANY if prop.uselist else Cardinality.ONE
    return RelationDescriptor(
        name=prop.key,
        cardinality=cardinality,
        target_type=prop.mapper.class_,
    )


def mapper_for(entity_type: type[Any]) -> Mapper[Any] | None:
    """Configured mapper for a type, or None if the type is not mapped."""
    try:
        mapper = inspect(entity_type)
    except NoInspectionAvailable:
        return None
    if not isinstance(mapper, Mapper):
        return None
    return mapper


class RelationSchemaResolver:
    """Resolves and caches the declared relations of entity types.

    Holds no per-scan state; one resolver can serve every scan in a process.
    """

    def __init__(self) -> None:
        self._registry: dict[type[Any], tuple[RelationDescriptor, ...]] = {}

    def register(
        self, entity_type: type[Any], relations: list[RelationDescriptor] | tuple[RelationDescriptor, ...]
    ) -> None:
        """Declare relations explicitly, replacing anything introspected."""
        self._registry[entity_type] = tuple(relations)

    def clear(self) -> None:
        self._registry.clear()

    def relations(self, entity_type: type[Any]) -> tuple[RelationDescriptor, ...]:
        """Relations declared on ``entity_type``, in declaration order."""
        cached = self._registry.get(entity_type)
        if cached is None:
            cached = self._resolve(entity_type)
            self._registry[entity_type] = cached
        return cached

    def _resolve(self, entity_type: type[Any]) -> tuple[RelationDescriptor, ...]:
        declared = entity_type.__dict__.get(DECLARED_RELATIONS_ATTRIBUTE)
        if declared is not None:
            if isinstance(declared, classmethod):
                declared = getattr(entity_type, DECLARED_RELATIONS_ATTRIBUTE)()
            return tuple(declared)
        return self._introspect(entity_type)

    def _introspect(self, entity_type: type[Any]) -> tuple[RelationDescriptor, ...]:
        mapper = mapper_for(entity_type)
        if mapper is None:
            logger.debug("relation_scan_unmapped_type", model=entity_type.__name__)
            return ()

        try:
            props = list(mapper.relationships)
        except SQLAlchemyError as e:
            # Mapper configuration failed (e.g. unresolvable target class name)
            logger.warning(
                "relation_scan_mapper_unconfigured",
                model=entity_type.__name__,
                error=str(e),
            )
            return ()

        found: list[RelationDescriptor] = []
        for prop in props:
            descriptor = classify_relationship(entity_type, prop)
            if descriptor is not None:
                found.append(descriptor)
        return tuple(found)


default_resolver = RelationSchemaResolver()


def register_relations(
    entity_type: type[Any], relations: list[RelationDescriptor] | tuple[RelationDescriptor, ...]
) -> None:
    """Register explicit relations for ``entity_type`` on the default resolver."""
    default_resolver.register(entity_type, relations)
