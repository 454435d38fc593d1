"""Storage round-trips used by the scanner and the cascade engine.

Loads go through the ORM so related instances come back hydrated; deletes
bypass the ORM unit of work and issue one Core DELETE per batch, then drop
the affected instances from the session identity map.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import structlog
from sqlalchemy import delete, inspect, tuple_
from sqlalchemy.orm import Mapper, selectinload
from sqlmodel import Session, select

from relguard.scan.models import Cardinality, RelationDescriptor, RelationSpec

logger = structlog.get_logger()


def primary_key(instance: Any) -> Any:
    """Identifier of an instance: a scalar for single-column keys, else a tuple."""
    mapper: Mapper[Any] = inspect(instance).mapper
    key = tuple(mapper.primary_key_from_instance(instance))
    return key[0] if len(key) == 1 else key


def _identity_key(identity: tuple[Any, ...]) -> Any:
    return identity[0] if len(identity) == 1 else identity


def _key_tuple(identifier: Any) -> tuple[Any, ...]:
    return identifier if isinstance(identifier, tuple) else (identifier,)


def _key_criteria(mapper: Mapper[Any], identifiers: Sequence[Any]) -> Any:
    columns = mapper.primary_key
    if len(columns) == 1:
        return columns[0].in_(list(identifiers))
    return tuple_(*columns).in_([_key_tuple(i) for i in identifiers])


def load_related(instance: Any, relation: RelationDescriptor) -> list[Any]:
    """Related instance(s) through one relation, always as a list."""
    related = getattr(instance, relation.name)
    if related is None:
        return []
    if relation.cardinality is Cardinality.MANY:
        return list(related)
    return [related]


def loader_options(entity_type: type[Any], spec: RelationSpec, parent: Any = None) -> list[Any]:
    """Compile a spec into selectinload chains, one per leaf path."""
    options: list[Any] = []
    mapper: Mapper[Any] = inspect(entity_type)
    for name, node in spec.items():
        if name not in mapper.relationships:
            continue
        attr = getattr(entity_type, name)
        load = parent.selectinload(attr) if parent is not None else selectinload(attr)
        if node.children:
            options.extend(loader_options(node.relation.target_type, node.children, load))
        else:
            options.append(load)
    return options


def hydrate(session: Session, instance: Any, spec: RelationSpec) -> Any:
    """Load every relation the spec reaches in one batched pass.

    The root is re-selected in ``session`` with populate_existing so
    collections that were already loaded are refreshed along with the rest
    of the tree. Returns the hydrated root: ``instance`` itself when it is
    attached to ``session``, otherwise that session's copy of it.
    Transient instances are returned unchanged.
    """
    state = inspect(instance)
    if state.identity is None:
        return instance
    entity_type = type(instance)
    options = loader_options(entity_type, spec)
    if not options:
        return instance

    mapper: Mapper[Any] = state.mapper
    statement = (
        select(entity_type)
        .where(_key_criteria(mapper, [_identity_key(state.identity)]))
        .options(*options)
        .execution_options(populate_existing=True)
    )
    return session.exec(statement).one()


def find(session: Session, entity_type: type[Any], identifier: Any) -> Any | None:
    return session.get(entity_type, identifier)


def _expunge_identities(session: Session, mapper: Mapper[Any], identifiers: Sequence[Any]) -> None:
    for identifier in identifiers:
        key = mapper.identity_key_from_primary_key(_key_tuple(identifier))
        obj = session.identity_map.get(key)
        if obj is not None:
            session.expunge(obj)


def batch_delete(session: Session, entity_type: type[Any], identifiers: Sequence[Any]) -> int:
    """Delete every row of ``entity_type`` whose key is in ``identifiers``."""
    if not identifiers:
        return 0
    mapper: Mapper[Any] = inspect(entity_type)
    statement = delete(mapper.local_table).where(_key_criteria(mapper, identifiers))
    result = session.connection().execute(statement)
    _expunge_identities(session, mapper, identifiers)
    deleted = int(result.rowcount)
    logger.debug(
        "cascade_batch_deleted",
        model=entity_type.__name__,
        requested=len(identifiers),
        deleted=deleted,
    )
    return deleted


def delete_instance(session: Session, instance: Any) -> int:
    """Delete a single instance by key; returns the rowcount."""
    return batch_delete(session, type(instance), [primary_key(instance)])
