"""Relation guard operations.

Entry points for callers:
- relation_tree: nested ids of dependents, bounded by depth
- is_safe_to_delete: True iff nothing depends on the instance one level down
- cascade_delete: delete the instance and every dependent, deepest first
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import object_session
from sqlmodel import Session

from relguard.core.errors import GuardError
from relguard.scan.cascade import CascadeDeleteEngine
from relguard.scan.loader import RelationTreeLoader
from relguard.scan.models import UNLIMITED_DEPTH, WILDCARD, PatternPath, ResultTree
from relguard.scan.schema import RelationSchemaResolver, default_resolver, mapper_for
from relguard.scan.spec import RelationSpecBuilder
from relguard.store.ops import find, primary_key

if TYPE_CHECKING:
    from relguard.config.models import GuardConfig

logger = structlog.get_logger()

DEFAULT_RELATIONS_ATTRIBUTE = "scan_relations"


def relations_are_empty(tree: ResultTree) -> bool:
    """True iff no node in the tree holds an id, at any depth."""
    return all(not node.ids and relations_are_empty(node.nested) for node in tree.values())


class RelationGuard:
    """Stateless scanner service.

    Safe to share between callers; every call builds its own spec and result
    tree. Scans on the same entity reuse nothing but the resolver cache.
    """

    def __init__(
        self,
        resolver: RelationSchemaResolver | None = None,
        relations_attribute: str = DEFAULT_RELATIONS_ATTRIBUTE,
    ) -> None:
        self.resolver = resolver or default_resolver
        self.relations_attribute = relations_attribute
        self.builder = RelationSpecBuilder(self.resolver)
        self.loader = RelationTreeLoader()
        self.engine = CascadeDeleteEngine()

    @classmethod
    def from_config(cls, config: GuardConfig) -> RelationGuard:
        return cls(relations_attribute=config.relations_attribute)

    def default_patterns(self, entity_type: type[Any]) -> list[str]:
        """Patterns declared on the model under the configured attribute, or ['*']."""
        patterns = getattr(entity_type, self.relations_attribute, None)
        if not patterns:
            return [WILDCARD]
        if isinstance(patterns, str):
            return [patterns]
        return list(patterns)

    def _check_model(self, instance: Any) -> type[Any]:
        entity_type = type(instance)
        if mapper_for(entity_type) is None:
            raise GuardError.unresolvable_type(entity_type.__name__, "class is not mapped")
        return entity_type

    def _session(self, session: Session | None, instance: Any) -> Session:
        resolved = session if session is not None else object_session(instance)
        if resolved is None:
            raise GuardError.capability_missing(type(instance).__name__, "an active session")
        return resolved  # type: ignore[return-value]

    def relation_tree(
        self,
        session: Session | None,
        instance: Any,
        depth: int = 1,
        patterns: Iterable[str | PatternPath] | None = None,
    ) -> ResultTree:
        """Nested ids of every dependent selected by ``patterns``, ``depth`` levels down."""
        entity_type = self._check_model(instance)
        if patterns is None:
            patterns = self.default_patterns(entity_type)
        spec = self.builder.build(entity_type, patterns, depth)
        return self.loader.load(self._session(session, instance), instance, spec)

    def is_safe_to_delete(self, session: Session | None, instance: Any) -> bool:
        return relations_are_empty(self.relation_tree(session, instance, depth=1))

    def cascade_preview(self, session: Session | None, instance: Any) -> ResultTree:
        """The full dependent closure a cascade delete would remove."""
        return self.relation_tree(session, instance, depth=UNLIMITED_DEPTH, patterns=[WILDCARD])

    def cascade_delete(self, session: Session | None, instance: Any) -> int:
        """Delete ``instance`` and all dependents; returns rows removed, root included."""
        session = self._session(session, instance)
        entity_type = type(instance)
        identifier = primary_key(instance)
        tree = self.cascade_preview(session, instance)
        try:
            deleted = self.engine.delete(session, instance, tree)
        except SQLAlchemyError as e:
            logger.error(
                "cascade_delete_failed",
                model=entity_type.__name__,
                id=identifier,
                error=str(e),
            )
            raise
        logger.info(
            "cascade_delete_completed",
            model=entity_type.__name__,
            id=identifier,
            deleted=deleted,
        )
        return deleted

    def find(self, session: Session, entity_type: type[Any], identifier: Any) -> Any:
        """Load one record or raise RecordNotFound."""
        if mapper_for(entity_type) is None:
            raise GuardError.unresolvable_type(entity_type.__name__, "class is not mapped")
        instance = find(session, entity_type, identifier)
        if instance is None:
            raise GuardError.record_not_found(entity_type.__name__, identifier)
        return instance


_default_guard = RelationGuard()


def get_default_guard() -> RelationGuard:
    return _default_guard


def set_default_guard(guard: RelationGuard) -> None:
    """Replace the guard used by model mixins (e.g. after loading config)."""
    global _default_guard
    _default_guard = guard
