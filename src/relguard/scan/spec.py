"""RelationSpec construction.

Depth is 1-indexed: at depth 1 a wanted relation is included with no
children, at depth N its children are built with depth N-1, and -1 keeps
expanding until the patterns or the schema run out.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import structlog

from relguard.scan.models import UNLIMITED_DEPTH, PatternPath, RelationSpec, SpecNode
from relguard.scan.patterns import child_patterns, is_wanted, parse_patterns
from relguard.scan.schema import RelationSchemaResolver, default_resolver

logger = structlog.get_logger()


def _child_depth(depth: int) -> int | None:
    """Depth for the next level down, or None when no children are built."""
    if depth == UNLIMITED_DEPTH:
        return UNLIMITED_DEPTH
    if depth > 1:
        return depth - 1
    return None


class RelationSpecBuilder:
    """Turns patterns and a depth bound into a RelationSpec for one entity type."""

    def __init__(self, resolver: RelationSchemaResolver | None = None) -> None:
        self.resolver = resolver or default_resolver

    def build(
        self,
        entity_type: type[Any],
        patterns: Iterable[str | PatternPath],
        depth: int = 1,
    ) -> RelationSpec:
        parsed = parse_patterns(patterns)
        spec = self._build(entity_type, parsed, depth)
        logger.debug(
            "relation_spec_built",
            model=entity_type.__name__,
            patterns=[str(p) for p in parsed],
            depth=depth,
            relations=list(spec),
        )
        return spec

    def _build(
        self,
        entity_type: type[Any],
        patterns: tuple[PatternPath, ...],
        depth: int,
    ) -> RelationSpec:
        spec: RelationSpec = {}
        if not patterns:
            return spec

        next_depth = _child_depth(depth)
        for relation in self.resolver.relations(entity_type):
            if not is_wanted(relation.name, patterns):
                continue

            sub_patterns = child_patterns(relation.name, patterns)
            children: RelationSpec = {}
            if next_depth is not None:
                children = self._build(relation.target_type, sub_patterns, next_depth)

            spec[relation.name] = SpecNode(
                relation=relation,
                depth=depth,
                patterns=sub_patterns,
                children=children,
            )
        return spec
